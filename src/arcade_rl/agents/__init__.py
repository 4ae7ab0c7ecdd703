# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""Agents that can be loaded from safetensors files and evaluated."""

from arcade_rl.core.agent import ConstantAgent

from .mlp import MultiLayerPerceptron
from .tabular import Tabular

__all__ = ["ConstantAgent", "MultiLayerPerceptron", "Tabular"]
