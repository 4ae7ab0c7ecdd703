# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""Simulated control environments."""

from .mountaincar_environment import MountainCarEnvironment
from .ringpong_environment import RingPongEnvironment

__all__ = ["MountainCarEnvironment", "RingPongEnvironment"]
