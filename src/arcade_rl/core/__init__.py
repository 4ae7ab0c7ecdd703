# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""Core interfaces: decision processes, agents and model persistence."""

from .agent import Agent, ConstantAgent, play_step
from .errors import (
    ArcadeError,
    MissingTensorError,
    ModelFormatError,
    ModelLoadError,
    PolicyError,
)
from .gym_adapter import MDPGymEnv
from .mdp import Action, EpisodeState, MarkovDecisionProcess

__all__ = [
    "Action",
    "Agent",
    "ArcadeError",
    "ConstantAgent",
    "EpisodeState",
    "MDPGymEnv",
    "MarkovDecisionProcess",
    "MissingTensorError",
    "ModelFormatError",
    "ModelLoadError",
    "PolicyError",
    "play_step",
]
