# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""
arcade_rl: small physical control environments and the agents that play them.

Example:
    >>> from arcade_rl import Action, MountainCarEnvironment, Tabular
    >>>
    >>> env = MountainCarEnvironment(seed=0)
    >>> agent = Tabular.from_file("tabular.safetensors")
    >>> print(agent.evaluate(env, episode_count=100, time_step=0.1))
"""

from .agents import ConstantAgent, MultiLayerPerceptron, Tabular
from .core import Action, Agent, MarkovDecisionProcess, MDPGymEnv
from .envs import MountainCarEnvironment, RingPongEnvironment

__all__ = [
    "Action",
    "Agent",
    "ConstantAgent",
    "MDPGymEnv",
    "MarkovDecisionProcess",
    "MountainCarEnvironment",
    "MultiLayerPerceptron",
    "RingPongEnvironment",
    "Tabular",
]
