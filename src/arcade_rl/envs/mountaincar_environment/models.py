# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""
Data models for the MountainCar environment.

Physical constants of the car and the State snapshot returned by
``MountainCarEnvironment.state``.
"""

from __future__ import annotations

from dataclasses import dataclass

from arcade_rl.core.mdp import EpisodeState

MOTOR_POWER = 0.07
FRICTION = 0.2
GRAVITY = 0.15

# Range the starting position is drawn from on reset.
START_POSITION_RANGE = (0.5, 0.6)


@dataclass
class MountainCarState(EpisodeState):
    """
    State for MountainCar environment.

    Attributes:
        pos: Position of the car along the track parameter.
        speed: Speed of the car.
        goal_position: Position past which the episode is finished.
        arc_length_rescaling: Whether the position update is rescaled by the
            ground derivative factor.
    """

    pos: float = 0.0
    speed: float = 0.0
    goal_position: float = 0.0
    arc_length_rescaling: bool = True
