# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""
Data models for the RingPong environment.

Arena geometry constants and the State snapshot returned by
``RingPongEnvironment.state``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List

from arcade_rl.core.mdp import EpisodeState

RADIUS = 300.0
THETA = math.pi / 12.0
SPEED = 100.0


@dataclass
class RingPongState(EpisodeState):
    """
    State for RingPong environment.

    Attributes:
        ball_pos: Ball position [x, y], the arena centre is the origin.
        ball_speed: Unit direction of the ball [x, y].
        paddle_angle: Angle of the paddle centre on the arena boundary.
    """

    ball_pos: List[float] = field(default_factory=lambda: [0.0, 0.0])
    ball_speed: List[float] = field(default_factory=lambda: [1.0, 0.0])
    paddle_angle: float = 0.0
