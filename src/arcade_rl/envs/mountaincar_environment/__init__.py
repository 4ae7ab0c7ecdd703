# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""
MountainCar Environment.

Example:
    >>> from arcade_rl.envs.mountaincar_environment import MountainCarEnvironment
    >>> from arcade_rl.core import Action
    >>>
    >>> env = MountainCarEnvironment(seed=0)
    >>> env.reset()
    >>> while not env.is_finished():
    ...     env.step(Action.RIGHT, 0.1)
"""

from .ground import CubicBezierGround, FlatGround, Ground, RockyRoad
from .models import FRICTION, GRAVITY, MOTOR_POWER, MountainCarState
from .mountaincar_environment import MountainCarEnvironment

__all__ = [
    "CubicBezierGround",
    "FRICTION",
    "FlatGround",
    "GRAVITY",
    "Ground",
    "MOTOR_POWER",
    "MountainCarEnvironment",
    "MountainCarState",
    "RockyRoad",
]
