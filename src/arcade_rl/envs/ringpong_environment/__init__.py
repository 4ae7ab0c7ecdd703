# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""
RingPong Environment.

Example:
    >>> from arcade_rl.envs.ringpong_environment import RingPongEnvironment
    >>> from arcade_rl.core import Action
    >>>
    >>> env = RingPongEnvironment(seed=0)
    >>> env.reset()
    >>> env.step(Action.LEFT, 0.1)
"""

from .models import RADIUS, SPEED, THETA, RingPongState
from .ringpong_environment import RingPongEnvironment

__all__ = ["RADIUS", "SPEED", "THETA", "RingPongEnvironment", "RingPongState"]
