# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""
MountainCar Environment Implementation.

A point mass on a one dimensional curved track, pushed by a weak motor and
pulled back by gravity and friction. The car has to reach the top of the
right hill; every step costs a reward of -1.
"""

import logging
from typing import Optional

import numpy as np
import torch

from arcade_rl.core.mdp import Action, MarkovDecisionProcess

from .ground import ROCKY_ROAD_GOAL, Ground, RockyRoad
from .models import (
    FRICTION,
    GRAVITY,
    MOTOR_POWER,
    START_POSITION_RANGE,
    MountainCarState,
)

# Set up logging
logger = logging.getLogger(__name__)
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')


class MountainCarEnvironment(MarkovDecisionProcess):
    """
    MountainCar decision process.

    At each step, with ``a`` the action multiplier:

        speed += dt * (a * MOTOR_POWER - slope(pos) * GRAVITY - speed * FRICTION)
        pos += dt * speed * derivative_factor(pos)

    The derivative factor is only applied when ``arc_length_rescaling`` is
    true; the choice is fixed for the lifetime of the instance.

    Args:
        ground: Track the car drives on (default: :class:`RockyRoad`).
        goal_position: The episode is finished once ``pos`` exceeds it.
        arc_length_rescaling: Rescale the position update by the ground
            derivative factor.
        seed: Seed of the generator used to draw starting positions.

    Example:
        >>> env = MountainCarEnvironment(seed=0)
        >>> env.reset()
        >>> reward = env.step(Action.RIGHT, 0.1)
        >>> print(env.pos, env.speed, env.is_finished())
    """

    feature_size = 2

    def __init__(
        self,
        ground: Optional[Ground] = None,
        goal_position: float = ROCKY_ROAD_GOAL,
        arc_length_rescaling: bool = True,
        seed: Optional[int] = None,
    ):
        """Initialize MountainCar environment."""
        super().__init__(seed=seed, state=MountainCarState())

        self.ground = ground if ground is not None else RockyRoad()
        self.goal_position = goal_position
        self.arc_length_rescaling = arc_length_rescaling

        self.pos = float(self._rng.uniform(*START_POSITION_RANGE))
        self.speed = 0.0

        logger.info(
            "MountainCarEnvironment initialized with ground=%s, goal_position=%s, "
            "arc_length_rescaling=%s, seed=%s",
            type(self.ground).__name__,
            goal_position,
            arc_length_rescaling,
            seed,
        )

    def reset(self, rng: Optional[np.random.Generator] = None) -> None:
        """Draw a new starting position and stop the car."""
        self.pos = float(self._generator(rng).uniform(*START_POSITION_RANGE))
        self.speed = 0.0
        self._start_episode()
        logger.debug("Environment reset - Episode %s started at pos=%s", self._state.episode_id, self.pos)

    def step(self, action: Action, time_step: float) -> float:
        """Integrate the car dynamics over ``time_step`` seconds."""
        slope = self.ground.slope(self.pos)
        self.speed += time_step * (
            int(action) * MOTOR_POWER - slope * GRAVITY - self.speed * FRICTION
        )
        if self.arc_length_rescaling:
            self.pos += time_step * self.speed * self.ground.derivative_factor(self.pos)
        else:
            self.pos += time_step * self.speed

        reward = -1.0
        self._record_step(reward)
        if self.is_finished():
            logger.debug(
                "Episode %s reached the goal - length=%d, total_reward=%s",
                self._state.episode_id,
                self._state.step_count,
                self._state.total_reward,
            )
        return reward

    def is_finished(self) -> bool:
        return self.pos > self.goal_position

    def feature(self) -> torch.Tensor:
        return torch.tensor([self.pos, self.speed], dtype=torch.float32)

    @property
    def state(self) -> MountainCarState:
        """Get current environment state."""
        self._state.pos = self.pos
        self._state.speed = self.speed
        self._state.goal_position = self.goal_position
        self._state.arc_length_rescaling = self.arc_length_rescaling
        return self._state
