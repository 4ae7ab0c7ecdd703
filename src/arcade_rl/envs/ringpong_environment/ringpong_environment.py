# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""
RingPong Environment Implementation.

A ball travels inside a disk of radius ``RADIUS``. The agent rotates a paddle,
an arc of half-angle ``THETA`` on the boundary, to bounce the ball back. The
episode ends when the ball leaves the disk; every step survived is worth +1.
"""

import logging
import math
from typing import Optional

import numpy as np
import torch

from arcade_rl.core.mdp import Action, MarkovDecisionProcess

from .models import RADIUS, SPEED, THETA, RingPongState

# Set up logging
logger = logging.getLogger(__name__)
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')


def from_angle(angle: float) -> np.ndarray:
    """Unit vector pointing at ``angle``."""
    return np.array([math.cos(angle), math.sin(angle)])


def perp_dot(a: np.ndarray, b: np.ndarray) -> float:
    """z component of the cross product of two 2D vectors."""
    return float(a[0] * b[1] - a[1] * b[0])


class RingPongEnvironment(MarkovDecisionProcess):
    """
    RingPong decision process.

    A new instance starts with the ball at the centre moving along +x and
    the paddle at angle 0; :meth:`reset` draws a random direction instead.

    Args:
        seed: Seed of the generator used to draw the ball direction.

    Example:
        >>> env = RingPongEnvironment(seed=0)
        >>> env.reset()
        >>> reward = env.step(Action.LEFT, 0.1)
        >>> print(env.ball_pos, env.paddle_angle, env.is_finished())
    """

    feature_size = 5

    def __init__(self, seed: Optional[int] = None):
        """Initialize RingPong environment."""
        super().__init__(seed=seed, state=RingPongState())

        self.ball_pos = np.zeros(2)
        self.ball_speed = np.array([1.0, 0.0])
        self.paddle_angle = 0.0

        logger.info("RingPongEnvironment initialized with seed=%s", seed)

    def reset(self, rng: Optional[np.random.Generator] = None) -> None:
        """Put the ball back at the centre with a random upward direction."""
        v_x = float(self._generator(rng).uniform(-1.0, 1.0))
        self.ball_pos = np.zeros(2)
        self.ball_speed = np.array([v_x, math.sqrt(1.0 - v_x**2)])
        self.paddle_angle = 0.0
        self._start_episode()
        logger.debug("Environment reset - Episode %s started with speed=%s", self._state.episode_id, self.ball_speed)

    def paddle_ends(self) -> tuple:
        """Positions of the two ends of the paddle."""
        return (
            RADIUS * from_angle(self.paddle_angle - THETA),
            RADIUS * from_angle(self.paddle_angle + THETA),
        )

    def collision_time(self, time_step: float) -> Optional[float]:
        """
        Fraction of this step's travel at which the ball meets the paddle.

        Returns ``None`` when the path is parallel to the paddle or crosses
        its line outside of the paddle segment.
        """
        end_1, end_2 = self.paddle_ends()
        paddle = end_2 - end_1
        travel = SPEED * time_step * self.ball_speed
        denominator = perp_dot(travel, paddle)
        if denominator == 0.0:
            return None
        offset = end_1 - self.ball_pos
        u = perp_dot(offset, travel) / denominator
        if not 0.0 <= u <= 1.0:
            return None
        return perp_dot(offset, paddle) / denominator

    def step(self, action: Action, time_step: float) -> float:
        """Rotate the paddle then move the ball, bouncing on the paddle."""
        self.paddle_angle += time_step * int(action)

        t = self.collision_time(time_step)
        if t is not None and 0.0 < t < 1.0:
            self.ball_pos = self.ball_pos + SPEED * t * time_step * self.ball_speed
            incoming = math.atan2(self.ball_speed[1], self.ball_speed[0])
            self.ball_speed = from_angle(2.0 * self.paddle_angle + math.pi - incoming)
            self.ball_pos = self.ball_pos + SPEED * (1.0 - t) * time_step * self.ball_speed
            logger.debug("Ball bounced at t=%s, new speed=%s", t, self.ball_speed)
        else:
            self.ball_pos = self.ball_pos + SPEED * time_step * self.ball_speed

        reward = 1.0
        self._record_step(reward)
        if self.is_finished():
            logger.debug(
                "Episode %s ended - ball escaped after %d steps",
                self._state.episode_id,
                self._state.step_count,
            )
        return reward

    def is_finished(self) -> bool:
        return float(np.hypot(*self.ball_pos)) > RADIUS

    def feature(self) -> torch.Tensor:
        return torch.tensor(
            [
                self.ball_pos[0],
                self.ball_pos[1],
                self.ball_speed[0],
                self.ball_speed[1],
                self.paddle_angle,
            ],
            dtype=torch.float32,
        )

    @property
    def state(self) -> RingPongState:
        """Get current environment state."""
        self._state.ball_pos = self.ball_pos.tolist()
        self._state.ball_speed = self.ball_speed.tolist()
        self._state.paddle_angle = self.paddle_angle
        return self._state
