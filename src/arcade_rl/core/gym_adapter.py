# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""Gymnasium wrapper around a :class:`MarkovDecisionProcess`."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

import gymnasium as gym
import numpy as np

from .agent import DEFAULT_TIME_STEP
from .mdp import Action, MarkovDecisionProcess

logger = logging.getLogger(__name__)


class MDPGymEnv(gym.Env):
    """
    Expose an arcade_rl process through the Gymnasium ``Env`` API.

    Actions are indices of ``Discrete(3)`` (0: left, 1: do nothing, 2: right)
    and observations are the process feature vector as a float32 array.

    Args:
        mdp: The process to drive.
        time_step: Simulated seconds per ``step`` call.
        max_steps: Episode length after which ``truncated`` is reported.

    Example:
        >>> env = MDPGymEnv(MountainCarEnvironment(), max_steps=500)
        >>> obs, info = env.reset(seed=42)
        >>> obs, reward, terminated, truncated, info = env.step(2)
    """

    metadata = {"render_modes": []}

    def __init__(
        self,
        mdp: MarkovDecisionProcess,
        time_step: float = DEFAULT_TIME_STEP,
        max_steps: Optional[int] = None,
    ):
        super().__init__()
        self.mdp = mdp
        self.time_step = time_step
        self.max_steps = max_steps if max_steps and max_steps > 0 else None
        self.action_space = mdp.action_space
        self.observation_space = mdp.observation_space

    def reset(
        self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        rng = self.np_random if seed is not None else None
        self.mdp.reset(rng)
        return self._observation(), self._info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict[str, Any]]:
        if not self.action_space.contains(action):
            raise ValueError(f"Invalid action: {action}. Valid range: [0, {self.action_space.n - 1}]")

        reward = self.mdp.step(Action.from_index(int(action)), self.time_step)
        terminated = self.mdp.is_finished()
        truncated = (
            not terminated
            and self.max_steps is not None
            and self.mdp.state.step_count >= self.max_steps
        )
        if terminated or truncated:
            logger.info(
                "Episode %s ended - length=%d, total_reward=%s, terminated=%s",
                self.mdp.state.episode_id,
                self.mdp.state.step_count,
                self.mdp.state.total_reward,
                terminated,
            )
        return self._observation(), float(reward), terminated, truncated, self._info()

    def _observation(self) -> np.ndarray:
        return self.mdp.feature().detach().cpu().numpy().astype(np.float32)

    def _info(self) -> Dict[str, Any]:
        state = self.mdp.state
        return {
            "episode_id": state.episode_id,
            "step_count": state.step_count,
            "total_reward": state.total_reward,
        }
