# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""
Markov Decision Process interface.

Every environment in arcade_rl derives from :class:`MarkovDecisionProcess` and
shares the :class:`Action` enumeration, so any agent can be evaluated against
any environment through the same four calls: ``reset``, ``step``,
``is_finished`` and ``feature``.
"""

from __future__ import annotations

import enum
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

import numpy as np
import torch
from gymnasium import spaces


class Action(enum.IntEnum):
    """
    Discrete action shared by all environments.

    The integer value is the multiplier applied in the dynamics equations.
    """

    LEFT = -1
    DO_NOTHING = 0
    RIGHT = 1

    @property
    def index(self) -> int:
        """Position of the action in a ``Discrete(3)`` space."""
        return self.value + 1

    @classmethod
    def from_index(cls, index: int) -> "Action":
        """Inverse of :attr:`index`: 0 -> LEFT, 1 -> DO_NOTHING, 2 -> RIGHT."""
        if index not in (0, 1, 2):
            raise ValueError(f"Invalid action index: {index}. Valid range: [0, 2]")
        return cls(index - 1)


@dataclass
class EpisodeState:
    """
    Bookkeeping snapshot of the running episode.

    Attributes:
        episode_id: Identifier renewed on every reset.
        step_count: Number of steps taken in the current episode.
        total_reward: Sum of the rewards returned by ``step`` since the reset.
        seed: Seed of the environment random generator, if any.
    """

    episode_id: Optional[str] = None
    step_count: int = 0
    total_reward: float = 0.0
    seed: Optional[int] = None


class MarkovDecisionProcess(ABC):
    """
    Base class for continuous-time decision processes.

    Subclasses implement the dynamics; this class owns the random generator
    used by ``reset`` and the episode bookkeeping exposed through ``state``.

    Args:
        seed: Seed of the generator used when ``reset`` is called without an
            explicit random source.
        state: Bookkeeping dataclass to populate, defaults to a bare
            :class:`EpisodeState`.
    """

    feature_size: int = 0

    def __init__(self, seed: Optional[int] = None, state: Optional[EpisodeState] = None):
        self.seed = seed
        self._rng = np.random.default_rng(seed)
        self._state = state if state is not None else EpisodeState()
        self._state.episode_id = str(uuid.uuid4())
        self._state.seed = seed

    @abstractmethod
    def reset(self, rng: Optional[np.random.Generator] = None) -> None:
        """Reinitialize the process to a starting configuration."""

    @abstractmethod
    def step(self, action: Action, time_step: float) -> float:
        """Advance the simulation by ``time_step`` seconds and return the reward."""

    @abstractmethod
    def is_finished(self) -> bool:
        """Indicate if the process has reached its terminal state."""

    @abstractmethod
    def feature(self) -> torch.Tensor:
        """Return the current state as a 1-D float tensor."""

    @property
    def state(self) -> EpisodeState:
        """Get current episode state."""
        return self._state

    @property
    def action_space(self) -> spaces.Discrete:
        return spaces.Discrete(len(Action))

    @property
    def observation_space(self) -> spaces.Box:
        return spaces.Box(
            low=-np.inf, high=np.inf, shape=(self.feature_size,), dtype=np.float32
        )

    # ------------------------------------------------------------------
    # Bookkeeping helpers for subclasses
    # ------------------------------------------------------------------

    def _generator(self, rng: Optional[np.random.Generator]) -> np.random.Generator:
        return rng if rng is not None else self._rng

    def _start_episode(self) -> None:
        self._state.episode_id = str(uuid.uuid4())
        self._state.step_count = 0
        self._state.total_reward = 0.0

    def _record_step(self, reward: float) -> None:
        self._state.step_count += 1
        self._state.total_reward += reward
