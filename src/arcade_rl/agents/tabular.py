# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""
Tabular agent for the MountainCar environment.

The (position, speed) plane is cut into a 10 x 10 grid and one table of action
values is stored per action. The speed axis of the stored tables runs from
fast to slow, so the speed bucket is inverted before the lookup.
"""

from __future__ import annotations

import logging
import math
from typing import Dict, Tuple

import torch

from arcade_rl.core.agent import Agent
from arcade_rl.core.errors import ModelFormatError, PolicyError
from arcade_rl.core.mdp import Action, MarkovDecisionProcess
from arcade_rl.core.model_io import PathLike, pop_required, save_named_tensors

logger = logging.getLogger(__name__)

BUCKETS = 10
POSITION_WIDTH = 0.05
SPEED_OFFSET = 0.15
SPEED_WIDTH = 0.03

TABLE_KEYS = ("q_left", "q_nothing", "q_right")


def bucket(value: float, width: float, offset: float = 0.0) -> int:
    """Index of the bucket holding ``value``, clamped into ``[0, BUCKETS - 1]``."""
    raw = math.floor((value + offset) / width) if math.isfinite(value) else value
    if math.isnan(raw):
        return 0
    return int(min(max(raw, 0), BUCKETS - 1))


def discretize(position: float, speed: float) -> Tuple[int, int]:
    """Table indices of a (position, speed) pair."""
    i = bucket(position, POSITION_WIDTH)
    j = BUCKETS - 1 - bucket(speed, SPEED_WIDTH, SPEED_OFFSET)
    return i, j


class Tabular(Agent):
    """
    Greedy agent over three discretized action-value tables.

    Args:
        q_left: Values of the left action, shape (10, 10).
        q_nothing: Values of the do-nothing action, shape (10, 10).
        q_right: Values of the right action, shape (10, 10).

    Raises:
        ModelFormatError: If a table does not have shape (10, 10).
    """

    def __init__(self, q_left: torch.Tensor, q_nothing: torch.Tensor, q_right: torch.Tensor):
        for name, table in zip(TABLE_KEYS, (q_left, q_nothing, q_right)):
            if tuple(table.shape) != (BUCKETS, BUCKETS):
                raise ModelFormatError(
                    f"Table '{name}' must have shape ({BUCKETS}, {BUCKETS}), got {tuple(table.shape)}"
                )
        self.q_left = q_left
        self.q_nothing = q_nothing
        self.q_right = q_right

    def policy(self, env: MarkovDecisionProcess) -> Action:
        try:
            position, speed = env.feature().tolist()
            i, j = discretize(position, speed)
            q_l = float(self.q_left[i, j])
            q_n = float(self.q_nothing[i, j])
            q_r = float(self.q_right[i, j])
        except (ValueError, IndexError, RuntimeError) as exc:
            raise PolicyError(f"Tabular lookup failed: {exc}") from exc

        if q_l >= q_n and q_l >= q_r:
            return Action.LEFT
        elif q_r >= q_n and q_r >= q_l:
            return Action.RIGHT
        else:
            return Action.DO_NOTHING

    @classmethod
    def from_tensors(cls, tensors: Dict[str, torch.Tensor]) -> "Tabular":
        """
        Build the agent from the ``q_left``, ``q_nothing`` and ``q_right`` tensors.

        Raises:
            MissingTensorError: If one of the three keys is absent.
        """
        tensors = dict(tensors)
        q_left, q_nothing, q_right = (pop_required(tensors, key) for key in TABLE_KEYS)
        if tensors:
            logger.warning("Ignoring unexpected tensors in tabular model: %s", sorted(tensors))
        return cls(q_left, q_nothing, q_right)

    def to_tensors(self) -> Dict[str, torch.Tensor]:
        return dict(zip(TABLE_KEYS, (self.q_left, self.q_nothing, self.q_right)))

    def save(self, path: PathLike) -> None:
        """Write the three tables to a safetensors file."""
        save_named_tensors(self.to_tensors(), path)
