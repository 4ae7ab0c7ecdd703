# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""
Agent interface and Monte-Carlo evaluation.

An agent only has to implement :meth:`Agent.policy`. Rolling out an episode
(:meth:`Agent.play_game`) and scoring the agent over many episodes
(:meth:`Agent.evaluate`) are shared by every agent and work with any
:class:`~arcade_rl.core.mdp.MarkovDecisionProcess`.

Example:
    >>> env = MountainCarEnvironment(seed=0)
    >>> agent = Tabular.from_file("tabular.safetensors")
    >>> score = agent.evaluate(env, episode_count=100, time_step=0.1)
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional, Type, TypeVar

import torch

from .errors import ModelLoadError, PolicyError
from .mdp import Action, MarkovDecisionProcess
from .model_io import PathLike, load_named_tensors, select_device

logger = logging.getLogger(__name__)

DEFAULT_TIME_STEP = 0.1
DEFAULT_EPISODE_COUNT = 1000

AgentT = TypeVar("AgentT", bound="Agent")


class Agent(ABC):
    """Base interface for agents playing a Markov decision process."""

    @abstractmethod
    def policy(self, env: MarkovDecisionProcess) -> Action:
        """
        Choose the action to take given the environment's current features.

        Raises:
            PolicyError: If the action cannot be computed.
        """

    def safe_policy(
        self, env: MarkovDecisionProcess, default: Action = Action.DO_NOTHING
    ) -> Action:
        """Return :meth:`policy`, or ``default`` when the policy fails."""
        try:
            return self.policy(env)
        except PolicyError as exc:
            logger.error("Agent could not compute the action to take: %s", exc)
            return default

    def play_game(
        self,
        env: MarkovDecisionProcess,
        time_step: float = DEFAULT_TIME_STEP,
        max_steps: Optional[int] = None,
    ) -> float:
        """
        Play from the current state until the end and return the total reward.

        The environment is not reset. ``max_steps`` optionally caps the
        episode length.
        """
        total_reward = 0.0
        steps = 0
        while not env.is_finished():
            if max_steps is not None and steps >= max_steps:
                logger.debug("Episode truncated after %d steps", steps)
                break
            total_reward += env.step(self.safe_policy(env), time_step)
            steps += 1
        return total_reward

    def evaluate(
        self,
        env: MarkovDecisionProcess,
        episode_count: int = DEFAULT_EPISODE_COUNT,
        time_step: float = DEFAULT_TIME_STEP,
        max_steps: Optional[int] = None,
    ) -> float:
        """
        Monte-Carlo evaluation of the agent.

        Resets ``env`` and plays ``episode_count`` episodes, returning the sum
        of their total rewards.
        """
        if episode_count < 0:
            raise ValueError(f"episode_count must be non-negative, got {episode_count}")

        result = 0.0
        for episode in range(episode_count):
            env.reset()
            episode_reward = self.play_game(env, time_step=time_step, max_steps=max_steps)
            logger.debug("Episode %d: reward=%s", episode, episode_reward)
            result += episode_reward

        logger.info(
            "Evaluated %s over %d episodes: total_reward=%s",
            type(self).__name__,
            episode_count,
            result,
        )
        return result

    @classmethod
    def from_tensors(cls: Type[AgentT], tensors: Dict[str, torch.Tensor]) -> AgentT:
        """
        Build the agent from a named-tensor mapping.

        Agents without learned parameters cannot be loaded.

        Raises:
            ModelLoadError: If the agent has no persisted form.
        """
        raise ModelLoadError(f"{cls.__name__} has no parameters to load from tensors")

    @classmethod
    def from_file(cls: Type[AgentT], path: PathLike, device: Optional[str] = None) -> AgentT:
        """
        Load the agent from a safetensors file.

        The device is selected once here (CUDA if available, CPU otherwise,
        unless ``device`` names one) and does not change the loaded values.

        Raises:
            ModelLoadError: If the file cannot be read or does not describe
                a valid agent.
        """
        tensors = load_named_tensors(path, select_device(device))
        agent = cls.from_tensors(tensors)
        logger.info("Loaded %s from %s", cls.__name__, path)
        return agent


class ConstantAgent(Agent):
    """Agent that always plays the same action."""

    def __init__(self, action: Action = Action.DO_NOTHING):
        self.action = action

    def policy(self, env: MarkovDecisionProcess) -> Action:
        return self.action


def play_step(
    env: MarkovDecisionProcess,
    agent: Agent,
    time_step: float = DEFAULT_TIME_STEP,
) -> float:
    """Run one driver tick: ask the agent (with fallback) and step the environment."""
    return env.step(agent.safe_policy(env), time_step)
