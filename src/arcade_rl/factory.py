# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""Build environments and agents from an :class:`EvaluationConfig`."""

import logging

from .agents import ConstantAgent, MultiLayerPerceptron, Tabular
from .config import EvaluationConfig
from .core.agent import Agent
from .core.mdp import MarkovDecisionProcess
from .envs import MountainCarEnvironment, RingPongEnvironment

logger = logging.getLogger(__name__)

ENVIRONMENTS = {
    "mountaincar": MountainCarEnvironment,
    "ringpong": RingPongEnvironment,
}

AGENTS = {
    "tabular": Tabular,
    "mlp": MultiLayerPerceptron,
}


def make_env(config: EvaluationConfig) -> MarkovDecisionProcess:
    try:
        env_cls = ENVIRONMENTS[config.env_id]
    except KeyError:
        raise ValueError(f"Unknown environment: {config.env_id}") from None
    logger.info("Creating %s environment (seed=%s)", config.env_id, config.seed)
    return env_cls(seed=config.seed)


def make_agent(config: EvaluationConfig) -> Agent:
    """
    Load the configured agent.

    Raises:
        ValueError: If a file-backed agent is requested without MODEL_PATH.
        ModelLoadError: If the model file is invalid.
    """
    if config.agent_type == "constant":
        return ConstantAgent()
    try:
        agent_cls = AGENTS[config.agent_type]
    except KeyError:
        raise ValueError(f"Unknown agent type: {config.agent_type}") from None
    if not config.model_path:
        raise ValueError(f"Agent type '{config.agent_type}' requires MODEL_PATH")
    return agent_cls.from_file(config.model_path, device=config.device)


def run_evaluation(config: EvaluationConfig) -> float:
    """Build the environment and agent of ``config`` and return the evaluation score."""
    env = make_env(config)
    agent = make_agent(config)
    return agent.evaluate(
        env,
        episode_count=config.episodes,
        time_step=config.time_step,
        max_steps=config.step_cap,
    )
