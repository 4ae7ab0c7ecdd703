# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""
Evaluation settings read from environment variables.

    ENV_ID             mountaincar | ringpong        (default: mountaincar)
    AGENT_TYPE         tabular | mlp | constant      (default: tabular)
    MODEL_PATH         safetensors file of the agent
    EPISODES           number of evaluated episodes  (default: 1000)
    TIME_STEP          simulated seconds per step    (default: 0.1)
    MAX_EPISODE_STEPS  step cap per episode, 0 = none (default: 1000)
    SEED               seed of the environment generator
    DEVICE             auto | cpu | cuda             (default: auto)
"""

from __future__ import annotations

import os
from typing import Literal, Mapping, Optional

from pydantic import BaseModel, Field

DEFAULT_MAX_EPISODE_STEPS = 1000


class EvaluationConfig(BaseModel):
    """Everything needed to build an environment, an agent and score it."""

    env_id: Literal["mountaincar", "ringpong"] = "mountaincar"
    agent_type: Literal["tabular", "mlp", "constant"] = "tabular"
    model_path: Optional[str] = None
    episodes: int = Field(1000, ge=0, description="Number of evaluated episodes.")
    time_step: float = Field(0.1, gt=0.0, description="Simulated seconds per step.")
    max_steps: int = Field(
        DEFAULT_MAX_EPISODE_STEPS, ge=0, description="Step cap per episode, 0 disables it."
    )
    seed: Optional[int] = None
    device: str = "auto"

    @property
    def step_cap(self) -> Optional[int]:
        return self.max_steps if self.max_steps > 0 else None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EvaluationConfig":
        """Read the configuration from ``environ`` (default: ``os.environ``)."""
        environ = os.environ if environ is None else environ
        names = {
            "env_id": "ENV_ID",
            "agent_type": "AGENT_TYPE",
            "model_path": "MODEL_PATH",
            "episodes": "EPISODES",
            "time_step": "TIME_STEP",
            "max_steps": "MAX_EPISODE_STEPS",
            "seed": "SEED",
            "device": "DEVICE",
        }
        values = {field: environ[var] for field, var in names.items() if environ.get(var)}
        return cls(**values)
