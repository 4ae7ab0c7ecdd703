"""Tests for environment-variable configuration and the object factory."""

import pytest
import torch
from pydantic import ValidationError

from arcade_rl.agents import ConstantAgent, MultiLayerPerceptron, Tabular
from arcade_rl.config import EvaluationConfig
from arcade_rl.envs import MountainCarEnvironment, RingPongEnvironment
from arcade_rl.factory import make_agent, make_env, run_evaluation


def test_defaults():
    config = EvaluationConfig.from_env({})

    assert config.env_id == "mountaincar"
    assert config.agent_type == "tabular"
    assert config.episodes == 1000
    assert config.time_step == 0.1
    assert config.step_cap == 1000
    assert config.device == "auto"


def test_values_are_read_from_environment():
    config = EvaluationConfig.from_env(
        {
            "ENV_ID": "ringpong",
            "AGENT_TYPE": "constant",
            "EPISODES": "12",
            "TIME_STEP": "0.05",
            "MAX_EPISODE_STEPS": "300",
            "SEED": "4",
            "DEVICE": "cpu",
        }
    )

    assert config.env_id == "ringpong"
    assert config.episodes == 12
    assert config.time_step == 0.05
    assert config.step_cap == 300
    assert config.seed == 4


@pytest.mark.parametrize(
    "environ",
    [{"ENV_ID": "cartpole"}, {"TIME_STEP": "0"}, {"EPISODES": "-3"}, {"AGENT_TYPE": "dqn"}],
)
def test_invalid_values_are_rejected(environ):
    with pytest.raises(ValidationError):
        EvaluationConfig.from_env(environ)


def test_make_env():
    assert isinstance(make_env(EvaluationConfig(env_id="mountaincar", seed=1)), MountainCarEnvironment)
    assert isinstance(make_env(EvaluationConfig(env_id="ringpong", seed=1)), RingPongEnvironment)


def test_make_agent_requires_model_path():
    with pytest.raises(ValueError):
        make_agent(EvaluationConfig(agent_type="mlp"))
    assert isinstance(make_agent(EvaluationConfig(agent_type="constant")), ConstantAgent)


def test_make_agent_loads_files(tmp_path):
    mlp_path = tmp_path / "mlp.safetensors"
    MultiLayerPerceptron(2, 3, [4]).save(mlp_path)
    tab_path = tmp_path / "tab.safetensors"
    Tabular(torch.zeros(10, 10), torch.ones(10, 10), torch.zeros(10, 10)).save(tab_path)

    mlp = make_agent(EvaluationConfig(agent_type="mlp", model_path=str(mlp_path), device="cpu"))
    tab = make_agent(EvaluationConfig(agent_type="tabular", model_path=str(tab_path), device="cpu"))

    assert isinstance(mlp, MultiLayerPerceptron)
    assert isinstance(tab, Tabular)


def test_run_evaluation_with_constant_agent():
    config = EvaluationConfig(agent_type="constant", episodes=3, max_steps=10, seed=0)
    assert run_evaluation(config) == -30.0


def test_zero_max_steps_disables_the_cap():
    assert EvaluationConfig.from_env({"MAX_EPISODE_STEPS": "0"}).step_cap is None


def test_default_config_evaluation_terminates():
    # DO_NOTHING never leaves the valley, so only the default cap ends episodes.
    config = EvaluationConfig.from_env({"AGENT_TYPE": "constant", "EPISODES": "2", "SEED": "0"})
    assert run_evaluation(config) == -2.0 * config.max_steps
