"""Tests for the rollout and Monte-Carlo evaluation protocol."""

import pytest
import torch

from arcade_rl.agents import Tabular
from arcade_rl.core.agent import Agent, ConstantAgent, play_step
from arcade_rl.core.errors import ModelLoadError, PolicyError
from arcade_rl.core.mdp import Action
from arcade_rl.envs.mountaincar_environment import FlatGround, MountainCarEnvironment
from arcade_rl.envs.ringpong_environment import RingPongEnvironment


class CountingEnv(MountainCarEnvironment):
    """Flat-ground MountainCar counting reset calls and recording actions."""

    def __init__(self):
        super().__init__(ground=FlatGround(), seed=0)
        self.resets = 0
        self.actions = []

    def reset(self, rng=None):
        super().reset(rng)
        self.resets += 1

    def step(self, action, time_step):
        self.actions.append(action)
        return super().step(action, time_step)


class FailingAgent(Agent):
    """Agent whose inference always fails."""

    def policy(self, env):
        raise PolicyError("malformed parameters")


class FailEveryOtherAgent(Agent):
    def __init__(self):
        self.calls = 0

    def policy(self, env):
        self.calls += 1
        if self.calls % 2 == 0:
            raise PolicyError("transient failure")
        return Action.RIGHT


def test_do_nothing_golden_score():
    env = MountainCarEnvironment(seed=2024)
    agent = ConstantAgent(Action.DO_NOTHING)

    score = agent.evaluate(env, episode_count=100, time_step=0.1, max_steps=200)

    assert score == -1.0 * 100 * 200


def test_evaluate_is_reproducible_for_fixed_seed():
    def score():
        env = MountainCarEnvironment(ground=FlatGround(), seed=11)
        return ConstantAgent(Action.RIGHT).evaluate(env, episode_count=20, time_step=0.1)

    assert score() == score()


def test_evaluate_runs_exactly_episode_count_episodes():
    env = CountingEnv()
    agent = ConstantAgent(Action.RIGHT)

    total = agent.evaluate(env, episode_count=7, time_step=0.1)

    assert env.resets == 7
    assert total == -float(len(env.actions))


def test_evaluate_with_no_episodes():
    env = CountingEnv()
    assert ConstantAgent().evaluate(env, episode_count=0) == 0.0
    assert env.resets == 0


def test_evaluate_rejects_negative_episode_count():
    with pytest.raises(ValueError):
        ConstantAgent().evaluate(CountingEnv(), episode_count=-1)


def test_play_game_does_not_reset():
    env = CountingEnv()
    env.reset()
    agent = ConstantAgent(Action.RIGHT)

    total = agent.play_game(env, time_step=0.1)

    assert env.resets == 1
    assert env.is_finished()
    assert total == env.state.total_reward
    assert total == -env.state.step_count


def test_play_game_on_finished_env_takes_no_step():
    env = CountingEnv()
    env.pos = env.goal_position + 1.0

    assert ConstantAgent(Action.RIGHT).play_game(env) == 0.0
    assert env.actions == []


def test_play_game_respects_step_cap():
    env = MountainCarEnvironment(seed=0)
    env.reset()
    assert ConstantAgent().play_game(env, time_step=0.1, max_steps=25) == -25.0
    assert env.state.step_count == 25


def test_ringpong_rewards_survival():
    env = RingPongEnvironment(seed=3)
    total = ConstantAgent().evaluate(env, episode_count=5, time_step=0.1, max_steps=1000)
    assert total > 0.0
    assert total == float(int(total))


def test_failed_policy_substitutes_do_nothing_and_continues(caplog):
    env = CountingEnv()
    agent = FailingAgent()

    with caplog.at_level("ERROR"):
        total = agent.evaluate(env, episode_count=2, time_step=0.1, max_steps=10)

    assert total == -20.0
    assert env.actions == [Action.DO_NOTHING] * 20
    assert "could not compute the action" in caplog.text


def test_transient_failures_do_not_end_the_episode():
    env = CountingEnv()
    env.reset()
    agent = FailEveryOtherAgent()

    agent.play_game(env, time_step=0.1, max_steps=6)

    assert env.actions == [Action.RIGHT, Action.DO_NOTHING] * 3


def test_safe_policy_custom_default():
    env = CountingEnv()
    assert FailingAgent().safe_policy(env, default=Action.LEFT) == Action.LEFT


def test_play_step_drives_one_tick():
    env = CountingEnv()
    env.reset()

    reward = play_step(env, FailingAgent(), time_step=0.1)

    assert reward == -1.0
    assert env.actions == [Action.DO_NOTHING]


def test_action_multipliers_and_indices():
    assert [int(a) for a in (Action.LEFT, Action.DO_NOTHING, Action.RIGHT)] == [-1, 0, 1]
    assert [Action.from_index(i) for i in range(3)] == [Action.LEFT, Action.DO_NOTHING, Action.RIGHT]
    assert Action.RIGHT.index == 2
    with pytest.raises(ValueError):
        Action.from_index(3)


def test_feature_tensor_is_shared_contract():
    for env in (MountainCarEnvironment(seed=0), RingPongEnvironment(seed=0)):
        feature = env.feature()
        assert isinstance(feature, torch.Tensor)
        assert feature.shape == (env.feature_size,)


def test_constant_agent_cannot_be_loaded_from_file(tmp_path):
    path = tmp_path / "tabular.safetensors"
    Tabular(torch.zeros(10, 10), torch.zeros(10, 10), torch.zeros(10, 10)).save(path)

    with pytest.raises(ModelLoadError, match="ConstantAgent"):
        ConstantAgent.from_file(path, device="cpu")
    with pytest.raises(ModelLoadError):
        ConstantAgent.from_tensors({})
