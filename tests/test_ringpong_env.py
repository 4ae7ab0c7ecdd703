"""Tests for the RingPong environment dynamics."""

import math

import numpy as np
import pytest

from arcade_rl.core.mdp import Action
from arcade_rl.envs.ringpong_environment import RADIUS, THETA, RingPongEnvironment
from arcade_rl.envs.ringpong_environment.ringpong_environment import from_angle


@pytest.fixture(name="env")
def fixture_env():
    yield RingPongEnvironment(seed=123)


def test_new_environment_has_default_state(env: RingPongEnvironment):
    assert env.ball_pos.tolist() == [0.0, 0.0]
    assert env.ball_speed.tolist() == [1.0, 0.0]
    assert env.paddle_angle == 0.0
    assert not env.is_finished()


def test_reset_draws_unit_upward_direction(env: RingPongEnvironment):
    for _ in range(20):
        env.reset()
        assert env.ball_pos.tolist() == [0.0, 0.0]
        assert env.paddle_angle == 0.0
        assert np.hypot(*env.ball_speed) == pytest.approx(1.0)
        assert -1.0 <= env.ball_speed[0] < 1.0
        assert env.ball_speed[1] >= 0.0


def test_reset_uses_injected_generator(env: RingPongEnvironment):
    env.reset(np.random.default_rng(9))
    first = env.ball_speed.copy()
    env.reset(np.random.default_rng(9))
    assert env.ball_speed.tolist() == first.tolist()


def test_paddle_rotates_with_action(env: RingPongEnvironment):
    env.step(Action.LEFT, 0.1)
    assert env.paddle_angle == pytest.approx(-0.1)
    env.step(Action.RIGHT, 0.25)
    assert env.paddle_angle == pytest.approx(0.15)
    env.step(Action.DO_NOTHING, 0.25)
    assert env.paddle_angle == pytest.approx(0.15)


def test_step_rewards_survival(env: RingPongEnvironment):
    assert env.step(Action.DO_NOTHING, 0.1) == 1.0
    assert env.ball_pos == pytest.approx([10.0, 0.0])
    assert env.state.total_reward == 1.0


def test_head_on_bounce_follows_reflection_law(env: RingPongEnvironment):
    env.ball_pos = np.array([285.0, 0.0])
    env.ball_speed = np.array([1.0, 0.0])
    old_angle = 0.0

    t = env.collision_time(0.1)
    assert t is not None and 0.0 < t < 1.0

    env.step(Action.DO_NOTHING, 0.1)

    expected = from_angle(2.0 * env.paddle_angle + math.pi - old_angle)
    assert env.ball_speed == pytest.approx(expected, abs=1e-12)
    chord = RADIUS * math.cos(THETA)
    assert env.ball_pos == pytest.approx([2.0 * chord - 295.0, 0.0], abs=1e-9)
    assert not env.is_finished()


@pytest.mark.parametrize("paddle_angle, incoming", [(0.0, 0.05), (0.1, 0.1), (-0.2, -0.15)])
def test_oblique_bounce_follows_reflection_law(env: RingPongEnvironment, paddle_angle, incoming):
    env.paddle_angle = paddle_angle
    env.ball_pos = 285.0 * from_angle(paddle_angle)
    env.ball_speed = from_angle(incoming)

    t = env.collision_time(0.1)
    assert t is not None and 0.0 < t < 1.0

    env.step(Action.DO_NOTHING, 0.1)

    expected = from_angle(2.0 * paddle_angle + math.pi - incoming)
    assert env.ball_speed == pytest.approx(expected, abs=1e-12)


def test_ball_escapes_when_paddle_is_opposite(env: RingPongEnvironment):
    env.paddle_angle = math.pi
    steps = 0
    while not env.is_finished():
        assert np.hypot(*env.ball_pos) <= RADIUS
        env.step(Action.DO_NOTHING, 0.1)
        steps += 1
        assert steps < 100

    assert np.hypot(*env.ball_pos) > RADIUS
    assert steps == 31


def test_parallel_path_never_collides(env: RingPongEnvironment):
    env.ball_pos = np.array([100.0, 0.0])
    env.ball_speed = np.array([0.0, 1.0])
    assert env.collision_time(0.1) is None


def test_crossing_outside_paddle_is_ignored(env: RingPongEnvironment):
    # Paddle points up; the ball crosses the paddle line to the right of the
    # paddle end.
    env.paddle_angle = math.pi / 2.0
    env.ball_pos = np.array([200.0, 285.0])
    env.ball_speed = np.array([0.0, 1.0])
    assert env.collision_time(0.1) is None


def test_feature_layout(env: RingPongEnvironment):
    env.reset()
    env.step(Action.RIGHT, 0.1)
    feature = env.feature().tolist()

    assert len(feature) == 5
    assert feature == pytest.approx(
        [env.ball_pos[0], env.ball_pos[1], env.ball_speed[0], env.ball_speed[1], env.paddle_angle],
        rel=1e-6,
        abs=1e-6,
    )


def test_state_snapshot(env: RingPongEnvironment):
    env.step(Action.LEFT, 0.1)
    state = env.state
    assert state.step_count == 1
    assert state.ball_pos == pytest.approx(env.ball_pos.tolist())
    assert state.paddle_angle == pytest.approx(-0.1)
