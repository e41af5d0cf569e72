import numpy as np
import pytest
from gymnasium.utils.env_checker import check_env

from novastrike import ShooterEnv
from novastrike.entities import Enemy, EnemyKind, UnknownCharacterError


@pytest.fixture()
def env():
    e = ShooterEnv(max_steps=200)
    yield e
    e.close()


def test_passes_gymnasium_checker(env):
    check_env(env, skip_render_check=True)


def test_reset_and_step_shapes(env):
    obs, info = env.reset(seed=3)
    assert obs.shape == env.observation_space.shape
    assert obs.dtype == np.float32
    assert info["lives"] == 3 and info["stage"] == 1

    obs, reward, terminated, truncated, info = env.step(np.array([2, 1, 1]))
    assert env.observation_space.contains(obs)
    assert isinstance(reward, float)
    assert not terminated and not truncated
    assert info["step"] == 1
    # player moved right and up by nova's speed, and fired
    assert env.session.state.player.x == 405
    assert env.session.state.player.y == 495
    assert env.session.state.stats.shots_fired == 1


def test_truncates_at_max_steps():
    env = ShooterEnv(max_steps=5)
    env.reset(seed=0)
    for _ in range(4):
        *_, truncated, _info = env.step(np.array([0, 0, 0]))
        assert not truncated
    *_, truncated, _info = env.step(np.array([0, 0, 0]))
    assert truncated


def test_game_over_terminates_with_penalty(env):
    env.reset(seed=0)
    state = env.session.state
    state.lives = 1
    state.health = 10
    state.enemies.clear()
    state.enemies.append(Enemy(x=state.player.x, y=state.player.y, kind=EnemyKind.BASIC))

    _obs, reward, terminated, _truncated, info = env.step(np.array([0, 0, 0]))
    assert terminated
    assert info["lives"] == 0
    assert reward < -5.0


def test_character_option(env):
    env.reset(seed=0, options={"character": "viper"})
    assert env.session.state.character.name == "Viper"
    with pytest.raises(UnknownCharacterError):
        env.reset(seed=0, options={"character": "zephyr"})


def test_same_seed_same_trajectory():
    def rollout():
        env = ShooterEnv(max_steps=300)
        env.reset(seed=9)
        env.action_space.seed(9)
        total = 0.0
        for _ in range(300):
            obs, reward, terminated, truncated, _ = env.step(env.action_space.sample())
            total += reward
            if terminated or truncated:
                break
        return obs, total

    obs_a, total_a = rollout()
    obs_b, total_b = rollout()
    assert np.array_equal(obs_a, obs_b)
    assert total_a == total_b


def test_rgb_array_render():
    env = ShooterEnv(render_mode="rgb_array", width=320, height=240)
    env.reset(seed=1)
    frame = env.render()
    assert frame.shape == (240, 320, 3)
    assert frame.dtype == np.uint8
    env.close()
