from __future__ import annotations

import gymnasium as gym
import numpy as np

import tetris_arcade.env  # noqa: F401
from tetris_arcade.env.tetris_env import NOOP, TetrisEnv
from tetris_arcade.game import Command


def test_registered_env_reset_and_step():
    env = gym.make("TetrisArcade-v0")
    obs, info = env.reset(seed=0)
    assert env.observation_space.contains(obs)
    assert env.action_space.n == len(Command) + 1
    assert info["score"] == 0 and info["level"] == 1

    for _ in range(5):
        obs, reward, terminated, truncated, info = env.step(NOOP)
        assert reward == 0.0
        assert not terminated and not truncated
    assert info["steps"] == 5
    env.close()


def test_step_is_one_gravity_tick():
    env = TetrisEnv()
    obs, _ = env.reset(seed=3)
    rows_before = np.argwhere(obs["grid"] < 0)[:, 0]
    obs, *_ = env.step(NOOP)
    rows_after = np.argwhere(obs["grid"] < 0)[:, 0]
    assert np.array_equal(rows_after, rows_before + 1)


def test_same_seed_same_episode():
    a, b = TetrisEnv(), TetrisEnv()
    obs_a, _ = a.reset(seed=11)
    obs_b, _ = b.reset(seed=11)
    actions = [Command.HARD_DROP, Command.MOVE_LEFT, Command.ROTATE, NOOP] * 10
    for action in actions:
        obs_a, ra, *_ = a.step(int(action))
        obs_b, rb, *_ = b.step(int(action))
        assert ra == rb
    assert np.array_equal(obs_a["grid"], obs_b["grid"])
    assert obs_a["next_piece"] == obs_b["next_piece"]


def test_truncation_and_render():
    env = TetrisEnv(render_mode="rgb_array", max_episode_steps=3)
    env.reset(seed=1)
    truncated = False
    for _ in range(3):
        *_, truncated, _ = env.step(NOOP)
    assert truncated
    frame = env.render()
    assert frame.shape == (18 * 12, 10 * 12, 3)
    assert frame.dtype == np.uint8


def test_random_agent_runs():
    from tetris_arcade.rl.random_agent import run_random

    total = run_random(steps=50, seed=2)
    assert isinstance(total, float) and total >= 0.0
