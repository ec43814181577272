from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from tetris_arcade.game import (
    Command,
    DifficultySettings,
    GameConfig,
    GameSession,
    ManualClock,
    ScoringRules,
    TetrominoType,
)


NOOP = len(Command)


class TetrisEnv(gym.Env):
    """Single-player session driven one command per step.

    Actions 0..4 are the `Command` values, 5 is a no-op. After the command
    the manual gravity clock advances by one interval, so every step is
    exactly one gravity tick.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 settings: Optional[DifficultySettings] = None,
                 rules: Optional[ScoringRules] = None,
                 max_episode_steps: int = 10_000) -> None:
        super().__init__()
        self.config = config or GameConfig()
        self.settings = settings or DifficultySettings()
        self.rules = rules
        self.render_mode = render_mode
        self.max_episode_steps = int(max_episode_steps)

        self.clock = ManualClock()
        self.session = self._build_session(self.config.random_seed)

        h, w = self.config.height, self.config.width
        self.observation_space = spaces.Dict(
            {
                "grid": spaces.Box(low=-len(TetrominoType), high=1, shape=(h, w), dtype=np.int8),
                "next_piece": spaces.Discrete(len(TetrominoType) + 1),
                "level": spaces.Box(low=1, high=np.iinfo(np.int32).max, shape=(1,), dtype=np.int32),
            }
        )
        self.action_space = spaces.Discrete(len(Command) + 1)

        self._steps = 0

    def _build_session(self, seed: Optional[int]) -> GameSession:
        config = GameConfig(width=self.config.width, height=self.config.height, random_seed=seed)
        session = GameSession(config, self.rules, clock=self.clock)
        session.start()
        return session

    def _get_obs(self) -> Dict[str, Any]:
        nxt = self.session.next_movable
        return {
            "grid": self.session.get_state().astype(np.int8),
            "next_piece": int(nxt.kind) if nxt is not None else 0,
            "level": np.array([self.session.level], dtype=np.int32),
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.session.points,
            "level": self.session.level,
            "lines_cleared_total": self.session.lines_cleared_total,
            "combo": self.session.combo,
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.session = self._build_session(seed)
        self.session.reset(self.settings)
        self.session.enable()
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        action = int(action)
        before = self.session.points

        if action != NOOP:
            self.session.handle(Command(action))
        if not self.session.is_over:
            self.clock.step()

        self._steps += 1
        terminated = self.session.is_over
        truncated = self._steps >= self.max_episode_steps
        reward = float(self.session.points - before)
        return self._get_obs(), reward, terminated, truncated, self._get_info()

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        grid = self.session.get_state()
        cell = 12
        h, w = grid.shape
        img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
        for y in range(h):
            for x in range(w):
                v = int(grid[y, x])
                if v > 0:
                    color = (200, 200, 200)
                elif v < 0:
                    color = (70, 200, 120)
                else:
                    color = (30, 30, 36)
                img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
        return img

    def close(self) -> None:
        self.session.disable()
