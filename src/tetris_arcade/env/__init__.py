"""Gymnasium environments for Tetris Arcade."""

from __future__ import annotations

from gymnasium.envs.registration import register

# Register the single-player command environment (5 commands + no-op)
register(
    id="TetrisArcade-v0",
    entry_point="tetris_arcade.env.tetris_env:TetrisEnv",
)

__all__ = ["TetrisArcade-v0"]
