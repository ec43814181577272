from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


@dataclass
class GameConfig:
    """Board geometry and randomness for a session."""
    width: int = 10
    height: int = 18
    random_seed: Optional[int] = None
    preview_width: int = 4
    preview_height: int = 2
    game_over_rows: int = 2


@dataclass(frozen=True)
class DifficultySettings:
    """Per-session difficulty, supplied once at reset."""
    level_multiplier: float = 1.0
    speed_multiplier: float = 1.0
    movement_preview: bool = True
    random_colors: bool = False


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


PRESETS = {
    Difficulty.EASY: DifficultySettings(level_multiplier=1, speed_multiplier=1.0,
                                        movement_preview=True, random_colors=False),
    Difficulty.MEDIUM: DifficultySettings(level_multiplier=1.5, speed_multiplier=1.2,
                                          movement_preview=False, random_colors=False),
    Difficulty.HARD: DifficultySettings(level_multiplier=2, speed_multiplier=1.4,
                                        movement_preview=False, random_colors=True),
}


def settings_for(difficulty: Difficulty | str) -> DifficultySettings:
    return PRESETS[Difficulty(difficulty)]
