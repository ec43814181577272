from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List, Optional, Protocol, Sequence

from .grid import Cell, Coordinate

logger = logging.getLogger(__name__)


@dataclass
class GameStats:
    cleared: int
    points: int
    level: int
    is_loser: bool


@dataclass
class ScoreEntry:
    name: str
    value: int


class ScoreBoard:
    """In-memory scoreboard.

    Holds the pending score of a finished single-player game until a name
    is entered, the per-player stats of the last match, and the top scores.
    """

    def __init__(self, capacity: int = 10) -> None:
        self.capacity = capacity
        self.scores: List[ScoreEntry] = []
        self._unknown = 0
        self._stats: Dict[bool, GameStats] = {}

    def __iter__(self) -> Iterator[ScoreEntry]:
        return iter(self.scores)

    def set_unknown(self, score: int) -> None:
        self._unknown = score

    def get_unknown(self) -> int:
        return self._unknown

    def save(self, name: str) -> None:
        self.scores.append(ScoreEntry(name, self._unknown))
        self.scores.sort(key=lambda e: e.value, reverse=True)
        del self.scores[self.capacity:]
        logger.info("saved score %d for %s", self._unknown, name)

    def set_stats(self, is_player1: bool, stats: GameStats) -> None:
        self._stats[is_player1] = stats

    def get_stats(self, is_player1: bool) -> Optional[GameStats]:
        return self._stats.get(is_player1)


class View(str, Enum):
    NAME_ENTRY = "score_board_writer"
    WIN_BOARD = "win_board"


class Navigator(Protocol):
    def load(self, view: View) -> None: ...


class NullNavigator:
    """Navigator that only records and logs requested views."""

    def __init__(self) -> None:
        self.history: List[View] = []

    def load(self, view: View) -> None:
        self.history.append(view)
        logger.info("view requested: %s", view.value)


class RenderTarget(Protocol):
    """Receives layer redraws when a session flushes its dirty flags."""

    def draw_sealed(self, cells: Sequence[Cell]) -> None: ...

    def draw_movable(self, cells: Sequence[Cell], prediction: Optional[Coordinate]) -> None: ...

    def draw_preview(self, positions: Sequence[Coordinate], color: str, sprite: Optional[str]) -> None: ...
