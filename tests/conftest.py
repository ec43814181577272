from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple

import pytest

from tetris_arcade.game import (
    Board,
    Cell,
    GameConfig,
    GameSession,
    InputRouter,
    NullNavigator,
    Piece,
    ScoreBoard,
    TetrominoType,
)


def fill_rows(board: Board, rows: Iterable[int], gaps: Iterable[int] = ()) -> None:
    """Seal every column of `rows` except the `gaps` columns."""
    gaps = set(gaps)
    for y in rows:
        board.seal([Cell(x, y, "#888888") for x in range(board.width) if x not in gaps])


def vertical_i() -> Piece:
    """An I piece standing upright in column 0, rows 0..3."""
    piece = Piece.spawn(TetrominoType.I, sprite="red.png")
    piece.rotate()
    piece.move_left()
    piece.move_left()
    return piece


class RecordingTarget:
    def __init__(self) -> None:
        self.calls: List[str] = []
        self.sealed: List[Cell] = []
        self.movable: List[Cell] = []
        self.prediction: Optional[Tuple[int, int]] = None
        self.preview: List[Tuple[int, int]] = []

    def draw_sealed(self, cells: Sequence[Cell]) -> None:
        self.calls.append("sealed")
        self.sealed = list(cells)

    def draw_movable(self, cells: Sequence[Cell], prediction: Optional[Tuple[int, int]]) -> None:
        self.calls.append("movable")
        self.movable = list(cells)
        self.prediction = prediction

    def draw_preview(self, positions: Sequence[Tuple[int, int]], color: str, sprite: Optional[str]) -> None:
        self.calls.append("preview")
        self.preview = list(positions)


@pytest.fixture
def config() -> GameConfig:
    return GameConfig(random_seed=1234)


@pytest.fixture
def scoreboard() -> ScoreBoard:
    return ScoreBoard()


@pytest.fixture
def navigator() -> NullNavigator:
    return NullNavigator()


@pytest.fixture
def router() -> InputRouter:
    return InputRouter()


@pytest.fixture
def session(config, scoreboard, navigator, router) -> GameSession:
    """A reset single-player session with an O piece in the top-left corner."""
    s = GameSession(config, scoreboard=scoreboard, navigator=navigator)
    s.start(router)
    s.reset()
    s.movable = Piece.spawn(TetrominoType.O, sprite="red.png")
    return s
