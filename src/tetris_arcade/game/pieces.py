from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, List, Optional, Tuple

from .grid import Board, Cell, Coordinate


class TetrominoType(IntEnum):
    O = 1  # Box
    T = 2  # TBox
    S = 3  # ZBox
    Z = 4  # RZBox
    L = 5  # LBox
    J = 6  # RLBox
    I = 7  # LineBox


class RotationState(IntEnum):
    TOP = 0
    LEFT = 1
    BOTTOM = 2
    RIGHT = 3

    def next(self) -> "RotationState":
        return RotationState((self + 1) % 4)


SHAPE_COLORS: Dict[TetrominoType, str] = {
    TetrominoType.O: "#ffff00",
    TetrominoType.T: "#9900ff",
    TetrominoType.S: "#ff0000",
    TetrominoType.Z: "#00ff00",
    TetrominoType.L: "#ffaa00",
    TetrominoType.J: "#0000ff",
    TetrominoType.I: "#00ffff",
}

BLOCK_SPRITES: Tuple[str, ...] = (
    "red.png",
    "blue.png",
    "green.png",
    "yellow.png",
    "darkblue.png",
    "pink.png",
)

# Spawn cells relative to the top-left origin and the index of the pivot cell.
SPAWN_CELLS: Dict[TetrominoType, Tuple[Tuple[Coordinate, ...], int]] = {
    TetrominoType.O: (((0, 0), (1, 0), (0, 1), (1, 1)), 0),
    TetrominoType.T: (((0, 0), (1, 0), (2, 0), (1, 1)), 1),
    TetrominoType.S: (((1, 0), (2, 0), (1, 1), (0, 1)), 2),
    TetrominoType.Z: (((0, 0), (1, 0), (1, 1), (2, 1)), 2),
    TetrominoType.L: (((0, 1), (1, 1), (2, 1), (2, 0)), 1),
    TetrominoType.J: (((0, 0), (0, 1), (1, 1), (2, 1)), 2),
    TetrominoType.I: (((0, 1), (1, 1), (2, 1), (3, 1)), 1),
}

# Offsets of the state being entered, relative to the current pivot.
# The first offset becomes the pivot of the new state; only I moves it.
_S = RotationState
ROTATION_TABLE: Dict[TetrominoType, Dict[RotationState, Tuple[Coordinate, ...]]] = {
    TetrominoType.O: {
        _S.TOP: ((0, 0), (1, 0), (0, 1), (1, 1)),
        _S.LEFT: ((0, 0), (1, 0), (0, 1), (1, 1)),
        _S.BOTTOM: ((0, 0), (1, 0), (0, 1), (1, 1)),
        _S.RIGHT: ((0, 0), (1, 0), (0, 1), (1, 1)),
    },
    TetrominoType.T: {
        _S.LEFT: ((0, 0), (0, -1), (0, 1), (1, 0)),
        _S.BOTTOM: ((0, 0), (-1, 0), (1, 0), (0, -1)),
        _S.RIGHT: ((0, 0), (0, -1), (0, 1), (-1, 0)),
        _S.TOP: ((0, 0), (-1, 0), (1, 0), (0, 1)),
    },
    TetrominoType.S: {
        _S.LEFT: ((0, 0), (1, 0), (1, 1), (0, -1)),
        _S.BOTTOM: ((0, 0), (1, 0), (0, 1), (-1, 1)),
        _S.RIGHT: ((0, 0), (-1, 0), (0, 1), (-1, -1)),
        _S.TOP: ((0, 0), (0, -1), (1, -1), (-1, 0)),
    },
    TetrominoType.Z: {
        _S.LEFT: ((0, 0), (0, 1), (1, 0), (1, -1)),
        _S.BOTTOM: ((0, 0), (-1, 0), (0, 1), (1, 1)),
        _S.RIGHT: ((0, 0), (1, 0), (1, -1), (0, 1)),
        _S.TOP: ((0, 0), (1, 0), (0, -1), (-1, -1)),
    },
    TetrominoType.L: {
        _S.LEFT: ((0, 0), (0, -1), (0, 1), (1, 1)),
        _S.BOTTOM: ((0, 0), (1, 0), (-1, 0), (-1, 1)),
        _S.RIGHT: ((0, 0), (0, 1), (0, -1), (-1, -1)),
        _S.TOP: ((0, 0), (-1, 0), (1, 0), (1, -1)),
    },
    TetrominoType.J: {
        _S.LEFT: ((0, 0), (0, 1), (0, -1), (1, -1)),
        _S.BOTTOM: ((0, 0), (-1, 0), (1, 0), (1, 1)),
        _S.RIGHT: ((0, 0), (0, -1), (0, 1), (-1, 1)),
        _S.TOP: ((0, 0), (1, 0), (-1, 0), (-1, -1)),
    },
    TetrominoType.I: {
        _S.LEFT: ((1, 0), (1, -1), (1, 1), (1, 2)),
        _S.BOTTOM: ((0, 1), (1, 1), (-1, 1), (-2, 1)),
        _S.RIGHT: ((-1, 0), (-1, 1), (-1, -1), (-1, -2)),
        _S.TOP: ((0, -1), (-1, -1), (1, -1), (2, -1)),
    },
}
del _S


def rotation_offsets(kind: TetrominoType, state: RotationState) -> Tuple[Coordinate, ...]:
    """Pivot-relative offsets of the four cells a piece occupies after rotating into `state`."""
    return ROTATION_TABLE[kind][state]


@dataclass
class Piece:
    """A falling tetromino: four cells, a pivot and a rotation state."""

    kind: TetrominoType
    cells: List[Cell]
    pivot: Coordinate
    rotation: RotationState = RotationState.TOP
    color: str = "#000000"
    sprite: Optional[str] = None

    @classmethod
    def spawn(cls, kind: TetrominoType, sprite: Optional[str] = None,
              rng: Optional[random.Random] = None) -> "Piece":
        """Build a piece anchored at the board's top-left origin."""
        if sprite is None:
            sprite = (rng or random).choice(BLOCK_SPRITES)
        color = SHAPE_COLORS[kind]
        positions, pivot_idx = SPAWN_CELLS[kind]
        cells = [Cell(x, y, color, sprite) for x, y in positions]
        return cls(kind=kind, cells=cells, pivot=positions[pivot_idx], color=color, sprite=sprite)

    # ---------- Queries ----------
    def positions(self) -> List[Coordinate]:
        return [c.position for c in self.cells]

    def leftmost_column(self) -> int:
        return min(c.x for c in self.cells)

    def rightmost_column(self) -> int:
        return max(c.x for c in self.cells)

    def topmost_row(self) -> int:
        return min(c.y for c in self.cells)

    def bottommost_row(self) -> int:
        return max(c.y for c in self.cells)

    def overlaps(self, board: Board) -> bool:
        return any(not board.is_occupiable(c.x, c.y) for c in self.cells)

    # ---------- Movement ----------
    def _translate(self, dx: int, dy: int) -> None:
        for cell in self.cells:
            cell.x += dx
            cell.y += dy
        self.pivot = (self.pivot[0] + dx, self.pivot[1] + dy)

    def move_left(self) -> None:
        self._translate(-1, 0)

    def move_right(self) -> None:
        self._translate(1, 0)

    def move_down(self) -> None:
        self._translate(0, 1)

    def move_up(self) -> None:
        self._translate(0, -1)

    def can_move_down(self, board: Board) -> bool:
        lowest: Dict[int, int] = {}
        for c in self.cells:
            if c.x not in lowest or c.y > lowest[c.x]:
                lowest[c.x] = c.y
        return all(board.is_occupiable(x, y + 1) for x, y in lowest.items())

    def can_move_left(self, board: Board) -> bool:
        leftmost: Dict[int, int] = {}
        for c in self.cells:
            if c.y not in leftmost or c.x < leftmost[c.y]:
                leftmost[c.y] = c.x
        return all(board.is_occupiable(x - 1, y) for y, x in leftmost.items())

    def can_move_right(self, board: Board) -> bool:
        rightmost: Dict[int, int] = {}
        for c in self.cells:
            if c.y not in rightmost or c.x > rightmost[c.y]:
                rightmost[c.y] = c.x
        return all(board.is_occupiable(x + 1, y) for y, x in rightmost.items())

    # ---------- Rotation ----------
    def rotated_positions(self) -> List[Coordinate]:
        px, py = self.pivot
        return [(px + dx, py + dy) for dx, dy in rotation_offsets(self.kind, self.rotation.next())]

    def can_rotate(self, board: Board) -> bool:
        if self.kind == TetrominoType.O:
            return False
        return all(board.is_occupiable(x, y) for x, y in self.rotated_positions())

    def rotate(self) -> None:
        if self.kind == TetrominoType.O:
            return
        positions = self.rotated_positions()
        self.rotation = self.rotation.next()
        self.cells = [Cell(x, y, self.color, self.sprite) for x, y in positions]
        self.pivot = positions[0]

    # ---------- Appearance ----------
    def paint(self, color: str, sprite: Optional[str] = None) -> None:
        self.color = color
        if sprite is not None:
            self.sprite = sprite
        for cell in self.cells:
            cell.color = self.color
            cell.sprite = self.sprite

    def seal_into(self, board: Board) -> List[Cell]:
        """Mark the piece's cells occupied on `board` and return them."""
        board.seal(self.cells)
        return self.cells

    def preview_positions(self) -> List[Coordinate]:
        """Cell positions normalized to the top-left of the piece's bounding box."""
        left, top = self.leftmost_column(), self.topmost_row()
        return [(c.x - left, c.y - top) for c in self.cells]
