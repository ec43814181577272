from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

import numpy as np


Coordinate = Tuple[int, int]

GARBAGE_COLOR = "#CCCCCC"
GARBAGE_SPRITE = "gray.png"


@dataclass
class Cell:
    """A single unit block, addressed by board column `x` and row `y` (row 0 is the top)."""

    x: int
    y: int
    color: str = "#000000"
    sprite: Optional[str] = None
    garbage: bool = False

    @property
    def position(self) -> Coordinate:
        return self.x, self.y


class Board:
    """Fixed-size occupancy grid plus the collection of placed cells.

    `sealed` holds 0 for empty and 1 for occupied positions. `cells` holds
    one `Cell` per occupied position; both are only changed together so a
    position is set in `sealed` exactly when a placed cell sits on it.
    """

    def __init__(self, width: int = 10, height: int = 18) -> None:
        self.width = int(width)
        self.height = int(height)
        self.sealed = np.zeros((self.height, self.width), dtype=np.int8)
        self.cells: List[Cell] = []

    def reset(self) -> None:
        self.sealed.fill(0)
        self.cells = []

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_occupiable(self, x: int, y: int) -> bool:
        return self.is_inside(x, y) and self.sealed[y, x] == 0

    def seal(self, cells: Iterable[Cell]) -> None:
        """Mark each cell's position occupied and keep the cell. Assumes the positions are free."""
        for cell in cells:
            self.sealed[cell.y, cell.x] = 1
            self.cells.append(cell)

    def row_sum(self, row: int) -> int:
        return int(self.sealed[row].sum())

    def clear_full_rows(self) -> int:
        """Remove every full row, scanning from the top, and return how many were removed."""
        cleared = 0
        for row in range(self.height):
            if self.row_sum(row) != self.width:
                continue
            remaining = np.delete(self.sealed, row, axis=0)
            self.sealed = np.vstack((np.zeros((1, self.width), dtype=np.int8), remaining))
            self.cells = [c for c in self.cells if c.y != row]
            for cell in self.cells:
                if cell.y < row:
                    cell.y += 1
            cleared += 1
        return cleared

    def push_garbage_row(self, gap_column: int) -> List[Cell]:
        """Shift the board up one row and fill the bottom row except at `gap_column`.

        Cells pushed past the top edge are dropped. Returns the new garbage cells.
        Callers re-run `clear_full_rows` afterwards.
        """
        for cell in self.cells:
            cell.y -= 1
        self.cells = [c for c in self.cells if c.y >= 0]

        bottom = np.ones((1, self.width), dtype=np.int8)
        bottom[0, gap_column] = 0
        self.sealed = np.vstack((self.sealed[1:], bottom))

        garbage = [
            Cell(x, self.height - 1, GARBAGE_COLOR, GARBAGE_SPRITE, garbage=True)
            for x in range(self.width)
            if x != gap_column
        ]
        self.cells.extend(garbage)
        return garbage

    def top_rows_occupied(self, rows: int = 2) -> bool:
        return bool(self.sealed[:rows].any())

    @property
    def filled_cells(self) -> int:
        return int(self.sealed.sum())

    def clone_state(self) -> np.ndarray:
        return self.sealed.copy()
