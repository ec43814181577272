from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

import pygame

from tetris_arcade.game import Cell, GameSession


Color = Tuple[int, int, int]


def _rgb(hex_color: str) -> Color:
    value = hex_color.lstrip("#")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


class BoardRenderer:
    """Render target for one session.

    The session pushes layer contents through `draw_*` when it flushes its
    dirty flags; `blit` paints whatever was last received.
    """

    def __init__(self, session: GameSession, cell_size: int = 30, origin: Tuple[int, int] = (20, 20)) -> None:
        self.session = session
        self.cell_size = cell_size
        self.origin = origin
        self.font = pygame.font.SysFont(None, 26)
        self._sealed: List[Cell] = []
        self._movable: List[Cell] = []
        self._prediction: Optional[Tuple[int, int]] = None
        self._preview: List[Tuple[int, int]] = []
        self._preview_color: Color = (200, 200, 200)

    # RenderTarget
    def draw_sealed(self, cells: Sequence[Cell]) -> None:
        self._sealed = [Cell(c.x, c.y, c.color, c.sprite, c.garbage) for c in cells]

    def draw_movable(self, cells: Sequence[Cell], prediction: Optional[Tuple[int, int]]) -> None:
        self._movable = [Cell(c.x, c.y, c.color, c.sprite) for c in cells]
        self._prediction = prediction

    def draw_preview(self, positions: Sequence[Tuple[int, int]], color: str, sprite: Optional[str]) -> None:
        self._preview = list(positions)
        self._preview_color = _rgb(color)

    @property
    def width(self) -> int:
        return self.session.board.width * self.cell_size + 6 * self.cell_size

    def _rect(self, x: int, y: int, ox: int, oy: int) -> pygame.Rect:
        return pygame.Rect(ox + x * self.cell_size, oy + y * self.cell_size, self.cell_size - 1, self.cell_size - 1)

    def blit(self, screen: pygame.Surface) -> None:
        ox, oy = self.origin
        board = self.session.board
        for x, y in self.session.board_geometry:
            pygame.draw.rect(screen, (40, 40, 48), self._rect(x, y, ox, oy), 1)

        if self._prediction is not None and self._movable:
            left, right = self._prediction
            top = min(c.y for c in self._movable)
            shade = pygame.Surface(((right - left + 1) * self.cell_size, (board.height - top) * self.cell_size),
                                   pygame.SRCALPHA)
            shade.fill((255, 255, 255, 64))
            screen.blit(shade, (ox + left * self.cell_size, oy + top * self.cell_size))

        for cell in self._sealed:
            pygame.draw.rect(screen, _rgb(cell.color), self._rect(cell.x, cell.y, ox, oy))
        for cell in self._movable:
            pygame.draw.rect(screen, _rgb(cell.color), self._rect(cell.x, cell.y, ox, oy))

        px = ox + (board.width + 1) * self.cell_size
        py = oy + 2 * self.cell_size
        for x, y in self.session.preview_geometry:
            pygame.draw.rect(screen, (40, 40, 48), self._rect(x, y, px, py), 1)
        for x, y in self._preview:
            pygame.draw.rect(screen, self._preview_color, self._rect(x, y, px, py))

        lines = (
            f"score {self.session.points:08d}",
            f"level {self.session.level}",
            f"lines {self.session.lines_cleared_total}",
        )
        for i, text in enumerate(lines):
            label = self.font.render(text, True, (230, 230, 230))
            screen.blit(label, (px, oy + (5 + i) * self.cell_size))
