from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import IntEnum
from functools import partial
from typing import Callable, List, Optional

import numpy as np

from .clock import GravityClock, ManualClock
from .collaborators import GameStats, Navigator, NullNavigator, RenderTarget, ScoreBoard, View
from .controls import Command, InputRouter, PlayerSlot
from .errors import BindingError, SessionStateError
from .generator import GeneratorPair, PieceGenerator
from .grid import Board, Coordinate
from .pieces import SHAPE_COLORS, Piece
from .rules import ScoringRules
from .settings import DifficultySettings, GameConfig

logger = logging.getLogger(__name__)


class GameMode(IntEnum):
    SINGLE_PLAYER = 0
    MULTIPLAYER = 1


class SessionState(IntEnum):
    IDLE = 0
    CONFIGURED = 1
    RUNNING = 2
    DISABLED = 3
    TERMINAL = 4


@dataclass
class RenderFlags:
    sealed: bool = False
    movable: bool = False
    preview: bool = False

    def mark_all(self) -> None:
        self.sealed = self.movable = self.preview = True

    def any(self) -> bool:
        return self.sealed or self.movable or self.preview


class GameSession:
    """One player's game: active piece, gravity, line clears, score and level.

    All state changes happen synchronously inside command handlers or the
    gravity tick. Renderers are told what changed through `flags` and pull
    the data with `flush`.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        *,
        mode: GameMode = GameMode.SINGLE_PLAYER,
        is_player1: bool = True,
        clock: Optional[GravityClock] = None,
        scoreboard: Optional[ScoreBoard] = None,
        navigator: Optional[Navigator] = None,
        generator: Optional[PieceGenerator] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng = random.Random(self.config.random_seed)
        self.board = Board(self.config.width, self.config.height)
        self.generator = generator or PieceGenerator(random.Random(self.rng.getrandbits(32)))
        self.clock: GravityClock = clock if clock is not None else ManualClock()
        self.scoreboard = scoreboard if scoreboard is not None else ScoreBoard()
        self.navigator: Navigator = navigator if navigator is not None else NullNavigator()
        self.mode = mode
        self.is_player1 = is_player1

        self.settings = DifficultySettings()
        self.state = SessionState.IDLE
        self.enabled = False
        self.flags = RenderFlags()

        self.movable: Optional[Piece] = None
        self.next_movable: Optional[Piece] = None
        self.points = 0
        self.level = 1
        self.combo = 0
        self.cleared = 0
        self.need_to_clear = self.rules.lines_for_level(1)
        self.lines_cleared_total = 0
        self.was_loser = False
        self._grace = True

        self._routers: List[InputRouter] = []
        self.peer: Optional[GameSession] = None
        self.pairing: Optional[GeneratorPair] = None

        self.board_geometry: List[Coordinate] = []
        self.preview_geometry: List[Coordinate] = []

        self.on_score_update: Optional[Callable[[int], None]] = None
        self.on_game_over: Optional[Callable[["GameSession"], None]] = None

    @property
    def player(self) -> PlayerSlot:
        return PlayerSlot.PLAYER_1 if self.is_player1 else PlayerSlot.PLAYER_2

    @property
    def gravity_interval(self) -> float:
        return self.rules.gravity_interval(self.level, self.settings.speed_multiplier)

    @property
    def is_over(self) -> bool:
        return self.state == SessionState.TERMINAL

    # ---------- Lifecycle ----------
    def start(self, router: Optional[InputRouter] = None) -> None:
        """One-time setup: input handlers and static grid geometry. Gravity stays off."""
        self.enabled = False
        self.flags = RenderFlags()
        if router is not None and router not in self._routers:
            self._routers.append(router)
            for player in PlayerSlot:
                for command in Command:
                    router.on(player, command, partial(self._on_input, player, command))
        self.board_geometry = [(x, y) for x in range(self.board.width) for y in range(self.board.height)]
        self.preview_geometry = [
            (x, y) for x in range(self.config.preview_width) for y in range(self.config.preview_height)
        ]

    def reset(self, settings: Optional[DifficultySettings] = None) -> None:
        self.clock.stop()
        self.enabled = False
        self.settings = settings or DifficultySettings()
        self.board.reset()

        self.movable = self._draw_piece()
        self._move_random()
        self.next_movable = self._draw_piece()

        self.points = 0
        self.level = 1
        self.combo = 0
        self.cleared = 0
        self.need_to_clear = self.rules.lines_for_level(1)
        self.lines_cleared_total = 0
        self.was_loser = False
        self._grace = True

        self.state = SessionState.CONFIGURED
        self.flags.mark_all()

    def enable(self) -> None:
        if self.state == SessionState.IDLE:
            raise SessionStateError("reset() must be called before enable()")
        if self.state == SessionState.TERMINAL:
            raise SessionStateError("game is over; call reset() first")
        self.enabled = True
        self.state = SessionState.RUNNING
        self._reset_speed_interval()

    def disable(self) -> None:
        self.enabled = False
        self.clock.stop()
        if self.state == SessionState.RUNNING:
            self.state = SessionState.DISABLED

    def bind(self, peer: "GameSession") -> None:
        """Couple this session with `peer` for a two-player match."""
        if peer is self:
            raise BindingError("a session cannot be bound to itself")
        if self.peer is not None or peer.peer is not None:
            raise BindingError("session is already bound to a peer")
        pairing = GeneratorPair(self.generator, peer.generator)
        self.peer, peer.peer = peer, self
        self.pairing = peer.pairing = pairing
        self.mode = peer.mode = GameMode.MULTIPLAYER

    def send(self) -> GameStats:
        """Hand the final stats to the scoreboard and clear the loser flag."""
        stats = self.stats()
        self.was_loser = False
        self.scoreboard.set_stats(self.is_player1, stats)
        return stats

    def stats(self) -> GameStats:
        return GameStats(
            cleared=self.lines_cleared_total,
            points=self.points,
            level=self.level,
            is_loser=self.was_loser,
        )

    # ---------- Input ----------
    def _on_input(self, player: PlayerSlot, command: Command) -> None:
        if player != self.player:
            return
        self.handle(command)

    def handle(self, command: Command) -> None:
        if not self.enabled:
            return
        if command == Command.MOVE_LEFT:
            self.move_left()
        elif command == Command.MOVE_RIGHT:
            self.move_right()
        elif command == Command.ROTATE:
            self.rotate()
        elif command == Command.SOFT_DROP:
            self.move_down()
        elif command == Command.HARD_DROP:
            self.hard_drop()

    def move_left(self) -> None:
        if self.movable is None:
            return
        if self.movable.can_move_left(self.board):
            self.movable.move_left()
        self.flags.movable = True

    def move_right(self) -> None:
        if self.movable is None:
            return
        if self.movable.can_move_right(self.board):
            self.movable.move_right()
        self.flags.movable = True

    def rotate(self) -> None:
        if self.movable is None:
            return
        if self.movable.can_rotate(self.board):
            self.movable.rotate()
        self.flags.movable = True

    def hard_drop(self) -> None:
        while self.move_down():
            pass

    def tick(self) -> None:
        """Gravity callback."""
        if not self.enabled:
            return
        self.move_down()

    def move_down(self) -> bool:
        """Move the active piece one row down.

        Returns False once the piece has been locked. A piece that cannot
        descend gets one grace call before it locks.
        """
        if self.movable is None or self.state == SessionState.TERMINAL:
            return False
        if not self.movable.can_move_down(self.board):
            if self._grace:
                self._grace = False
                return True
            self._lock()
            return False
        self.movable.move_down()
        self._grace = True
        self.flags.movable = True
        return True

    # ---------- Garbage ----------
    def push_line(self, count: int) -> None:
        """Inject `count` garbage rows, each with one random gap, at the bottom of the board."""
        if self.state == SessionState.TERMINAL:
            return
        for _ in range(count):
            gap = self.rng.randrange(self.board.width)
            self.board.push_garbage_row(gap)
            self._check_and_clear(from_garbage=True)
            if not self._lift_movable():
                # Pinned against the top edge: the piece has nowhere to go.
                self.flags.mark_all()
                self._game_over()
                return
        logger.debug("player %d received %d garbage rows", int(self.player), count)
        self.flags.sealed = True
        self.flags.movable = True

    def _lift_movable(self) -> bool:
        """Move the active piece up out of any sealed cells. False if it is still stuck."""
        piece = self.movable
        if piece is None:
            return True
        while piece.overlaps(self.board) and piece.topmost_row() > 0:
            piece.move_up()
        return not piece.overlaps(self.board)

    # ---------- Internals ----------
    def _draw_piece(self) -> Piece:
        piece = self.generator.next()
        if self.settings.random_colors:
            piece.paint(self.rng.choice(list(SHAPE_COLORS.values())))
        return piece

    def _move_random(self) -> None:
        steps = self.rng.randint(0, self.board.width)
        for _ in range(steps):
            if not self.movable.can_move_right(self.board):
                break
            self.movable.move_right()

    def _reset_speed_interval(self) -> None:
        self.clock.stop()
        self.clock.start(self.gravity_interval, self.tick)

    def _lock(self) -> None:
        self.movable.seal_into(self.board)
        self._check_and_clear()

        self.movable = self.next_movable
        self._move_random()
        self.next_movable = self._draw_piece()
        self._grace = True
        self.flags.mark_all()

        if self.board.top_rows_occupied(self.config.game_over_rows):
            self._game_over()

    def _check_and_clear(self, from_garbage: bool = False) -> int:
        lines = self.board.clear_full_rows()
        if lines:
            self.points += self.rules.score_for_lines(
                lines, self.level, self.settings.level_multiplier, self.combo
            )
            if not from_garbage:
                self.combo += 1
                if self.mode == GameMode.MULTIPLAYER and self.peer is not None:
                    self.peer.push_line(self.rules.garbage_for_lines(lines))
            if self.on_score_update is not None:
                self.on_score_update(self.points)
        elif not from_garbage:
            self.combo = 0

        self.cleared += lines
        self.lines_cleared_total += lines
        if self.cleared >= self.need_to_clear:
            self.cleared -= self.need_to_clear
            self.level += 1
            self.need_to_clear = self.rules.lines_for_level(self.level)
            logger.info("player %d reached level %d", int(self.player), self.level)
            if self.enabled:
                self._reset_speed_interval()
        return lines

    def _game_over(self) -> None:
        self.clock.stop()
        self.enabled = False
        self.state = SessionState.TERMINAL
        logger.info("player %d game over with %d points at level %d",
                    int(self.player), self.points, self.level)
        if self.mode == GameMode.SINGLE_PLAYER:
            self.scoreboard.set_unknown(self.points)
            self.navigator.load(View.NAME_ENTRY)
        else:
            self.was_loser = True
            self.navigator.load(View.WIN_BOARD)
        if self.on_game_over is not None:
            self.on_game_over(self)

    # ---------- Rendering ----------
    def flush(self, target: RenderTarget) -> None:
        """Send every dirty layer to `target` and clear the flags."""
        if not self.flags.any():
            return
        if self.flags.sealed:
            target.draw_sealed(list(self.board.cells))
        if self.flags.movable and self.movable is not None:
            prediction = None
            if self.settings.movement_preview:
                prediction = (self.movable.leftmost_column(), self.movable.rightmost_column())
            target.draw_movable(list(self.movable.cells), prediction)
        if self.flags.preview and self.next_movable is not None:
            target.draw_preview(self.next_movable.preview_positions(),
                                self.next_movable.color, self.next_movable.sprite)
        self.flags = RenderFlags()

    def get_state(self) -> np.ndarray:
        # Overlay the active piece on a copy of the grid
        state = self.board.clone_state()
        if self.movable is not None and not self.is_over:
            for x, y in self.movable.positions():
                if self.board.is_inside(x, y):
                    state[y, x] = -int(self.movable.kind)
        return state
