from __future__ import annotations

import logging
import random
from typing import Callable, Optional, Tuple

from .clock import GravityClock, ManualClock
from .collaborators import GameStats, Navigator, NullNavigator, ScoreBoard
from .controls import InputRouter
from .rules import ScoringRules
from .session import GameMode, GameSession
from .settings import DifficultySettings, GameConfig

logger = logging.getLogger(__name__)


class Match:
    """Two-player match: two bound sessions sharing one piece sequence.

    Each session runs its own gravity clock. When either side tops out the
    other side is stopped as well and `finish()` hands both stats to the
    scoreboard.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        *,
        clock_factory: Callable[[], GravityClock] = ManualClock,
        scoreboard: Optional[ScoreBoard] = None,
        navigator: Optional[Navigator] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.scoreboard = scoreboard if scoreboard is not None else ScoreBoard()
        self.navigator: Navigator = navigator if navigator is not None else NullNavigator()
        seeds = random.Random(self.config.random_seed)

        def _session(is_player1: bool) -> GameSession:
            session_config = GameConfig(
                width=self.config.width,
                height=self.config.height,
                random_seed=seeds.getrandbits(32),
                preview_width=self.config.preview_width,
                preview_height=self.config.preview_height,
                game_over_rows=self.config.game_over_rows,
            )
            return GameSession(
                session_config,
                rules,
                mode=GameMode.MULTIPLAYER,
                is_player1=is_player1,
                clock=clock_factory(),
                scoreboard=self.scoreboard,
                navigator=self.navigator,
            )

        self.player1 = _session(True)
        self.player2 = _session(False)
        self.player1.bind(self.player2)
        self.player1.on_game_over = self._on_game_over
        self.player2.on_game_over = self._on_game_over
        self.loser: Optional[GameSession] = None

    @property
    def sessions(self) -> Tuple[GameSession, GameSession]:
        return self.player1, self.player2

    @property
    def is_over(self) -> bool:
        return self.loser is not None

    @property
    def winner(self) -> Optional[GameSession]:
        if self.loser is None:
            return None
        return self.player2 if self.loser is self.player1 else self.player1

    def start(self, router: Optional[InputRouter] = None) -> None:
        for session in self.sessions:
            session.start(router)

    def reset(self, settings: Optional[DifficultySettings] = None) -> None:
        self.loser = None
        # Queues must be empty on both sides before either draws, or the sequences drift apart.
        for session in self.sessions:
            session.generator.clear()
        for session in self.sessions:
            session.reset(settings)

    def enable(self) -> None:
        for session in self.sessions:
            session.enable()

    def disable(self) -> None:
        for session in self.sessions:
            session.disable()

    def finish(self) -> Tuple[GameStats, GameStats]:
        """Stop both sessions and report their stats to the scoreboard."""
        stats = (self.player1.send(), self.player2.send())
        self.disable()
        return stats

    def _on_game_over(self, session: GameSession) -> None:
        if self.loser is not None:
            return
        self.loser = session
        self.disable()
        logger.info("match over: player %d lost", int(session.player))
