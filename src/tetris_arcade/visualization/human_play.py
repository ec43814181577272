from __future__ import annotations

import argparse
import logging
import sys
from typing import Dict, List, Optional, Tuple

import pygame

from tetris_arcade.game import (
    Command,
    Difficulty,
    GameConfig,
    GameSession,
    InputRouter,
    Match,
    NullNavigator,
    PlayerSlot,
    ScoreBoard,
    settings_for,
)
from tetris_arcade.game.clock import Tick
from .renderer import BoardRenderer


KEY_TO_COMMAND: Dict[int, Tuple[PlayerSlot, Command]] = {
    pygame.K_a: (PlayerSlot.PLAYER_1, Command.MOVE_LEFT),
    pygame.K_d: (PlayerSlot.PLAYER_1, Command.MOVE_RIGHT),
    pygame.K_s: (PlayerSlot.PLAYER_1, Command.SOFT_DROP),
    pygame.K_w: (PlayerSlot.PLAYER_1, Command.ROTATE),
    pygame.K_SPACE: (PlayerSlot.PLAYER_1, Command.HARD_DROP),
    pygame.K_LEFT: (PlayerSlot.PLAYER_2, Command.MOVE_LEFT),
    pygame.K_RIGHT: (PlayerSlot.PLAYER_2, Command.MOVE_RIGHT),
    pygame.K_DOWN: (PlayerSlot.PLAYER_2, Command.SOFT_DROP),
    pygame.K_UP: (PlayerSlot.PLAYER_2, Command.ROTATE),
    pygame.K_RETURN: (PlayerSlot.PLAYER_2, Command.HARD_DROP),
}


class PygameClock:
    """Wall-clock gravity driven by `pygame.time.get_ticks`, polled once per frame."""

    def __init__(self) -> None:
        self.interval_ms: Optional[float] = None
        self._callback: Optional[Tick] = None
        self._next_due = 0.0

    @property
    def running(self) -> bool:
        return self._callback is not None

    def start(self, interval_ms: float, callback: Tick) -> None:
        self.interval_ms = float(interval_ms)
        self._callback = callback
        self._next_due = pygame.time.get_ticks() + self.interval_ms

    def stop(self) -> None:
        self._callback = None

    def poll(self) -> None:
        now = pygame.time.get_ticks()
        while self._callback is not None and now >= self._next_due:
            self._next_due += self.interval_ms
            self._callback()


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--mode", choices=["single", "duel"], default="single")
    p.add_argument("--difficulty", choices=[d.value for d in Difficulty], default=Difficulty.EASY.value)
    p.add_argument("--player", choices=["1", "2"], default="1",
                   help="Which key set drives a single-player game")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--cell", type=int, default=30)
    return p


def run(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)8s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )

    pygame.init()
    try:
        router = InputRouter()
        scoreboard = ScoreBoard()
        navigator = NullNavigator()
        config = GameConfig(random_seed=args.seed)
        settings = settings_for(args.difficulty)
        clocks: List[PygameClock] = []

        def make_clock() -> PygameClock:
            clock = PygameClock()
            clocks.append(clock)
            return clock

        match: Optional[Match] = None
        if args.mode == "duel":
            match = Match(config, clock_factory=make_clock, scoreboard=scoreboard, navigator=navigator)
            sessions: Tuple[GameSession, ...] = match.sessions
            match.start(router)
            match.reset(settings)
            match.enable()
        else:
            session = GameSession(config, clock=make_clock(), scoreboard=scoreboard, navigator=navigator,
                                  is_player1=(args.player == "1"))
            sessions = (session,)
            session.start(router)
            session.reset(settings)
            session.enable()

        renderers: List[BoardRenderer] = []
        x = 20
        for session in sessions:
            renderer = BoardRenderer(session, cell_size=args.cell, origin=(x, 20))
            renderers.append(renderer)
            x += renderer.width + 20
        height = config.height * args.cell + 40
        screen = pygame.display.set_mode((x, height))
        pygame.display.set_caption("Tetris Arcade")
        frame_clock = pygame.time.Clock()

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key in KEY_TO_COMMAND:
                        router.emit(*KEY_TO_COMMAND[event.key])

            for clock in clocks:
                clock.poll()

            screen.fill((10, 10, 14))
            for session, renderer in zip(sessions, renderers):
                session.flush(renderer)
                renderer.blit(screen)
            if any(s.is_over for s in sessions):
                font = pygame.font.SysFont(None, 36)
                text = font.render("Game Over - ESC to quit", True, (255, 255, 255))
                screen.blit(text, text.get_rect(center=(screen.get_width() // 2, height // 2)))
            pygame.display.flip()
            frame_clock.tick(60)

        if match is not None:
            p1, p2 = match.finish()
            print(f"Player 1: {p1}\nPlayer 2: {p2}")
        else:
            print(f"Final score: {sessions[0].points}")
    finally:
        pygame.quit()


if __name__ == "__main__":  # pragma: no cover
    run()
