from __future__ import annotations

import pytest

from conftest import fill_rows
from tetris_arcade.game import (
    BindingError,
    GameConfig,
    GameMode,
    GameSession,
    Match,
    Piece,
    TetrominoType,
    View,
)


@pytest.fixture
def match(scoreboard, navigator, router) -> Match:
    m = Match(GameConfig(random_seed=99), scoreboard=scoreboard, navigator=navigator)
    m.start(router)
    m.reset()
    m.enable()
    return m


def test_sessions_are_bound(match):
    p1, p2 = match.sessions
    assert p1.peer is p2 and p2.peer is p1
    assert p1.mode == p2.mode == GameMode.MULTIPLAYER
    assert p1.is_player1 and not p2.is_player1
    with pytest.raises(BindingError):
        p1.bind(GameSession())


def test_both_sides_draw_same_shapes(match):
    p1, p2 = match.sessions
    assert p1.movable.kind == p2.movable.kind
    assert p1.next_movable.kind == p2.next_movable.kind

    for _ in range(5):
        p1.hard_drop()
    for _ in range(5):
        p2.hard_drop()
    assert p1.movable.kind == p2.movable.kind
    assert p1.next_movable.kind == p2.next_movable.kind


def test_reset_keeps_sides_in_sync(match):
    p1, p2 = match.sessions
    for _ in range(3):
        p1.hard_drop()
    match.reset()
    assert p1.movable.kind == p2.movable.kind
    assert p1.next_movable.kind == p2.next_movable.kind


def test_clear_sends_garbage_to_peer(match):
    p1, p2 = match.sessions
    fill_rows(p1.board, [16, 17], gaps=[0, 1])
    p1.movable = Piece.spawn(TetrominoType.O, sprite="red.png")
    p1.hard_drop()

    assert p1.points == 300
    assert p1.board.filled_cells == 0
    assert p2.board.row_sum(17) == 9
    assert p2.board.row_sum(16) == 9
    assert p2.board.filled_cells == 18
    assert p2.points == 0


def test_top_out_ends_match(match, navigator, scoreboard):
    p1, p2 = match.sessions
    fill_rows(p1.board, range(2, 18), gaps=[9])
    p1.movable = Piece.spawn(TetrominoType.O, sprite="red.png")
    p1.hard_drop()

    assert match.is_over
    assert match.loser is p1
    assert match.winner is p2
    assert p1.was_loser
    assert navigator.history == [View.WIN_BOARD]
    assert not p1.enabled and not p2.enabled
    assert not p2.clock.running

    s1, s2 = match.finish()
    assert s1.is_loser and not s2.is_loser
    assert not p1.was_loser
    assert scoreboard.get_stats(True) == s1
    assert scoreboard.get_stats(False) == s2
