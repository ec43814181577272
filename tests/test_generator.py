from __future__ import annotations

import random

import pytest

from tetris_arcade.game import GeneratorPair, PairingError, PieceGenerator


def _paired(seed_a: int = 1, seed_b: int = 2):
    a = PieceGenerator(random.Random(seed_a))
    b = PieceGenerator(random.Random(seed_b))
    return a, b, GeneratorPair(a, b)


def test_unpaired_generator_is_seeded():
    a = PieceGenerator(random.Random(7))
    b = PieceGenerator(random.Random(7))
    assert [a.next().kind for _ in range(30)] == [b.next().kind for _ in range(30)]


def test_paired_generators_share_sequence():
    a, b, _ = _paired()
    kinds_a = [a.next().kind for _ in range(25)]
    kinds_b = [b.next().kind for _ in range(25)]
    assert kinds_a == kinds_b


def test_paired_generators_interleaved():
    a, b, _ = _paired()
    kinds_a, kinds_b = [], []
    for i in range(40):
        if i % 3 == 0:
            kinds_b.append(b.next().kind)
        else:
            kinds_a.append(a.next().kind)
    while len(kinds_b) < len(kinds_a):
        kinds_b.append(b.next().kind)
    assert kinds_a == kinds_b[: len(kinds_a)]


def test_paired_pieces_are_separate_objects():
    a, b, _ = _paired()
    pa, pb = a.next(), b.next()
    assert pa.kind == pb.kind
    assert pa is not pb
    pa.move_right()
    assert pa.positions() != pb.positions()


def test_peek_does_not_consume():
    gen = PieceGenerator(random.Random(5))
    first = gen.peek()
    assert gen.next() is first


def test_clear_empties_queue():
    a, b, _ = _paired()
    a.next()
    assert len(b) == 1
    b.clear()
    assert len(b) == 0


def test_pairing_errors():
    a, b, _ = _paired()
    c = PieceGenerator()
    with pytest.raises(PairingError):
        GeneratorPair(a, c)
    with pytest.raises(PairingError):
        GeneratorPair(c, c)


def test_unpair():
    a, b, pair = _paired()
    pair.unpair()
    assert not a.is_paired and not b.is_paired
    a.next()
    assert len(b) == 0
