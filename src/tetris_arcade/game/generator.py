from __future__ import annotations

import logging
import random
from collections import deque
from typing import Callable, Deque, Optional

from .errors import PairingError
from .pieces import Piece, TetrominoType

logger = logging.getLogger(__name__)


class PieceGenerator:
    """Queue of upcoming pieces.

    When the queue runs dry one shape is drawn uniformly at random. A paired
    generator also receives a separately built piece of the same shape, so
    both sides consume the same shape sequence at their own pace.
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng or random.Random()
        self._queue: Deque[Piece] = deque()
        self._mirror: Optional[Callable[[Piece], None]] = None

    @property
    def is_paired(self) -> bool:
        return self._mirror is not None

    def __len__(self) -> int:
        return len(self._queue)

    def enqueue(self, piece: Piece) -> None:
        self._queue.append(piece)

    def next(self) -> Piece:
        self._refill()
        return self._queue.popleft()

    def peek(self) -> Piece:
        self._refill()
        return self._queue[0]

    def clear(self) -> None:
        self._queue.clear()

    def _refill(self) -> None:
        if self._queue:
            return
        kind = self.rng.choice(list(TetrominoType))
        self.enqueue(Piece.spawn(kind, rng=self.rng))
        if self._mirror is not None:
            self._mirror(Piece.spawn(kind, rng=self.rng))


class GeneratorPair:
    """Owns the link between two generators that share one shape sequence."""

    def __init__(self, first: PieceGenerator, second: PieceGenerator) -> None:
        if first is second:
            raise PairingError("a generator cannot be paired with itself")
        if first.is_paired or second.is_paired:
            raise PairingError("generator is already paired")
        self.first = first
        self.second = second
        first._mirror = second.enqueue
        second._mirror = first.enqueue
        logger.debug("paired generators %x and %x", id(first), id(second))

    def unpair(self) -> None:
        self.first._mirror = None
        self.second._mirror = None
