from __future__ import annotations

from collections import defaultdict
from enum import IntEnum
from typing import Callable, DefaultDict, List, Tuple


class Command(IntEnum):
    MOVE_LEFT = 0
    MOVE_RIGHT = 1
    SOFT_DROP = 2
    HARD_DROP = 3
    ROTATE = 4


class PlayerSlot(IntEnum):
    PLAYER_1 = 1
    PLAYER_2 = 2


Handler = Callable[[], None]


class InputRouter:
    """Dispatches decoded (player, command) events to registered handlers.

    Handlers for one event run in registration order, each to completion.
    """

    def __init__(self) -> None:
        self._handlers: DefaultDict[Tuple[PlayerSlot, Command], List[Handler]] = defaultdict(list)

    def on(self, player: PlayerSlot, command: Command, handler: Handler) -> None:
        self._handlers[(player, command)].append(handler)

    def emit(self, player: PlayerSlot, command: Command) -> None:
        for handler in list(self._handlers.get((player, command), ())):
            handler()

    def clear(self) -> None:
        self._handlers.clear()
