from __future__ import annotations

from typing import Callable, Optional, Protocol


Tick = Callable[[], None]


class GravityClock(Protocol):
    """Repeating timer that drives a session's gravity."""

    @property
    def running(self) -> bool: ...

    def start(self, interval_ms: float, callback: Tick) -> None: ...

    def stop(self) -> None: ...


class ManualClock:
    """Deterministic gravity clock advanced explicitly by the caller.

    `advance(ms)` fires the callback once for every full interval that
    elapses, carrying leftover time forward. Restarting resets the phase.
    """

    def __init__(self) -> None:
        self.interval_ms: Optional[float] = None
        self._callback: Optional[Tick] = None
        self._elapsed = 0.0

    @property
    def running(self) -> bool:
        return self._callback is not None

    def start(self, interval_ms: float, callback: Tick) -> None:
        self.interval_ms = float(interval_ms)
        self._callback = callback
        self._elapsed = 0.0

    def stop(self) -> None:
        self._callback = None
        self._elapsed = 0.0

    def advance(self, ms: float) -> int:
        """Advance time by `ms` and return the number of ticks fired."""
        fired = 0
        self._elapsed += ms
        while self._callback is not None and self.interval_ms and self._elapsed >= self.interval_ms:
            self._elapsed -= self.interval_ms
            self._callback()
            fired += 1
        return fired

    def step(self) -> int:
        """Advance by exactly one interval."""
        if self.interval_ms is None:
            return 0
        return self.advance(self.interval_ms)
