"""Injectable time source for token expiry decisions.

Riot access tokens live for one hour and the engine stores their expiry as an
absolute UNIX timestamp.  Whatever compares against that timestamp (the
redirect parser, the refresh policy, the validity check) takes a ``Clock``
argument instead of reading the system time, so tests can freeze or advance
time at will:

>>> from riot_session.auth.clock import fixed_clock, remaining_seconds
>>> remaining_seconds(1_060.0, clock=fixed_clock(1_000.0))
60.0
"""

from __future__ import annotations

import time
from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    """Zero-argument callable returning seconds since the UNIX epoch."""

    def __call__(self) -> float: ...


def default_clock() -> float:
    """Wall-clock time, as returned by ``time.time()``."""
    return time.time()


def fixed_clock(now: float) -> Clock:
    """Return a clock frozen at *now* (handy for tests and replays)."""
    return lambda: float(now)


def remaining_seconds(expire_at: float | None, *, clock: Clock = default_clock) -> float:
    """Seconds left until *expire_at*; ``0.0`` once passed or when unknown."""
    if expire_at is None:
        return 0.0
    return max(0.0, expire_at - clock())
