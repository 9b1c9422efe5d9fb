# Time sources for the cookie timestep.
#
# The token codec takes a clock instead of reading a module-level override,
# so tests can pin time without touching process-wide state.

from __future__ import annotations

import time
from typing import Protocol

__all__ = ["Clock", "SystemClock", "FixedClock", "OverridableClock"]


class Clock(Protocol):
    """Anything that can report the current Unix time in seconds."""

    def now(self) -> float: ...


class SystemClock:
    """The real wall clock."""

    def now(self) -> float:
        return time.time()


class FixedClock:
    """A clock stuck at one timestamp."""

    def __init__(self, timestamp: float):
        self.timestamp = timestamp

    def now(self) -> float:
        return self.timestamp


class OverridableClock:
    """Wall clock that can be pinned to a custom timestamp.

    Not locked. Meant for tests; production code should never call
    :meth:`set_custom_timestamp`.
    """

    def __init__(self, custom_timestamp: float | None = None):
        self._custom_timestamp = custom_timestamp

    def set_custom_timestamp(self, timestamp: float) -> None:
        self._custom_timestamp = timestamp

    def clear_custom_timestamp(self) -> None:
        self._custom_timestamp = None

    def now(self) -> float:
        if self._custom_timestamp is not None:
            return self._custom_timestamp
        return time.time()
