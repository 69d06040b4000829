"""Clock sources for profiling measurements."""

from __future__ import annotations

import enum
import time


class Precision(enum.Enum):
    """Resolution of a measured duration."""

    MILLIS = "ms"
    NANOS = "ns"

    @property
    def unit(self) -> str:
        return self.value


class Clock:
    """Monotonic clock read by :class:`~actiontimer.profiling.timer.ActionTimer`."""

    def millis(self) -> int:
        raise NotImplementedError

    def nanos(self) -> int:
        raise NotImplementedError

    def seconds(self) -> float:
        raise NotImplementedError

    def read(self, precision: Precision) -> int:
        if precision is Precision.NANOS:
            return self.nanos()
        return self.millis()


class SystemClock(Clock):
    def millis(self) -> int:
        return time.monotonic_ns() // 1_000_000

    def nanos(self) -> int:
        return time.perf_counter_ns()

    def seconds(self) -> float:
        return time.monotonic()


__all__ = ["Precision", "Clock", "SystemClock"]
