"""Timing helpers that wrap a unit of work and log how long it took."""

from __future__ import annotations

import contextlib
import functools
from typing import Callable, Iterator, Optional, Tuple, TypeVar

from .clock import Clock, Precision, SystemClock
from .errors import InvalidArgumentError, require_positive, require_positive_int
from .gate import LoggingGate, LoguruGate
from .registry import ActionRegistry

T = TypeVar("T")

TIME_TEMPLATE = "{} complete.  Execution time: {}%s."
TIME_WITH_AVERAGE_TEMPLATE = "{} complete.  Execution time: {}%s.  Average time: {}%s."
AVERAGE_TEMPLATE = "{} average time: {}%s."


def format_average(value: float) -> str:
    return "%.2f" % value


class ActionTimer:
    """Measure, sample and log the execution time of named actions.

    Every logged operation first asks its gate whether debug output is
    observed. When it is not, the work is simply called: nothing is timed and
    the registry is left untouched. Work that raises is never sampled or
    logged; the exception reaches the caller as-is.

    Args:
        gate: Default logging gate, used when a call does not pass its own.
        registry: Per-action state. Give each timer its own registry to keep
            measurements isolated.
        clock: Source of timestamps.
    """

    def __init__(
        self,
        gate: Optional[LoggingGate] = None,
        registry: Optional[ActionRegistry] = None,
        clock: Optional[Clock] = None,
    ):
        self.gate = gate if gate is not None else LoguruGate()
        self.registry = registry if registry is not None else ActionRegistry()
        self.clock = clock if clock is not None else SystemClock()

    # ------------------------------------------------------------------ basics
    def _measure(self, work: Callable[[], T], precision: Precision) -> Tuple[T, int]:
        start = self.clock.read(precision)
        result = work()
        finish = self.clock.read(precision)
        return result, max(finish - start, 0)

    def _gate(self, gate: Optional[LoggingGate]) -> LoggingGate:
        return gate if gate is not None else self.gate

    def _time(self, work, action_name, gate, precision: Precision):
        if action_name is None:
            _, elapsed = self._measure(work, precision)
            return elapsed
        gate = self._gate(gate)
        if not gate.debug_enabled:
            return work()
        result, elapsed = self._measure(work, precision)
        gate.debug(TIME_TEMPLATE % precision.unit, action_name, elapsed)
        return result

    def time(self, work: Callable[[], T], action_name: Optional[str] = None, gate: Optional[LoggingGate] = None):
        """Time ``work`` with millisecond precision.

        Without ``action_name`` the elapsed milliseconds are returned and
        nothing is logged. With it, the duration is logged and the result of
        ``work`` is returned.
        """
        return self._time(work, action_name, gate, Precision.MILLIS)

    def time_nanos(self, work: Callable[[], T], action_name: Optional[str] = None, gate: Optional[LoggingGate] = None):
        """Same as :meth:`time` with nanosecond precision."""
        return self._time(work, action_name, gate, Precision.NANOS)

    # ---------------------------------------------------------------- averages
    def _average_samples(self, action_name, samples, frequency, work, gate, precision: Precision):
        samples = require_positive_int("samples", samples)
        frequency = samples if frequency is None else frequency
        frequency = require_positive_int("frequency", frequency)
        gate = self._gate(gate)
        if not gate.debug_enabled:
            return work()

        result, elapsed = self._measure(work, precision)
        state = self.registry.upsert(action_name)
        with state.lock:
            state.record(elapsed, samples)
            state.executions += 1
            if state.executions % frequency == 0:
                gate.debug(AVERAGE_TEMPLATE % precision.unit, action_name, format_average(state.mean()))
        return result

    def _average_seconds(self, action_name, seconds, work, gate, precision: Precision):
        seconds = require_positive("seconds", seconds)
        gate = self._gate(gate)
        if not gate.debug_enabled:
            return work()

        result, elapsed = self._measure(work, precision)
        state = self.registry.upsert(action_name)
        with state.lock:
            state.record(elapsed)
            now = self.clock.seconds()
            if state.last_emission is None:
                state.last_emission = now
            if now - state.last_emission >= seconds and state.window:
                gate.debug(AVERAGE_TEMPLATE % precision.unit, action_name, format_average(state.mean()))
                state.last_emission = now
                state.window.clear()
        return result

    def _average(self, action_name, work, samples, seconds, frequency, gate, precision):
        if (samples is None) == (seconds is None):
            raise InvalidArgumentError("exactly one of samples or seconds must be given")
        if seconds is not None:
            if frequency is not None:
                raise InvalidArgumentError("frequency only applies to sample-count averages")
            return self._average_seconds(action_name, seconds, work, gate, precision)
        return self._average_samples(action_name, samples, frequency, work, gate, precision)

    def average(
        self,
        action_name: str,
        work: Callable[[], T],
        samples: Optional[int] = None,
        seconds: Optional[float] = None,
        frequency: Optional[int] = None,
        gate: Optional[LoggingGate] = None,
    ) -> T:
        """Log the rolling average execution time of ``action_name``.

        With ``samples``, the average covers the last ``samples`` executions
        and is logged on every ``frequency``-th call (``samples`` by default).
        With ``seconds``, the average covers every execution since the last
        log line and is logged once at least ``seconds`` have passed.

        Returns:
            The value returned by ``work``.
        """
        return self._average(action_name, work, samples, seconds, frequency, gate, Precision.MILLIS)

    def average_nanos(
        self,
        action_name: str,
        work: Callable[[], T],
        samples: Optional[int] = None,
        seconds: Optional[float] = None,
        frequency: Optional[int] = None,
        gate: Optional[LoggingGate] = None,
    ) -> T:
        """Same as :meth:`average` with nanosecond precision."""
        return self._average(action_name, work, samples, seconds, frequency, gate, Precision.NANOS)

    def _time_with_average(self, action_name, samples, work, gate, precision: Precision):
        samples = require_positive_int("samples", samples)
        gate = self._gate(gate)
        if not gate.debug_enabled:
            return work()

        result, elapsed = self._measure(work, precision)
        state = self.registry.upsert(action_name)
        with state.lock:
            state.record(elapsed, samples)
            unit = precision.unit
            gate.debug(TIME_WITH_AVERAGE_TEMPLATE % (unit, unit), action_name, elapsed, format_average(state.mean()))
        return result

    def time_with_average(
        self, action_name: str, samples: int, work: Callable[[], T], gate: Optional[LoggingGate] = None
    ) -> T:
        """Log this call's execution time and the average of the last ``samples`` calls."""
        return self._time_with_average(action_name, samples, work, gate, Precision.MILLIS)

    def time_with_average_nanos(
        self, action_name: str, samples: int, work: Callable[[], T], gate: Optional[LoggingGate] = None
    ) -> T:
        return self._time_with_average(action_name, samples, work, gate, Precision.NANOS)

    # ------------------------------------------------------------- call sites
    def timed(
        self,
        action_name: Optional[str] = None,
        samples: Optional[int] = None,
        seconds: Optional[float] = None,
        with_average: bool = False,
        precision: Precision = Precision.MILLIS,
        gate: Optional[LoggingGate] = None,
    ):
        """Decorator routing every call of a function through this timer.

        ``with_average`` requires ``samples`` and logs each call like
        :meth:`time_with_average`; otherwise ``samples`` or ``seconds``
        select :meth:`average`, and neither selects :meth:`time`. Invalid
        combinations raise :class:`InvalidArgumentError` here rather than on
        the first call.
        """
        if samples is not None and seconds is not None:
            raise InvalidArgumentError("samples and seconds are mutually exclusive")
        if with_average and samples is None:
            raise InvalidArgumentError("with_average requires samples")
        if samples is not None:
            samples = require_positive_int("samples", samples)
        if seconds is not None:
            seconds = require_positive("seconds", seconds)
        nanos = precision is Precision.NANOS

        def decorator(func):
            name = action_name or f"{func.__module__}.{func.__qualname__}"

            @functools.wraps(func)
            def wrapper(*args, **kwargs):
                work = functools.partial(func, *args, **kwargs)
                if with_average:
                    op = self.time_with_average_nanos if nanos else self.time_with_average
                    return op(name, samples, work, gate=gate)
                if samples is not None or seconds is not None:
                    op = self.average_nanos if nanos else self.average
                    return op(name, work, samples=samples, seconds=seconds, gate=gate)
                op = self.time_nanos if nanos else self.time
                return op(work, name, gate=gate)

            return wrapper

        return decorator

    @contextlib.contextmanager
    def track(
        self, action_name: str, precision: Precision = Precision.MILLIS, gate: Optional[LoggingGate] = None
    ) -> Iterator[None]:
        """Time a ``with`` block and log it like :meth:`time`."""
        gate = self._gate(gate)
        if not gate.debug_enabled:
            yield
            return
        start = self.clock.read(precision)
        yield
        elapsed = max(self.clock.read(precision) - start, 0)
        gate.debug(TIME_TEMPLATE % precision.unit, action_name, elapsed)


__all__ = [
    "ActionTimer",
    "AVERAGE_TEMPLATE",
    "TIME_TEMPLATE",
    "TIME_WITH_AVERAGE_TEMPLATE",
    "format_average",
]
