"""Logging gates: decide whether profiling output is observed and emit it."""

from __future__ import annotations

import logging
from typing import Any, Optional, Protocol, runtime_checkable

from ..utils.logging import configured_level, logger

PROFILING_CHANNEL = "actiontimer.profiling"
PROFILING_MARKER = "Profiling"


@runtime_checkable
class LoggingGate(Protocol):
    """What :class:`~actiontimer.profiling.timer.ActionTimer` needs from a logger.

    ``debug`` takes a ``{}``-style template plus positional arguments.
    """

    @property
    def debug_enabled(self) -> bool: ...

    def debug(self, template: str, *args: Any) -> None: ...


class LoguruGate:
    """Gate over the process-wide loguru logger.

    Records carry ``channel`` and ``marker`` extras so sinks can filter
    profiling output. Debug output is considered observed while the gate's
    effective level admits ``DEBUG``.

    loguru exposes no public minimum level across its sinks, so the gate
    cannot see them directly. With ``level=None`` (the default) the gate
    follows the level given to the last
    :func:`~actiontimer.utils.logging.setup_logging` call, or ``DEBUG`` to
    match loguru's own default stderr sink when logging was never set up.
    An explicit ``level`` pins the gate; keep it in step with the sinks, or
    timing is either paid for and dropped, or skipped while sinks listen.
    """

    def __init__(self, level: Optional[str] = None, channel: str = PROFILING_CHANNEL):
        self.channel = channel
        self.level = level
        self._logger = logger.bind(channel=channel, marker=PROFILING_MARKER)

    @property
    def level(self) -> Optional[str]:
        return self._level

    @level.setter
    def level(self, value: Optional[str]) -> None:
        if value is not None:
            # raises ValueError for unknown level names
            logger.level(value)
        self._level = value

    @property
    def effective_level(self) -> str:
        return self._level or configured_level() or "DEBUG"

    @property
    def debug_enabled(self) -> bool:
        return logger.level("DEBUG").no >= logger.level(self.effective_level).no

    def debug(self, template: str, *args: Any) -> None:
        self._logger.debug(template, *args)


class _BraceMessage:
    def __init__(self, template: str, args: tuple):
        self.template = template
        self.args = args

    def __str__(self) -> str:
        return self.template.format(*self.args)


class StdlibGate:
    """Gate over a :mod:`logging` logger looked up by name."""

    def __init__(self, logger_: Optional[logging.Logger] = None, name: str = PROFILING_CHANNEL):
        self.logger = logger_ if logger_ is not None else logging.getLogger(name)

    @property
    def debug_enabled(self) -> bool:
        return self.logger.isEnabledFor(logging.DEBUG)

    def debug(self, template: str, *args: Any) -> None:
        self.logger.debug(_BraceMessage(template, args))


__all__ = ["LoggingGate", "LoguruGate", "StdlibGate", "PROFILING_CHANNEL", "PROFILING_MARKER"]
