"""Logging utilities built on top of :mod:`loguru`."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

PROFILING_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {extra[channel]} | {message}"

_configured_level: Optional[str] = None


def setup_logging(log_file: Optional[Path] = None, level: str = "INFO") -> None:
    """Configure the global loguru logger.

    Args:
        log_file: Optional file path for log sink.
        level: Minimum log level (string understood by loguru).
    """

    global _configured_level

    logger.remove()
    logger.configure(extra={"channel": "-"})
    logger.add(sys.stdout, level=level, format=PROFILING_FORMAT)
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(log_file, level=level, format=PROFILING_FORMAT, rotation="10 MB", retention="7 days")
    _configured_level = level


def configured_level() -> Optional[str]:
    """Level passed to the last :func:`setup_logging` call, if any."""

    return _configured_level


__all__ = ["setup_logging", "configured_level", "logger", "PROFILING_FORMAT"]
