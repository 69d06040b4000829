"""Errors raised by the profiling helpers."""

from __future__ import annotations

import math
import numbers


class InvalidArgumentError(ValueError):
    """Raised for a non-positive sample count, frequency or time window."""


def require_positive(name: str, value):
    """Return ``value`` if it is a finite number above zero."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidArgumentError(f"{name} must be a number, got {value!r}")
    if not math.isfinite(value) or not value > 0:
        raise InvalidArgumentError(f"{name} must be positive and finite, got {value!r}")
    return value


def require_positive_int(name: str, value) -> int:
    """Return ``value`` as a plain ``int`` if it is an integer above zero."""
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidArgumentError(f"{name} must be an integer, got {value!r}")
    return int(require_positive(name, value))


__all__ = ["InvalidArgumentError", "require_positive", "require_positive_int"]
