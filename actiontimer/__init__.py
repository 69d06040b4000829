"""Call-site timing and rolling-average profiling helpers."""

from importlib.metadata import version

from .profiling.clock import Precision
from .profiling.errors import InvalidArgumentError
from .profiling.gate import LoggingGate, LoguruGate, StdlibGate
from .profiling.registry import ActionRegistry
from .profiling.timer import ActionTimer

__all__ = [
    "__version__",
    "ActionRegistry",
    "ActionTimer",
    "InvalidArgumentError",
    "LoggingGate",
    "LoguruGate",
    "Precision",
    "StdlibGate",
]


def __getattr__(name: str) -> str:
    if name == "__version__":
        try:
            return version("action-timer")
        except Exception:  # pragma: no cover - fallback when pkg metadata missing
            return "0.1.0"
    raise AttributeError(name)
