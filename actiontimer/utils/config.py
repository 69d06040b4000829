"""Profiling configuration loaded through OmegaConf."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from omegaconf import OmegaConf

from ..profiling.gate import PROFILING_CHANNEL, LoguruGate
from ..profiling.timer import ActionTimer
from .logging import setup_logging


@dataclass
class ProfilingConfig:
    level: str = "INFO"
    log_file: Optional[str] = None
    channel: str = PROFILING_CHANNEL


def load_config(path: Optional[Path] = None, **overrides: Any) -> ProfilingConfig:
    """Merge an optional YAML file and keyword overrides over the defaults.

    Unknown keys and values of the wrong type raise OmegaConf errors.
    """

    cfg = OmegaConf.structured(ProfilingConfig)
    if path is not None:
        cfg = OmegaConf.merge(cfg, OmegaConf.load(Path(path)))
    if overrides:
        cfg = OmegaConf.merge(cfg, overrides)
    return OmegaConf.to_object(cfg)


def build_timer(config: Optional[ProfilingConfig] = None) -> ActionTimer:
    """Configure logging from ``config`` and return a timer logging through loguru."""

    config = config or ProfilingConfig()
    log_file = Path(config.log_file) if config.log_file else None
    setup_logging(log_file, level=config.level)
    return ActionTimer(gate=LoguruGate(level=config.level, channel=config.channel))


__all__ = ["ProfilingConfig", "load_config", "build_timer"]
