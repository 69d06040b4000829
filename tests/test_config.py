from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from loguru import logger
from omegaconf.errors import ConfigKeyError

import actiontimer
from actiontimer.profiling.gate import LoguruGate
from actiontimer.utils.config import ProfilingConfig, build_timer, load_config


def test_defaults():
    cfg = load_config()
    assert isinstance(cfg, ProfilingConfig)
    assert cfg.level == "INFO"
    assert cfg.log_file is None


def test_yaml_and_overrides(tmp_path):
    path = tmp_path / "profiling.yaml"
    path.write_text("level: DEBUG\nchannel: bench\n", encoding="utf-8")
    cfg = load_config(path, channel="override")
    assert cfg.level == "DEBUG"
    assert cfg.channel == "override"


def test_unknown_key_rejected():
    with pytest.raises(ConfigKeyError):
        load_config(samples=3)


def test_build_timer_logs_to_file(tmp_path):
    log_file = tmp_path / "logs" / "profiling.log"
    timer = build_timer(ProfilingConfig(level="DEBUG", log_file=str(log_file), channel="bench"))
    try:
        assert isinstance(timer.gate, LoguruGate)
        assert timer.gate.debug_enabled
        assert timer.time(lambda: "done", "Startup") == "done"
    finally:
        logger.remove()
    text = log_file.read_text(encoding="utf-8")
    assert "bench" in text
    assert "Startup complete.  Execution time:" in text


def test_build_timer_at_info_bypasses(tmp_path):
    try:
        timer = build_timer(ProfilingConfig(level="INFO"))
        assert not timer.gate.debug_enabled
        assert timer.average("Startup", lambda: 1, samples=2) == 1
        assert len(timer.registry) == 0
    finally:
        logger.remove()


def test_package_exports():
    assert isinstance(actiontimer.__version__, str)
    assert actiontimer.ActionTimer is not None
    assert issubclass(actiontimer.InvalidArgumentError, ValueError)
