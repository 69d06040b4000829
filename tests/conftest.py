from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from loguru import logger

from actiontimer.profiling.clock import Clock
from actiontimer.profiling.gate import PROFILING_MARKER, LoguruGate
from actiontimer.profiling.registry import ActionRegistry
from actiontimer.profiling.timer import ActionTimer


class FakeClock(Clock):
    """Clock that only moves when told to."""

    def __init__(self):
        self.now_ns = 0

    def advance(self, ms: int = 0, ns: int = 0) -> None:
        self.now_ns += ms * 1_000_000 + ns

    def sleep(self, seconds: float) -> None:
        self.now_ns += int(seconds * 1_000_000_000)

    def millis(self) -> int:
        return self.now_ns // 1_000_000

    def nanos(self) -> int:
        return self.now_ns

    def seconds(self) -> float:
        return self.now_ns / 1_000_000_000


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def messages():
    captured = []
    handler_id = logger.add(
        lambda message: captured.append(message.record["message"]),
        level="DEBUG",
        format="{message}",
        filter=lambda record: record["extra"].get("marker") == PROFILING_MARKER,
    )
    yield captured
    logger.remove(handler_id)


@pytest.fixture
def timer(clock):
    return ActionTimer(gate=LoguruGate(level="DEBUG"), registry=ActionRegistry(), clock=clock)


@pytest.fixture
def quiet_timer(clock):
    return ActionTimer(gate=LoguruGate(level="INFO"), registry=ActionRegistry(), clock=clock)


def work_taking(clock: FakeClock, ms: int = 0, ns: int = 0, result=None):
    def work():
        clock.advance(ms=ms, ns=ns)
        return result

    return work
