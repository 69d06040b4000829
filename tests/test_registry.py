from __future__ import annotations

import sys
import threading
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from actiontimer.profiling.registry import ActionRegistry, ActionState


def test_upsert_creates_empty_state_once():
    registry = ActionRegistry()
    state = registry.upsert("load")
    assert list(state.window) == []
    assert state.executions == 0
    assert state.last_emission is None
    assert registry.upsert("load") is state
    assert "load" in registry
    assert len(registry) == 1


def test_get_does_not_create():
    registry = ActionRegistry()
    assert registry.get("missing") is None
    assert "missing" not in registry


def test_bounded_window_slides():
    state = ActionState("render")
    for elapsed in range(1, 8):
        state.record(elapsed, capacity=3)
        assert len(state.window) <= 3
    assert list(state.window) == [5, 6, 7]
    assert state.mean() == 6.0


def test_capacity_change_keeps_most_recent():
    state = ActionState("render")
    for elapsed in (1, 2, 3, 4):
        state.record(elapsed, capacity=4)
    state.record(5, capacity=2)
    assert list(state.window) == [4, 5]


def test_unbounded_window():
    state = ActionState("poll")
    for elapsed in range(100):
        state.record(elapsed)
    assert len(state.window) == 100


def test_mean_of_empty_window_is_none():
    assert ActionState("idle").mean() is None


def test_snapshot_and_reset():
    registry = ActionRegistry()
    registry.upsert("a").record(10, capacity=2)
    registry.upsert("b").record(20, capacity=2)
    snapshot = registry.snapshot()
    assert snapshot["a"].window == (10,)
    assert snapshot["b"].mean == 20.0
    assert sorted(registry) == ["a", "b"]

    registry.reset("a")
    assert "a" not in registry
    registry.reset()
    assert len(registry) == 0


def test_concurrent_upsert_returns_single_state():
    registry = ActionRegistry()
    seen = []

    def worker():
        for _ in range(200):
            seen.append(registry.upsert("shared"))

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len({id(state) for state in seen}) == 1
