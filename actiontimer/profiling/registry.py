"""Per-action rolling state for profiled operations."""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Dict, Iterator, Optional, Tuple

import numpy as np


@dataclass(frozen=True)
class ActionSnapshot:
    """Point-in-time copy of an action's state."""

    name: str
    window: Tuple[int, ...]
    executions: int
    last_emission: Optional[float]

    @property
    def mean(self) -> Optional[float]:
        return float(np.mean(self.window)) if self.window else None


@dataclass
class ActionState:
    """Sample window, execution count and last emission time for one action.

    Callers hold :attr:`lock` around any read-modify-write sequence.
    """

    name: str
    window: Deque[int] = field(default_factory=deque)
    executions: int = 0
    last_emission: Optional[float] = None
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def record(self, elapsed: int, capacity: Optional[int] = None) -> None:
        """Append ``elapsed``, evicting the oldest entries beyond ``capacity``.

        ``capacity=None`` keeps the window unbounded.
        """
        if self.window.maxlen != capacity:
            self.window = deque(self.window, maxlen=capacity)
        self.window.append(elapsed)

    def mean(self) -> Optional[float]:
        if not self.window:
            return None
        return float(np.mean(self.window))

    def snapshot(self) -> ActionSnapshot:
        with self.lock:
            return ActionSnapshot(self.name, tuple(self.window), self.executions, self.last_emission)


class ActionRegistry:
    """Collection of :class:`ActionState` keyed by action name."""

    def __init__(self):
        self._states: Dict[str, ActionState] = {}
        self._lock = threading.Lock()

    def upsert(self, action_name: str) -> ActionState:
        """Return the state for ``action_name``, creating an empty one if needed."""
        with self._lock:
            state = self._states.get(action_name)
            if state is None:
                state = ActionState(action_name)
                self._states[action_name] = state
            return state

    def get(self, action_name: str) -> Optional[ActionState]:
        with self._lock:
            return self._states.get(action_name)

    def snapshot(self) -> Dict[str, ActionSnapshot]:
        with self._lock:
            states = list(self._states.values())
        return {state.name: state.snapshot() for state in states}

    def reset(self, action_name: Optional[str] = None) -> None:
        with self._lock:
            if action_name is None:
                self._states.clear()
            else:
                self._states.pop(action_name, None)

    def __contains__(self, action_name: object) -> bool:
        with self._lock:
            return action_name in self._states

    def __len__(self) -> int:
        with self._lock:
            return len(self._states)

    def __iter__(self) -> Iterator[str]:
        with self._lock:
            return iter(list(self._states))


__all__ = ["ActionRegistry", "ActionSnapshot", "ActionState"]
