# tests/fakes.py

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from xtatus.tasks.task_models import BufferSnapshot, FailureKind, RunResult


@dataclass(slots=True)
class RunCall:
    path: str
    started: float
    timeout: float | None


@dataclass
class FakeRunner:
    """
    Deterministic CommandRunner for scheduler tests.

    - Records every call (path + monotonic start time)
    - Delegates the outcome to `behavior(path, call_index)`; default is
      success with "ok\\n"
    - Thread-safe: several task loops may share one instance
    """

    behavior: Callable[[str, int], RunResult] | None = None
    calls: list[RunCall] = field(default_factory=list)
    _lock: threading.Lock = field(default_factory=threading.Lock)

    def __call__(self, path: str, *, timeout: float | None = None, cwd: str | Path | None = None) -> RunResult:
        with self._lock:
            index = sum(1 for c in self.calls if c.path == path)
            self.calls.append(RunCall(path=path, started=time.monotonic(), timeout=timeout))
        if self.behavior is None:
            return RunResult.success("ok\n")
        return self.behavior(path, index)

    def calls_for(self, path: str) -> list[RunCall]:
        with self._lock:
            return [c for c in self.calls if c.path == path]


def sequence(*results: RunResult) -> Callable[[str, int], RunResult]:
    """Behavior that replays `results` in order and then repeats the last one."""

    def behavior(_path: str, index: int) -> RunResult:
        return results[min(index, len(results) - 1)]

    return behavior


def fail(kind: FailureKind = FailureKind.EXIT, reason: str = "boom") -> RunResult:
    return RunResult.failure(kind, reason, returncode=1 if kind == FailureKind.EXIT else None)


@dataclass
class FakeSnapshotSource:
    """SnapshotSource that serves fixed entries and reports stopped after `frames` waits."""

    entries: list[BufferSnapshot]
    frames: int = 1
    waits: list[float | None] = field(default_factory=list)

    def snapshot(self) -> list[BufferSnapshot]:
        return list(self.entries)

    def wait_stopped(self, timeout: float | None = None) -> bool:
        self.waits.append(timeout)
        return len(self.waits) >= self.frames
