# src/xtatus/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The scheduler depends on Protocols instead of concrete implementations.
This keeps the subprocess layer and the consumer swappable and makes
testing easier (tests inject scripted runners and manual clocks).
"""

from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Protocol

from ..tasks.task_models import BufferSnapshot, RunResult

Clock = Callable[[], float]
# Monotonic seconds; time.monotonic in production.


class CommandRunner(Protocol):
    """Runs one executable to completion and reports the outcome."""

    def __call__(
            self,
            path: str,
            *,
            timeout: float | None = None,
            cwd: str | Path | None = None,
    ) -> RunResult: ...


class OutputPublisher(Protocol):
    """Loop-side port: replace one task's buffer with freshly captured lines."""

    def __call__(self, lines: Sequence[str]) -> None: ...


class SnapshotSource(Protocol):
    """
    Consumer-side port.

    The consumer (console panel, or any other renderer) never touches the
    registry lock directly; it only works from the copies returned here.
    """

    def snapshot(self) -> list[BufferSnapshot]: ...

    def wait_stopped(self, timeout: float | None = None) -> bool: ...
