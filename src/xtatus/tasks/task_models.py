# src/xtatus/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class LoopState(StrEnum):
    """
    Scheduler loop lifecycle.

    There is no "stopped" state during normal operation: a loop keeps
    RUNNING until the registry's stop event is set and the thread exits.
    """

    AWAITING_FIRST_RUN = "awaiting_first_run"
    RUNNING = "running"


class FailureKind(StrEnum):
    LAUNCH = "launch"  # could not start the executable
    EXIT = "exit"  # non-zero exit status (or killed by a signal)
    WAIT = "wait"  # could not observe the child's termination
    TIMEOUT = "timeout"  # exceeded run timeout, child killed


@dataclass(slots=True, frozen=True)
class TaskDescriptor:
    interval: float
    path: str

    def __post_init__(self) -> None:
        if not self.path:
            raise ValueError("task path must not be empty")
        if not self.interval > 0:
            raise ValueError(f"task interval must be positive, got {self.interval!r}")


@dataclass(slots=True)
class OutputBuffer:
    """
    Most recent successful output of one task.

    Owned by the registry; only touched while holding the registry lock.
    """

    lines: list[str] = field(default_factory=list)
    has_run: bool = False

    def replace(self, lines: list[str]) -> None:
        # Caller hands over a fresh list; no copying under the lock.
        self.lines = lines
        self.has_run = True


@dataclass(slots=True, frozen=True)
class BufferSnapshot:
    path: str
    lines: list[str]
    has_run: bool

    def __iter__(self):
        # Allows `for path, lines, has_run in registry.snapshot()`.
        return iter((self.path, self.lines, self.has_run))


@dataclass(slots=True, frozen=True)
class RunResult:
    """
    Outcome of one subprocess run.

    `text` is only meaningful when `ok` is true. `returncode` and `stderr`
    are kept for logs; they never reach the output buffer.
    """

    ok: bool
    text: str = ""
    kind: FailureKind | None = None
    reason: str = ""
    returncode: int | None = None
    stderr: str = ""

    @classmethod
    def success(cls, text: str) -> RunResult:
        return cls(ok=True, text=text, returncode=0)

    @classmethod
    def failure(
        cls,
        kind: FailureKind,
        reason: str,
        *,
        returncode: int | None = None,
        stderr: str = "",
    ) -> RunResult:
        return cls(ok=False, kind=kind, reason=reason, returncode=returncode, stderr=stderr)
