# src/xtatus/tasks/task_scheduler.py

from __future__ import annotations

"""
Per-task scheduler loop.

One thread per task that:
- runs the task's executable immediately on activation,
- then again every `interval` seconds (measured from the start of each run),
- publishes the captured lines on success,
- logs and keeps the previous output on failure.

The loop never holds the registry lock itself; publishing goes through the
injected `publish` callable, which does the locked buffer swap.
"""

import logging
import threading
import time

from ..core.ports import Clock, CommandRunner, OutputPublisher
from .task_models import LoopState, RunResult, TaskDescriptor
from .task_runner import run_command, split_output_lines

logger = logging.getLogger(__name__)


class TaskLoop(threading.Thread):
    """
    Scheduler loop for a single task.

    Shutdown model:
    - the registry sets `stop_event`
    - a loop waiting for its next cycle wakes up at once and exits
    - a loop in the middle of a run finishes that run first (the child
      process is never cancelled), then exits without launching another
    """

    def __init__(
            self,
            descriptor: TaskDescriptor,
            publish: OutputPublisher,
            *,
            stop_event: threading.Event,
            runner: CommandRunner = run_command,
            run_timeout: float | None = None,
            clock: Clock = time.monotonic,
            name: str | None = None,
    ) -> None:
        super().__init__(name=name or f"xtatus-task:{descriptor.path}", daemon=False)
        self.descriptor = descriptor
        self._publish = publish
        self._stop_event = stop_event
        self._runner = runner
        self._run_timeout = run_timeout
        self._clock = clock

        self.state = LoopState.AWAITING_FIRST_RUN
        self.first_cycle_done = threading.Event()
        self.runs = 0
        self.failures = 0
        self.last_run_started: float | None = None

    def run(self) -> None:
        d = self.descriptor
        logger.info("Task loop started path=%s interval=%ss", d.path, d.interval)

        while not self._stop_event.is_set():
            cycle_start = self._clock()
            self.last_run_started = cycle_start
            self.run_once()
            self.state = LoopState.RUNNING
            self.first_cycle_done.set()

            remaining = d.interval - (self._clock() - cycle_start)
            if remaining > 0 and self._stop_event.wait(remaining):
                break

        logger.info("Task loop stopped path=%s runs=%d failures=%d", d.path, self.runs, self.failures)

    def run_once(self) -> bool:
        """Run the task once and publish on success. Returns True on success."""
        path = self.descriptor.path
        self.runs += 1

        try:
            result: RunResult = self._runner(path, timeout=self._run_timeout)
        except Exception:
            self.failures += 1
            logger.exception("Runner crashed path=%s", path)
            return False

        if not result.ok:
            self.failures += 1
            kind = result.kind.value if result.kind is not None else "unknown"
            logger.warning("Task failed path=%s kind=%s: %s", path, kind, result.reason)
            return False

        lines = split_output_lines(result.text)
        try:
            self._publish(lines)
        except Exception:
            self.failures += 1
            logger.exception("Publishing output failed path=%s", path)
            return False

        logger.debug("Task ok path=%s lines=%d", path, len(lines))
        return True
