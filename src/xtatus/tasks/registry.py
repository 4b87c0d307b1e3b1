# src/xtatus/tasks/registry.py

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from ..core.ports import Clock, CommandRunner
from .task_config import ConfigurationError
from .task_models import BufferSnapshot, OutputBuffer, TaskDescriptor
from .task_runner import run_command
from .task_scheduler import TaskLoop

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _Entry:
    descriptor: TaskDescriptor
    buffer: OutputBuffer
    loop: TaskLoop


class TaskRegistry:
    """
    Fixed, ordered collection of tasks plus the one lock guarding their buffers.

    Writers are the task loops (through `publish`); the reader is whoever
    calls `snapshot()`. Both only copy data while holding the lock, so no
    subprocess or rendering work ever happens inside the critical section.

    The task list is set at construction and never resized.
    """

    def __init__(
            self,
            descriptors: Iterable[TaskDescriptor],
            *,
            runner: CommandRunner = run_command,
            run_timeout: float | None = None,
            clock: Clock = time.monotonic,
    ) -> None:
        descriptors = list(descriptors)
        if not descriptors:
            raise ConfigurationError("no tasks configured")

        self._lock = threading.Lock()
        self._stop_event = threading.Event()
        self._started = False

        entries: list[_Entry] = []
        for index, d in enumerate(descriptors):
            loop = TaskLoop(
                d,
                self._publisher_for(index),
                stop_event=self._stop_event,
                runner=runner,
                run_timeout=run_timeout,
                clock=clock,
                name=f"xtatus-task-{index}",
            )
            entries.append(_Entry(descriptor=d, buffer=OutputBuffer(), loop=loop))
        self._entries: tuple[_Entry, ...] = tuple(entries)

        logger.info("TaskRegistry ready tasks=%d", len(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __enter__(self) -> TaskRegistry:
        self.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self.shutdown()

    @property
    def descriptors(self) -> list[TaskDescriptor]:
        return [e.descriptor for e in self._entries]

    @property
    def loops(self) -> list[TaskLoop]:
        return [e.loop for e in self._entries]

    @property
    def is_running(self) -> bool:
        return self._started and not self._stop_event.is_set()

    # ---- lifecycle ----

    def start(self) -> None:
        if self._started:
            raise RuntimeError("TaskRegistry already started")
        self._started = True
        for e in self._entries:
            e.loop.start()
        logger.info("Started %d task loops", len(self._entries))

    def stop(self) -> None:
        """Signal every loop to exit at its next cycle boundary."""
        if not self._stop_event.is_set():
            logger.info("Stopping task loops...")
        self._stop_event.set()

    def join(self, timeout: float | None = None) -> None:
        """
        Wait for all loops to exit.

        A loop that is in the middle of a run finishes that run first, so this
        can take as long as the slowest in-flight child (bounded by the run
        timeout). `timeout` applies per loop.
        """
        for e in self._entries:
            if not e.loop.is_alive():
                continue
            e.loop.join(timeout=timeout)
            if e.loop.is_alive():
                logger.warning("Task loop still running after join path=%s", e.descriptor.path)

    def shutdown(self, timeout: float | None = None) -> None:
        self.stop()
        if self._started:
            self.join(timeout=timeout)

    def wait_first_cycle(self, timeout: float | None = None) -> bool:
        """
        Wait until every loop has finished its first run attempt.

        Returns False if `timeout` (shared by all loops) ran out first or the
        registry was stopped before some loop got going.
        """
        if not self._started:
            raise RuntimeError("TaskRegistry not started")
        deadline = None if timeout is None else time.monotonic() + timeout
        for e in self._entries:
            while not e.loop.first_cycle_done.is_set():
                if self._stop_event.is_set() and not e.loop.is_alive():
                    return False
                wait_s = 0.1
                if deadline is not None:
                    left = deadline - time.monotonic()
                    if left <= 0:
                        return False
                    wait_s = min(wait_s, left)
                e.loop.first_cycle_done.wait(wait_s)
        return True

    def wait_stopped(self, timeout: float | None = None) -> bool:
        """Block until stop() is called or `timeout` elapses. Returns True if stopped."""
        return self._stop_event.wait(timeout)

    # ---- publish / consume ----

    def publish(self, index: int, lines: Sequence[str]) -> None:
        """Replace task `index`'s buffer with `lines` in one step."""
        new_lines = list(lines)
        buffer = self._entries[index].buffer
        with self._lock:
            buffer.replace(new_lines)

    def _publisher_for(self, index: int):
        def publish(lines: Sequence[str]) -> None:
            self.publish(index, lines)

        return publish

    def snapshot(self) -> list[BufferSnapshot]:
        """
        Copy every buffer in task order under one lock acquisition.

        Each entry is a complete read of one buffer; different entries may
        reflect different instants.
        """
        with self._lock:
            return [
                BufferSnapshot(path=e.descriptor.path, lines=list(e.buffer.lines), has_run=e.buffer.has_run)
                for e in self._entries
            ]
