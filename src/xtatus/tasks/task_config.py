# src/xtatus/tasks/task_config.py

"""
Task file loader.

Format: one task per line, `<interval> <path>`.
- interval: positive whole number of seconds
- path: executable, run with no arguments; relative paths are left as
  written and resolved against the working directory when spawned
- blank lines and lines starting with "#" are skipped
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from .task_models import TaskDescriptor

logger = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """Task configuration is missing or malformed. Fatal at startup."""


def parse_task_line(line: str, *, source: str = "<string>", lineno: int = 0) -> TaskDescriptor | None:
    text = line.strip()
    if not text or text.startswith("#"):
        return None

    where = f"{source}:{lineno}"
    parts = text.split()
    if len(parts) < 2:
        raise ConfigurationError(f"{where}: expected '<interval> <path>', got {text!r}")

    raw_interval, path = parts[0], parts[1]
    try:
        interval = int(raw_interval)
    except ValueError:
        raise ConfigurationError(f"{where}: interval must be a whole number of seconds, got {raw_interval!r}") from None

    if interval <= 0:
        raise ConfigurationError(f"{where}: interval must be positive, got {interval}")

    if len(parts) > 2:
        logger.warning("%s: ignoring extra fields after path: %s", where, " ".join(parts[2:]))

    return TaskDescriptor(interval=interval, path=path)


def parse_task_lines(lines: Iterable[str], *, source: str = "<string>") -> list[TaskDescriptor]:
    tasks: list[TaskDescriptor] = []
    for lineno, line in enumerate(lines, start=1):
        task = parse_task_line(line, source=source, lineno=lineno)
        if task is not None:
            tasks.append(task)

    if not tasks:
        raise ConfigurationError(f"{source}: no tasks configured")
    return tasks


def load_task_file(path: str | Path) -> list[TaskDescriptor]:
    path = Path(path)
    try:
        text = path.read_text("utf-8")
    except OSError as e:
        raise ConfigurationError(f"could not read task file {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise ConfigurationError(f"task file {path} is not valid UTF-8: {e}") from e

    tasks = parse_task_lines(text.splitlines(), source=str(path))
    for i, t in enumerate(tasks):
        logger.info("Task %d: every %ss %s", i, t.interval, t.path)
    return tasks
