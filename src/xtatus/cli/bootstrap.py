# src/xtatus/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- resolves the working directory (task paths may be relative to it),
- loads the task file,
- wires the subprocess runner and timeout into a TaskRegistry.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

from ..config import Settings, get_settings
from ..core.ports import CommandRunner
from ..tasks.registry import TaskRegistry
from ..tasks.task_config import ConfigurationError, load_task_file
from ..tasks.task_runner import run_command

logger = logging.getLogger(__name__)

EXE_WORKDIR = "exe"
# Special XTATUS_WORKDIR value: the directory holding the launched entry script.


def resolve_workdir(workdir: str | Path | None) -> Path:
    """
    Change into `workdir` (if given) and return the resulting CWD.

    "exe" means the directory of the running entry point, so a task file and
    scripts shipped next to it are found regardless of where xtatus was
    started from.
    """
    if workdir is not None and str(workdir) != "":
        target = Path(sys.argv[0]).resolve().parent if str(workdir) == EXE_WORKDIR else Path(workdir)
        try:
            os.chdir(target)
        except OSError as e:
            raise ConfigurationError(f"could not change working directory to {target}: {e}") from e

    cwd = Path.cwd()
    logger.info("CWD: %s", cwd)
    return cwd


def create_registry(
    *,
    settings: Settings | None = None,
    runner: CommandRunner = run_command,
) -> TaskRegistry:
    """
    Build the TaskRegistry described by settings.

    Raises ConfigurationError for any problem with the working directory or
    the task file; nothing is started in that case.
    """
    if settings is None:
        settings = get_settings()

    resolve_workdir(settings.workdir)
    descriptors = load_task_file(settings.tasks_file)

    return TaskRegistry(
        descriptors,
        runner=runner,
        run_timeout=settings.run_timeout,
    )
