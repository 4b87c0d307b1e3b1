# src/xtatus/tasks/task_runner.py

"""
Subprocess runner.

Runs one executable with no arguments, captures stdout and reports a
RunResult. Never raises for launch/exit/wait/timeout problems and never
retries: the scheduler loop owns the retry policy.
"""

from __future__ import annotations

import contextlib
import logging
import subprocess
from pathlib import Path

from .task_models import FailureKind, RunResult

logger = logging.getLogger(__name__)

# How long to wait for a killed child to be reaped before giving up on it.
_REAP_TIMEOUT_SECONDS = 5.0
_STDERR_TAIL_CHARS = 400


def _decode(raw: bytes | None) -> str:
    return (raw or b"").decode("utf-8", errors="replace")


def _stderr_tail(stderr: str) -> str:
    tail = stderr.strip()
    if len(tail) > _STDERR_TAIL_CHARS:
        tail = "..." + tail[-_STDERR_TAIL_CHARS:]
    return tail


def _kill_and_reap(process: subprocess.Popen) -> None:
    with contextlib.suppress(OSError):
        process.kill()
    try:
        process.communicate(timeout=_REAP_TIMEOUT_SECONDS)
    except (subprocess.TimeoutExpired, OSError, ValueError):
        # A grandchild may still hold the pipes open; stop waiting on it.
        logger.warning("Child pid=%s not reaped after kill", process.pid)
        for stream in (process.stdout, process.stderr):
            if stream is not None:
                with contextlib.suppress(OSError):
                    stream.close()


def run_command(
    path: str,
    *,
    timeout: float | None = None,
    cwd: str | Path | None = None,
) -> RunResult:
    """
    Launch `path`, wait for it and capture its standard output.

    - exit status 0      -> RunResult.success(stdout)
    - launch error       -> FailureKind.LAUNCH
    - non-zero exit      -> FailureKind.EXIT
    - timeout elapsed    -> FailureKind.TIMEOUT (child is killed)
    - wait/read OSError  -> FailureKind.WAIT

    stdout is decoded as UTF-8 (invalid bytes replaced). Newlines are not
    translated, so "\\r" survives into the captured text.
    """
    if timeout is not None and timeout <= 0:
        timeout = None

    try:
        process = subprocess.Popen(
            [path],
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            cwd=cwd,
            shell=False,
        )
    except (OSError, ValueError) as e:
        return RunResult.failure(FailureKind.LAUNCH, f"could not start {path}: {e}")

    try:
        out, err = process.communicate(timeout=timeout)
    except subprocess.TimeoutExpired:
        _kill_and_reap(process)
        return RunResult.failure(FailureKind.TIMEOUT, f"{path} timed out after {timeout}s")
    except OSError as e:
        _kill_and_reap(process)
        return RunResult.failure(FailureKind.WAIT, f"could not wait for {path}: {e}")

    stderr = _decode(err)
    code = process.returncode
    if code != 0:
        reason = f"{path} exited with status {code}"
        if code is not None and code < 0:
            reason = f"{path} killed by signal {-code}"
        tail = _stderr_tail(stderr)
        if tail:
            reason = f"{reason}: {tail}"
        return RunResult.failure(FailureKind.EXIT, reason, returncode=code, stderr=stderr)

    return RunResult.success(_decode(out))


def split_output_lines(text: str) -> list[str]:
    """
    Split captured stdout into lines.

    Splits on "\\n" only. One trailing terminator does not create an extra
    empty line, so "a\\nb\\n" and "a\\nb" both give ["a", "b"] while
    "a\\n\\n" keeps the blank line the child printed: ["a", ""].
    """
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines
