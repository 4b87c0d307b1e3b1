# tests/conftest.py

from __future__ import annotations

import logging
import stat
from collections.abc import Callable
from pathlib import Path

import pytest


@pytest.fixture()
def make_script(tmp_path: Path) -> Callable[[str, str], Path]:
    """
    Factory writing an executable /bin/sh script into tmp_path.

    We use real child processes here because launch/exit/timeout handling
    is exactly what the runner tests are about.
    """

    def _make(name: str, body: str) -> Path:
        path = tmp_path / name
        path.write_text("#!/bin/sh\n" + body + "\n", "utf-8")
        path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return path

    return _make


@pytest.fixture()
def restore_root_logging():
    """setup_logging() replaces root handlers; put pytest's back afterwards."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for h in list(root.handlers):
        if h not in handlers:
            root.removeHandler(h)
            h.close()
    for h in handlers:
        if h not in root.handlers:
            root.addHandler(h)
    root.setLevel(level)
    logging.captureWarnings(False)
