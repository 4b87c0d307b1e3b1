# tests/test_cli.py

from __future__ import annotations

import signal
import sys
from pathlib import Path

import pytest

import xtatus.config
from xtatus.cli.main import EXIT_CONFIG, EXIT_OK, main

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="uses /bin/sh scripts")


@pytest.fixture()
def cli_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path, restore_root_logging) -> Path:
    """
    Isolate main(): fresh settings, logs under tmp_path, cwd restored afterwards,
    and no process-wide signal handlers installed by the test run.
    """
    for name in ("XTATUS_WORKDIR", "XTATUS_TASKS_FILE", "XTATUS_RUN_TIMEOUT", "XTATUS_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("XTATUS_DATA_DIR", str(tmp_path / "logs"))
    monkeypatch.setattr(xtatus.config, "_SETTINGS", None)
    monkeypatch.setattr(signal, "signal", lambda *_args: None)
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_missing_task_file_exits_with_config_error(cli_env: Path) -> None:
    assert main(["--tasks", "missing.config"]) == EXIT_CONFIG
    assert (cli_env / "logs" / "xtatus.log").exists()


def test_malformed_task_file_exits_with_config_error(cli_env: Path) -> None:
    (cli_env / "scripts.config").write_text("soon ./a.sh\n", "utf-8")
    assert main(["--tasks", "scripts.config"]) == EXIT_CONFIG


def test_bad_workdir_exits_with_config_error(cli_env: Path) -> None:
    assert main(["--workdir", str(cli_env / "nowhere")]) == EXIT_CONFIG


@posix_only
def test_once_runs_tasks_and_prints_one_frame(
    cli_env: Path, make_script, capsys: pytest.CaptureFixture[str]
) -> None:
    make_script("echo-ok", "echo ready")
    make_script("false", "exit 1")
    (cli_env / "scripts.config").write_text("1 ./echo-ok\n1 ./false\n", "utf-8")

    code = main(["--workdir", str(cli_env), "--tasks", "scripts.config", "--once", "--width", "8"])

    assert code == EXIT_OK
    out = capsys.readouterr().out
    assert "ready\n--------\n--------" in out
