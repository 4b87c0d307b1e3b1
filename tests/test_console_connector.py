# tests/test_console_connector.py

from __future__ import annotations

import io

from xtatus.connectors.console_connector import render_snapshot, run_console_loop
from xtatus.tasks.task_models import BufferSnapshot

from .fakes import FakeSnapshotSource


def _entries() -> list[BufferSnapshot]:
    return [
        BufferSnapshot(path="./battery.sh", lines=["BAT 87%", "charging"], has_run=True),
        BufferSnapshot(path="./never.sh", lines=[], has_run=False),
        BufferSnapshot(path="./clock.sh", lines=["12:00"], has_run=True),
    ]


def test_render_snapshot_blocks_and_rules_in_task_order() -> None:
    frame = render_snapshot(_entries(), width=5)
    assert frame.split("\n") == [
        "BAT 87%",
        "charging",
        "-----",
        "-----",
        "12:00",
        "-----",
    ]


def test_render_snapshot_empty() -> None:
    assert render_snapshot([], width=10) == ""


def test_console_loop_draws_until_stopped() -> None:
    source = FakeSnapshotSource(entries=_entries(), frames=3)
    out = io.StringIO()

    frames = run_console_loop(source, refresh_seconds=0.25, width=3, clear=True, stream=out)

    assert frames == 3
    assert source.waits == [0.25, 0.25, 0.25]
    text = out.getvalue()
    # StringIO is not a TTY, so no clear sequences are emitted.
    assert "\033[2J" not in text
    assert text.count("BAT 87%") == 3


def test_console_loop_once_does_not_wait() -> None:
    source = FakeSnapshotSource(entries=_entries(), frames=99)
    out = io.StringIO()

    assert run_console_loop(source, once=True, stream=out) == 1
    assert source.waits == []
    assert "12:00" in out.getvalue()
