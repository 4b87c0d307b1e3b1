# src/xtatus/connectors/console_connector.py

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence
from datetime import datetime
from typing import TextIO

from ..core.ports import SnapshotSource
from ..tasks.task_models import BufferSnapshot

logger = logging.getLogger(__name__)

_CLEAR = "\033[H\033[2J"


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def render_snapshot(entries: Sequence[BufferSnapshot], *, width: int = 40) -> str:
    """
    Render one frame of the status panel.

    Each task contributes its output lines followed by a separator rule,
    in task order. A task that never succeeded contributes only its rule.
    """
    rule = "-" * max(1, width)
    out: list[str] = []
    for entry in entries:
        out.extend(entry.lines)
        out.append(rule)
    return "\n".join(out)


def run_console_loop(
    source: SnapshotSource,
    *,
    refresh_seconds: float = 1.0,
    width: int = 40,
    clear: bool = True,
    once: bool = False,
    stream: TextIO | None = None,
) -> int:
    """
    Draw the panel until the source is stopped. Returns the number of frames drawn.

    The snapshot is taken first and all formatting/printing happens on the
    copy, so task loops are never blocked by terminal I/O.
    """
    stream = stream or sys.stdout
    try:
        clear = clear and stream.isatty()
    except (AttributeError, ValueError):
        clear = False

    logger.info("Console panel started (refresh=%ss, width=%d).", refresh_seconds, width)

    frames = 0
    while True:
        frame = render_snapshot(source.snapshot(), width=width)
        if clear:
            stream.write(_CLEAR)
        else:
            stream.write(f"[{_ts_local()}]\n")
        stream.write(frame + "\n")
        stream.flush()
        frames += 1

        if once or source.wait_stopped(refresh_seconds):
            break

    logger.info("Console panel finished after %d frames.", frames)
    return frames
