# src/xtatus/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds the TaskRegistry from the task file, starts one
loop per task and draws the console panel in the main thread until SIGINT
or SIGTERM. All task loops are joined before exit.
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import signal
from collections.abc import Sequence
from pathlib import Path

from ..cli.bootstrap import create_registry
from ..config import Settings, get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging
from ..tasks.task_config import ConfigurationError

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CONFIG = 1


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="xtatus",
        description="Run commands on fixed intervals and show their latest output.",
    )
    p.add_argument("-t", "--tasks", type=Path, help="task file (<interval> <path> per line)")
    p.add_argument("-C", "--workdir", help="working directory; 'exe' = directory of the entry script")
    p.add_argument("--refresh", type=float, help="panel refresh period in seconds")
    p.add_argument("--width", type=int, help="separator width of the panel")
    p.add_argument("--timeout", type=float, help="per-run timeout in seconds (0 disables)")
    p.add_argument("--no-clear", action="store_true", help="do not clear the terminal between frames")
    p.add_argument("--once", action="store_true", help="run every task once, print one frame and exit")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging on the console")
    return p


def apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    changes: dict[str, object] = {}
    if args.tasks is not None:
        changes["tasks_file"] = args.tasks
    if args.workdir is not None:
        changes["workdir"] = args.workdir
    if args.refresh is not None:
        changes["refresh_seconds"] = max(0.05, args.refresh)
    if args.width is not None:
        changes["panel_width"] = max(1, args.width)
    if args.timeout is not None:
        changes["run_timeout"] = args.timeout if args.timeout > 0 else None
    if args.no_clear:
        changes["clear_screen"] = False
    if args.verbose:
        changes["log_level"] = "DEBUG"
    return dataclasses.replace(settings, **changes) if changes else settings


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = apply_overrides(get_settings(), args)

    level_name = str(settings.log_level).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    try:
        registry = create_registry(settings=settings)
    except ConfigurationError as e:
        logger.error("Configuration error: %s", e)
        return EXIT_CONFIG

    def _handle_signal(signum, _frame) -> None:
        logger.info("Signal %s received, shutting down...", signum)
        registry.stop()

    try:
        signal.signal(signal.SIGINT, _handle_signal)
        signal.signal(signal.SIGTERM, _handle_signal)
    except (ValueError, OSError, AttributeError):
        # Not in the main thread, or the platform lacks SIGTERM.
        logger.debug("Signal handlers not installed.", exc_info=True)

    registry.start()
    try:
        if args.once:
            if not registry.wait_first_cycle(timeout=settings.run_timeout):
                logger.warning("Not every task finished its first run.")
        run_console_loop(
            registry,
            refresh_seconds=settings.refresh_seconds,
            width=settings.panel_width,
            clear=settings.clear_screen and not args.once,
            once=args.once,
        )
    finally:
        registry.shutdown()
        logger.info("Bye.")

    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
