# src/xtatus/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing is read at import time except the environment.
- CLI flags override individual fields with dataclasses.replace().
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

ENV_PREFIX = "XTATUS"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _load_dotenv() -> None:
    """Load a local .env (if present) without overriding the real environment."""
    load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Invalid integer in %s=%r, using %s", name, raw, default)
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Invalid number in %s=%r, using %s", name, raw, default)
        return default


def _env_path(name: str, default: Path | None) -> Path | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    data_dir: Path

    # ---- Tasks ----
    workdir: Path | None
    tasks_file: Path
    run_timeout: float | None

    # ---- Console panel ----
    refresh_seconds: float
    panel_width: int
    clear_screen: bool

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "xtatus") or "xtatus"
        log_level = _env(_k("LOG_LEVEL"), "INFO")
        data_dir = _env_path(_k("DATA_DIR"), Path(".local/xtatus")) or Path(".local/xtatus")

        workdir = _env_path(_k("WORKDIR"), None)
        tasks_file = _env_path(_k("TASKS_FILE"), Path("scripts.config")) or Path("scripts.config")

        # 0 (or negative) disables the per-run timeout.
        timeout = _env_float(_k("RUN_TIMEOUT"), 300.0)
        run_timeout = timeout if timeout > 0 else None

        refresh_seconds = max(0.05, _env_float(_k("REFRESH_SECONDS"), 1.0))
        panel_width = max(1, _env_int(_k("PANEL_WIDTH"), 40))
        clear_screen = _env_bool(_k("CLEAR_SCREEN"), True)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            workdir=workdir,
            tasks_file=tasks_file,
            run_timeout=run_timeout,
            refresh_seconds=refresh_seconds,
            panel_width=panel_width,
            clear_screen=clear_screen,
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    """Load settings once (reading .env first) and reuse them afterwards."""
    global _SETTINGS
    if _SETTINGS is None:
        _load_dotenv()
        _SETTINGS = Settings.from_env()
    return _SETTINGS
