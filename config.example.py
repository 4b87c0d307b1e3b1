# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
CLI flags (see `xtatus --help`) override these for a single run.

This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "XTATUS_APP_NAME": "App display name (default: xtatus).",
    "XTATUS_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    "XTATUS_DATA_DIR": "Directory for xtatus.log (default: .local/xtatus).",
    # Tasks
    "XTATUS_WORKDIR": (
        "Working directory to switch to before loading tasks. "
        "'exe' means the directory of the entry script (default: current directory)."
    ),
    "XTATUS_TASKS_FILE": "Task file, one '<interval> <path>' per line (default: scripts.config).",
    "XTATUS_RUN_TIMEOUT": "Seconds a single run may take before the child is killed; 0 disables (default: 300).",
    # Console panel
    "XTATUS_REFRESH_SECONDS": "Panel redraw period in seconds (default: 1.0).",
    "XTATUS_PANEL_WIDTH": "Width of the separator drawn under each task's output (default: 40).",
    "XTATUS_CLEAR_SCREEN": "Clear the terminal between frames when stdout is a TTY (default: true).",
}
