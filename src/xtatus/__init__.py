"""xtatus: run commands on fixed intervals and show their latest output."""

__version__ = "0.1.0"
