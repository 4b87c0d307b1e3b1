"""Allow running as `python -m xtatus`."""

from xtatus.cli.main import main

raise SystemExit(main())
