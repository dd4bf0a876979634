"""Allow ``python -m cachesync``."""

from cachesync.cli.main import main

raise SystemExit(main())
