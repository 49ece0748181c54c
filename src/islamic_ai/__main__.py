"""Allow ``python -m islamic_ai``."""

from islamic_ai.cli import main

raise SystemExit(main())
