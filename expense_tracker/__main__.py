from __future__ import annotations

from expense_tracker.cli import main

raise SystemExit(main())
