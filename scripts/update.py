#!/usr/bin/env python3
"""Local CLI entrypoint to run the updater outside of the CI action.

Usage:
  python scripts/update.py --path . [--kind npm|nuget] [--config settings.json] [--json]

This calls the same core update_repository used by the action wrapper.
"""

from __future__ import annotations

from dependency_updater.action import main


if __name__ == "__main__":
    raise SystemExit(main())
