"""Console entrypoint.

The CLI itself is implemented in `docs_changelog_trigger.trigger.main`.
"""

from __future__ import annotations

from docs_changelog_trigger.trigger.main import main

__all__ = ["main"]


if __name__ == "__main__":
    raise SystemExit(main())
