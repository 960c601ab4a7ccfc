"""Docs Changelog Trigger.

A small CLI that dispatches the docs changelog workflow in another repository:
- configuration loaded from the environment and `.env`
- structured logging
- a single authenticated `workflow_dispatch` call
"""

__version__ = "0.1.0"

from docs_changelog_trigger.trigger.config import TriggerSettings

__all__ = ["__version__", "TriggerSettings"]
