#!/usr/bin/env python3
"""Programmatic dispatch example.

This demonstrates using the trigger components directly:

* load settings from the environment / `.env`
* authenticate and dispatch one workflow run
* report the outcome without going through the CLI

Like the CLI, this takes no arguments: the dispatched ref is fixed by configuration.
"""

from __future__ import annotations

from docs_changelog_trigger.trigger.config import TriggerSettings
from docs_changelog_trigger.trigger.dispatch import DispatchError, DispatchTrigger
from docs_changelog_trigger.trigger.github.client import GitHubClient
from docs_changelog_trigger.trigger.logging import configure_logging


def main() -> int:
    settings = TriggerSettings()
    configure_logging(settings.log_level)

    github = GitHubClient(
        token=settings.github_token.get_secret_value(),
        dispatch_token=settings.target_repo_pat.get_secret_value(),
        base_url=settings.github_base_url,
        timeout_seconds=settings.request_timeout_seconds,
    )
    try:
        result = DispatchTrigger(github=github, target=settings.target).run()
    except DispatchError as exc:
        print(str(exc))
        return 1
    finally:
        github.close()

    print(f"Dispatched {result.target.workflow_file} on {result.target.ref}")
    print(f"Accepted at: {result.dispatched_at.isoformat()}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
