"""CLI entrypoint for the dispatch trigger.

Exit codes are CI-friendly:
- 0: dispatch accepted (or dry run / show-target succeeded)
- 1: unexpected failure (transport errors included)
- 2: configuration error
- 3: authentication failure
- 4: dispatch rejected by GitHub
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

import requests
from pydantic import ValidationError

from docs_changelog_trigger import __version__
from docs_changelog_trigger.trigger.config import TriggerSettings
from docs_changelog_trigger.trigger.dispatch import (
    AuthenticationFailed,
    DispatchRejected,
    DispatchTrigger,
)
from docs_changelog_trigger.trigger.github.client import GitHubClient
from docs_changelog_trigger.trigger.logging import configure_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIG_ERROR = 2
EXIT_AUTH_FAILED = 3
EXIT_DISPATCH_REJECTED = 4


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docs-changelog-trigger",
        description="Dispatch the docs changelog workflow in the target repository",
    )
    parser.add_argument(
        "--version", action="version", version=f"docs-changelog-trigger {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    dispatch = subparsers.add_parser(
        "dispatch",
        help="Authenticate, then send one workflow_dispatch request",
    )
    dispatch.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the request that would be sent without contacting GitHub",
    )

    subparsers.add_parser(
        "show-target",
        help="Print the resolved dispatch endpoint and payload as JSON",
    )

    return parser


def _format_config_errors(error: ValidationError) -> str:
    # Input values are left out: a model-level error carries every loaded setting,
    # credentials included.
    lines = []
    for item in error.errors(include_url=False, include_input=False):
        location = ".".join(str(part) for part in item["loc"]) or "settings"
        lines.append(f"  {location}: {item['msg']}")
    return "\n".join(lines)


def _describe_request(settings: TriggerSettings) -> dict[str, object]:
    target = settings.target
    return {
        "method": "POST",
        "url": settings.dispatch_url,
        "path": target.path,
        "body": target.payload,
    }


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = TriggerSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your environment or .env):", file=sys.stderr)
        print(_format_config_errors(e), file=sys.stderr)
        return EXIT_CONFIG_ERROR

    configure_logging(settings.log_level)

    if args.command == "show-target":
        print(json.dumps(_describe_request(settings), indent=2))
        return EXIT_OK

    if args.command != "dispatch":
        logger.error("Unknown command", extra={"command": args.command})
        return EXIT_CONFIG_ERROR

    if args.dry_run:
        request = _describe_request(settings)
        print(f"{request['method']} {request['url']}")
        print(json.dumps(request["body"]))
        return EXIT_OK

    try:
        github = GitHubClient(
            token=settings.github_token.get_secret_value(),
            dispatch_token=settings.target_repo_pat.get_secret_value(),
            base_url=settings.github_base_url,
            timeout_seconds=settings.request_timeout_seconds,
        )
        try:
            result = DispatchTrigger(github=github, target=settings.target).run()
        finally:
            github.close()

    except AuthenticationFailed as e:
        logger.error(str(e), extra={"status_code": e.status_code})
        print(str(e), file=sys.stderr)
        return EXIT_AUTH_FAILED

    except DispatchRejected as e:
        logger.error(
            str(e),
            extra={"status_code": e.status_code, "response": e.response_text[:500]},
        )
        print(str(e), file=sys.stderr)
        return EXIT_DISPATCH_REJECTED

    except requests.RequestException:
        logger.exception("Request to GitHub failed")
        return EXIT_FAILURE

    except Exception:
        logger.exception("Dispatch failed")
        return EXIT_FAILURE

    print(
        f"Dispatched {result.target.workflow_file} on {result.target.full_name}@{result.target.ref} "
        f"(HTTP {result.status_code})"
    )
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
