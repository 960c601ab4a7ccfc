"""GitHub API client wrapper.

PyGithub establishes and verifies the authenticated session; the dispatch call
itself goes through a `requests` session so the request headers stay pinned.
"""

from __future__ import annotations

import logging
import math

import requests
from github import Auth, Github

from docs_changelog_trigger import __version__
from docs_changelog_trigger.trigger.models import DispatchTarget

logger = logging.getLogger(__name__)

GITHUB_API_VERSION = "2022-11-28"


class GitHubClient:
    """Small wrapper around PyGithub and the REST API for the dispatch trigger."""

    def __init__(
        self,
        *,
        token: str,
        dispatch_token: str,
        base_url: str = "https://api.github.com",
        timeout_seconds: float = 30.0,
        session: requests.Session | None = None,
        github_api: Github | None = None,
    ) -> None:
        if not token:
            raise ValueError("GitHub token is required")
        if not dispatch_token:
            raise ValueError("Dispatch token is required")

        self._rest_base_url = base_url.rstrip("/")
        self._timeout = timeout_seconds
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Accept": "application/vnd.github+json",
                "Authorization": f"Bearer {dispatch_token}",
                "X-GitHub-Api-Version": GITHUB_API_VERSION,
                "User-Agent": f"docs-changelog-trigger/{__version__}",
            }
        )

        if github_api is not None:
            self._github = github_api
            logger.debug("Using injected Github instance")
        else:
            # One attempt per request, bounded by the configured timeout.
            self._github = Github(
                auth=Auth.Token(token),
                base_url=self._rest_base_url,
                timeout=max(1, math.ceil(timeout_seconds)),
                retry=None,
            )

    @property
    def base_url(self) -> str:
        return self._rest_base_url

    def _api_url(self, path: str) -> str:
        return f"{self._rest_base_url}/{path.lstrip('/')}"

    def authenticate(self) -> None:
        """Verify the session credential with one authenticated request.

        Raises:
            github.GithubException: If GitHub rejects the credential.
        """

        # The rate-limit endpoint answers for any valid token, including the
        # installation tokens CI hands out, and 401s for invalid ones.
        rate_limit = self._github.get_rate_limit()
        logger.info(
            "Authenticated with GitHub",
            extra={"rate_limit_remaining": getattr(rate_limit.rate, "remaining", None)},
        )

    def dispatch_workflow(self, target: DispatchTarget) -> int:
        """Ask GitHub to start `target.workflow_file` on `target.ref`.

        The response body is not read.

        Returns:
            The HTTP status code of the accepted request (normally 204).

        Raises:
            requests.HTTPError: If GitHub answers with anything outside 2xx.
        """

        url = self._api_url(target.path)
        logger.info(
            "Dispatching workflow",
            extra={
                "repo": target.full_name,
                "workflow": target.workflow_file,
                "ref": target.ref,
            },
        )
        resp = self._session.post(url, json=target.payload, timeout=self._timeout)
        if not 200 <= resp.status_code < 300:
            raise requests.HTTPError(
                f"Workflow dispatch failed (HTTP {resp.status_code}) for url: {url}",
                response=resp,
            )

        logger.info(
            "Workflow dispatch accepted",
            extra={"repo": target.full_name, "status_code": resp.status_code},
        )
        return resp.status_code

    def close(self) -> None:
        """Release the HTTP session and the PyGithub connection pool."""

        self._session.close()
        self._github.close()
