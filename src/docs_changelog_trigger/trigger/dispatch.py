"""The dispatch trigger: authenticate, then send exactly one dispatch request."""

from __future__ import annotations

import logging
from datetime import UTC, datetime

import requests
from github import GithubException

from docs_changelog_trigger.trigger.github.client import GitHubClient
from docs_changelog_trigger.trigger.models import DispatchResult, DispatchTarget

logger = logging.getLogger(__name__)

_AUTH_STATUS_CODES = {401, 403}


class DispatchError(Exception):
    """Base class for failures that abort a dispatch run."""


class AuthenticationFailed(DispatchError):
    """A credential was rejected by GitHub."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class DispatchRejected(DispatchError):
    """The dispatch endpoint answered with a non-success status."""

    def __init__(self, *, target: DispatchTarget, status_code: int, response_text: str) -> None:
        super().__init__(
            f"Dispatch of {target.workflow_file} in {target.full_name} rejected "
            f"(HTTP {status_code})"
        )
        self.target = target
        self.status_code = status_code
        self.response_text = response_text


class DispatchTrigger:
    """Runs one dispatch: no retries, each failure is final."""

    def __init__(self, *, github: GitHubClient, target: DispatchTarget) -> None:
        self._github = github
        self._target = target

    @property
    def target(self) -> DispatchTarget:
        return self._target

    def run(self) -> DispatchResult:
        try:
            self._github.authenticate()
        except GithubException as e:
            raise AuthenticationFailed(
                f"GitHub rejected the session credential (HTTP {e.status})",
                status_code=e.status,
            ) from e

        try:
            status_code = self._github.dispatch_workflow(self._target)
        except requests.HTTPError as e:
            if e.response is None:
                raise
            if e.response.status_code in _AUTH_STATUS_CODES:
                raise AuthenticationFailed(
                    f"GitHub rejected the dispatch credential for {self._target.full_name} "
                    f"(HTTP {e.response.status_code})",
                    status_code=e.response.status_code,
                ) from e
            raise DispatchRejected(
                target=self._target,
                status_code=e.response.status_code,
                response_text=e.response.text,
            ) from e

        return DispatchResult(
            target=self._target,
            status_code=status_code,
            dispatched_at=datetime.now(tz=UTC),
        )
