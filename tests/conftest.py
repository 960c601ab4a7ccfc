"""Test configuration and fixtures."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from pathlib import Path
from unittest.mock import Mock

import pytest
import requests
from github import Github

from docs_changelog_trigger.trigger.github.client import GitHubClient

_SETTINGS_ENV_VARS = (
    "GH_TOKEN",
    "GITHUB_TOKEN",
    "TARGET_REPO_PAT",
    "GITHUB_BASE_URL",
    "DISPATCH_TARGET_OWNER",
    "DISPATCH_TARGET_REPOSITORY",
    "DISPATCH_WORKFLOW_FILE",
    "DISPATCH_REF",
    "DISPATCH_TIMEOUT_SECONDS",
    "LOG_LEVEL",
)


def _build_response(status_code: int, text: str = "", url: str = "") -> requests.Response:
    """Build a real `requests.Response` without touching the network."""
    resp = requests.Response()
    resp.status_code = status_code
    resp._content = text.encode("utf-8")
    resp.encoding = "utf-8"
    resp.url = url
    return resp


@pytest.fixture
def clean_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Clear settings env vars and run from an empty directory (no stray `.env`)."""
    for name in _SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def credentials_env(clean_env: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Provide both credentials through the environment."""
    monkeypatch.setenv("GH_TOKEN", "ambient-token")
    monkeypatch.setenv("TARGET_REPO_PAT", "target-pat")
    return clean_env


@pytest.fixture
def github_api() -> Mock:
    """A PyGithub stand-in whose credential check succeeds."""
    api = Mock(spec=Github)
    api.get_rate_limit.return_value = Mock(rate=Mock(remaining=4999))
    return api


@pytest.fixture
def session() -> requests.Session:
    """A real session whose `post` answers 204 without network I/O."""
    s = requests.Session()
    s.post = Mock(return_value=_build_response(204))  # type: ignore[method-assign]
    return s


@pytest.fixture
def github_client(session: requests.Session, github_api: Mock) -> GitHubClient:
    return GitHubClient(
        token="ambient-token",
        dispatch_token="target-pat",
        session=session,
        github_api=github_api,
    )


@pytest.fixture
def make_response() -> Callable[..., requests.Response]:
    return _build_response


@pytest.fixture(autouse=True)
def _restore_root_logging() -> Iterator[None]:
    """`configure_logging` replaces root handlers; put pytest's back afterwards."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
