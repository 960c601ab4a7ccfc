"""Value types describing a workflow dispatch."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

DEFAULT_TARGET_OWNER = "r-nacos"
DEFAULT_TARGET_REPOSITORY = "docs"
DEFAULT_WORKFLOW_FILE = "update_change_log.yaml"
DEFAULT_REF = "master"


@dataclass(frozen=True, slots=True)
class DispatchTarget:
    """The workflow to start: repository, workflow file and branch ref."""

    owner: str = DEFAULT_TARGET_OWNER
    repository: str = DEFAULT_TARGET_REPOSITORY
    workflow_file: str = DEFAULT_WORKFLOW_FILE
    ref: str = DEFAULT_REF

    def __post_init__(self) -> None:
        for name in ("owner", "repository", "workflow_file", "ref"):
            value = getattr(self, name)
            if not value or not value.strip():
                raise ValueError(f"{name} is required")
            if "/" in value and name != "ref":
                raise ValueError(f"{name} must not contain '/': {value!r}")

    @property
    def full_name(self) -> str:
        """Return the repository name as "owner/repo"."""

        return f"{self.owner}/{self.repository}"

    @property
    def path(self) -> str:
        """REST path of the dispatch endpoint, relative to the API base URL."""

        return f"/repos/{self.full_name}/actions/workflows/{self.workflow_file}/dispatches"

    @property
    def payload(self) -> dict[str, str]:
        return {"ref": self.ref}


@dataclass(frozen=True, slots=True)
class DispatchResult:
    """Outcome of an accepted dispatch call."""

    target: DispatchTarget
    status_code: int
    dispatched_at: datetime
