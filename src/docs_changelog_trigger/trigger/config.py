"""Configuration for the dispatch trigger.

Configuration is loaded from:
- environment variables
- and a local `.env` file (if present)

Two credentials are involved. `GH_TOKEN` (or `GITHUB_TOKEN`) is the ambient
CI token used to establish the authenticated session. `TARGET_REPO_PAT` is
scoped to the target repository and is the bearer token of the dispatch call.
"""

from __future__ import annotations

import logging

from pydantic import (
    AliasChoices,
    Field,
    SecretStr,
    ValidationInfo,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

from docs_changelog_trigger.trigger.models import (
    DEFAULT_REF,
    DEFAULT_TARGET_OWNER,
    DEFAULT_TARGET_REPOSITORY,
    DEFAULT_WORKFLOW_FILE,
    DispatchTarget,
)

_CREDENTIAL_ENV_VARS = {
    "github_token": "GH_TOKEN (or GITHUB_TOKEN)",
    "target_repo_pat": "TARGET_REPO_PAT",
}


class TriggerSettings(BaseSettings):
    """Settings for the dispatch trigger.

    Environment variables:
    - GH_TOKEN or GITHUB_TOKEN
    - TARGET_REPO_PAT
    - GITHUB_BASE_URL             (optional)
    - DISPATCH_TARGET_OWNER       (optional)
    - DISPATCH_TARGET_REPOSITORY  (optional)
    - DISPATCH_WORKFLOW_FILE      (optional)
    - DISPATCH_REF                (optional)
    - DISPATCH_TIMEOUT_SECONDS    (optional)
    - LOG_LEVEL                   (optional)

    Notes:
        Pydantic-settings supports overriding the env file in tests via:
        `TriggerSettings(_env_file=path_to_env)`.
    """

    # Defaults are empty so `TriggerSettings()` type-checks; `_require_credential`
    # runs on the defaults too and enforces that both credentials are provided.
    github_token: SecretStr = Field(
        default=SecretStr(""),
        validate_default=True,
        validation_alias=AliasChoices("GH_TOKEN", "GITHUB_TOKEN"),
        description="Ambient CI token used to authenticate the session",
    )
    target_repo_pat: SecretStr = Field(
        default=SecretStr(""),
        validate_default=True,
        validation_alias="TARGET_REPO_PAT",
        description="Access token scoped to the target repository",
    )
    github_base_url: str = Field(
        default="https://api.github.com",
        validation_alias="GITHUB_BASE_URL",
        description="GitHub API base URL (useful for GitHub Enterprise)",
    )

    target_owner: str = Field(default=DEFAULT_TARGET_OWNER, validation_alias="DISPATCH_TARGET_OWNER")
    target_repository: str = Field(
        default=DEFAULT_TARGET_REPOSITORY, validation_alias="DISPATCH_TARGET_REPOSITORY"
    )
    workflow_file: str = Field(default=DEFAULT_WORKFLOW_FILE, validation_alias="DISPATCH_WORKFLOW_FILE")
    ref: str = Field(default=DEFAULT_REF, validation_alias="DISPATCH_REF")

    request_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        validation_alias="DISPATCH_TIMEOUT_SECONDS",
        description="Timeout applied to each GitHub REST request",
    )

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("github_base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if not value:
            raise ValueError("GITHUB_BASE_URL must not be empty")
        return value

    @field_validator("target_owner", "target_repository", "workflow_file", "ref")
    @classmethod
    def _require_non_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("dispatch target fields must not be blank")
        return value

    @field_validator("github_token", "target_repo_pat")
    @classmethod
    def _require_credential(cls, value: SecretStr, info: ValidationInfo) -> SecretStr:
        if not value.get_secret_value().strip():
            raise ValueError(f"{_CREDENTIAL_ENV_VARS[info.field_name]} is required")
        return value

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown LOG_LEVEL: {value!r}")
        return level

    @model_validator(mode="after")
    def _check_target(self) -> TriggerSettings:
        # Surfaces malformed target fields as a ValidationError at load time.
        _ = self.target
        return self

    @property
    def target(self) -> DispatchTarget:
        """The dispatch target resolved from configuration."""

        return DispatchTarget(
            owner=self.target_owner,
            repository=self.target_repository,
            workflow_file=self.workflow_file,
            ref=self.ref,
        )

    @property
    def dispatch_url(self) -> str:
        return f"{self.github_base_url}{self.target.path}"
