"""Configuration loading from GitHub Actions inputs.

GitHub Actions passes step inputs as ``INPUT_<NAME>`` environment
variables and describes the invoking workflow through ``GITHUB_*``
variables. Both are read with pydantic-settings and validated into a
SemrelConfig.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import SecretStr, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from semrel.config.models import (
    GitHubConfig,
    ReleaseMode,
    SemrelConfig,
    VersionBump,
    VersionSelection,
)
from semrel.exceptions import ConfigValidationError
from semrel.vcs.github import DEFAULT_API_URL

if TYPE_CHECKING:
    from collections.abc import Mapping


class ActionInputs(BaseSettings):
    """Step inputs, read from ``INPUT_*`` variables.

    Closed-choice inputs stay plain strings here and are parsed into
    their enums by load_config, which reports unknown values explicitly.
    """

    github_token: SecretStr | None = None
    repo_owner: str | None = None
    repo_name: str | None = None
    version_bump: str | None = None
    release_mode: str | None = None
    promote_from: str | None = None
    version_selection: str | None = None
    dry_run: bool = False

    model_config = SettingsConfigDict(
        env_prefix="INPUT_",
        env_ignore_empty=True,
        str_strip_whitespace=True,
        extra="forbid",
        frozen=True,
    )


class WorkflowContext(BaseSettings):
    """The invoking workflow, read from ``GITHUB_*`` variables."""

    repository: str | None = None
    sha: str | None = None
    api_url: str = DEFAULT_API_URL

    model_config = SettingsConfigDict(
        env_prefix="GITHUB_",
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
    )

    @property
    def owner(self) -> str | None:
        return parse_repository(self.repository)[0]

    @property
    def repo(self) -> str | None:
        return parse_repository(self.repository)[1]


def parse_repository(value: str | None) -> tuple[str | None, str | None]:
    """Split ``owner/repo`` into its parts."""
    if not value or "/" not in value:
        return None, None
    owner, _, repo = value.partition("/")
    return owner or None, repo or None


def load_config(inputs: Mapping[str, str | bool | None] | None = None) -> SemrelConfig:
    """Build the run configuration.

    Explicit ``inputs`` take precedence over ``INPUT_*`` variables.
    Repository owner and name default to ``GITHUB_REPOSITORY``.

    Args:
        inputs: Input values keyed by input name (e.g. ``release_mode``);
            None and empty values are ignored

    Returns:
        Validated configuration

    Raises:
        UnrecognizedOptionError: If a closed-choice input has an unknown value
        ConfigValidationError: If inputs are missing or inconsistent
    """
    overrides = {
        name: value for name, value in (inputs or {}).items() if value is not None and value != ""
    }
    try:
        action = ActionInputs(**overrides)
        context = WorkflowContext()
    except ValidationError as e:
        raise ConfigValidationError(_format_validation_error(e)) from e

    if action.github_token is None or not action.github_token.get_secret_value():
        raise ConfigValidationError("Input required and not supplied: github_token")

    owner = action.repo_owner or context.owner
    repo = action.repo_name or context.repo
    if not owner or not repo:
        raise ConfigValidationError(
            "Repository unknown. Set repo_owner and repo_name or GITHUB_REPOSITORY."
        )

    if not action.release_mode:
        raise ConfigValidationError("Input required and not supplied: release_mode")
    release_mode = ReleaseMode.parse("release_mode", action.release_mode)

    version_bump = (
        VersionBump.parse("version_bump", action.version_bump) if action.version_bump else None
    )
    version_selection = (
        VersionSelection.parse("version_selection", action.version_selection)
        if action.version_selection
        else VersionSelection.ALL
    )

    try:
        return SemrelConfig(
            github=GitHubConfig(
                token=action.github_token,
                owner=owner,
                repo=repo,
                api_url=context.api_url,
            ),
            release_mode=release_mode,
            version_bump=version_bump,
            promote_from=action.promote_from or None,
            version_selection=version_selection,
            commit_sha=context.sha,
            dry_run=action.dry_run,
        )
    except ValidationError as e:
        raise ConfigValidationError(_format_validation_error(e)) from e


def _format_validation_error(error: ValidationError) -> str:
    messages = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"])
        message = item["msg"].removeprefix("Value error, ")
        messages.append(f"{location}: {message}" if location else message)
    return "; ".join(messages)
