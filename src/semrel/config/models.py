"""Configuration models for semrel.

Configuration is built once per run and never mutated; every model
is frozen.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, SecretStr, model_validator

from semrel.exceptions import UnrecognizedOptionError
from semrel.vcs.github import DEFAULT_API_URL


class _Option(StrEnum):
    @classmethod
    def parse(cls, option: str, value: str) -> Self:
        """Parse a raw input value into a member of this enum.

        Raises:
            UnrecognizedOptionError: If value names no member
        """
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise UnrecognizedOptionError(option, value, [m.value for m in cls]) from None


class ReleaseMode(_Option):
    """Kind of release to produce."""

    PRERELEASE = "prerelease"
    RELEASE = "release"
    PROMOTE = "promote"


class VersionBump(_Option):
    """Policy deciding the bump magnitude."""

    PRLABEL = "prlabel"
    NORELEASE = "norelease"
    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"


class VersionSelection(_Option):
    """Which tags are considered when looking for the latest version."""

    ALL = "all"
    MATCHING = "matching"


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class GitHubConfig(_FrozenModel):
    """Repository access settings."""

    token: SecretStr
    owner: str = Field(min_length=1)
    repo: str = Field(min_length=1)
    api_url: str = DEFAULT_API_URL
    timeout: float = Field(default=30.0, gt=0)

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"


class LabelsConfig(_FrozenModel):
    """Pull request labels that select the bump magnitude."""

    major: str = "release:major"
    minor: str = "release:minor"
    patch: str = "release:patch"


class SemrelConfig(_FrozenModel):
    """Complete configuration for one run."""

    github: GitHubConfig
    release_mode: ReleaseMode = ReleaseMode.PRERELEASE
    version_bump: VersionBump | None = None
    promote_from: str | None = None
    version_selection: VersionSelection = VersionSelection.ALL
    commit_sha: str | None = None
    labels: LabelsConfig = Field(default_factory=LabelsConfig)
    dry_run: bool = False

    @model_validator(mode="after")
    def _check_mode_options(self) -> Self:
        if self.promote_from and self.release_mode != ReleaseMode.PROMOTE:
            raise ValueError(
                "promote_from was specified but release_mode was not promote. "
                "Please specify release_mode as promote."
            )
        if self.release_mode == ReleaseMode.PROMOTE:
            return self
        if self.version_bump is None:
            choices = ", ".join(m.value for m in VersionBump)
            raise ValueError(
                f"version_bump must be one of {choices} when release_mode is {self.release_mode}."
            )
        if self.version_bump == VersionBump.PRLABEL and not self.commit_sha:
            raise ValueError("version_bump prlabel requires the commit sha (GITHUB_SHA).")
        return self

    @property
    def is_prerelease(self) -> bool:
        return self.release_mode == ReleaseMode.PRERELEASE
