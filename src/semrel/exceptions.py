"""Exception hierarchy for semrel.

All errors raised by semrel derive from SemrelError so callers
can catch everything from this package with a single except clause.
"""

from __future__ import annotations


class SemrelError(Exception):
    """Base exception for all semrel errors."""


# Configuration


class ConfigError(SemrelError):
    """Configuration could not be built."""


class ConfigValidationError(ConfigError):
    """Configuration values are present but invalid or inconsistent."""


class UnrecognizedOptionError(ConfigError):
    """An option was given a value outside its closed set of choices."""

    def __init__(self, option: str, value: str, choices: list[str]) -> None:
        self.option = option
        self.value = value
        self.choices = choices
        super().__init__(
            f"Invalid {option}: {value!r}. {option} must be one of {', '.join(choices)}."
        )


# Versions


class VersionError(SemrelError):
    """Version construction or bumping failed."""


class InvalidTagFormatError(VersionError):
    """A tag string is not a valid release or prerelease tag."""

    def __init__(self, tag: str, detail: str | None = None) -> None:
        self.tag = tag
        message = f"Invalid tag format: {tag!r}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


# GitHub


class GitHubError(SemrelError):
    """Communication with the GitHub API failed."""


class GitHubAPIError(GitHubError):
    """GitHub API returned an error response."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


# Releases


class ReleaseError(SemrelError):
    """A release could not be computed or created."""


class NoReleasesFoundError(ReleaseError):
    """The repository has no version tags to bump from."""


class ReleaseExistsError(ReleaseError):
    """The computed tag already exists in the repository."""

    def __init__(self, tag: str) -> None:
        self.tag = tag
        super().__init__(f"Tag {tag} already exists. Refusing to create a duplicate release.")
