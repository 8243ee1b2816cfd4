"""Bump policy resolution.

Turns the configured version_bump policy into a concrete bump
magnitude. With the ``prlabel`` policy the magnitude is read from the
release label on the pull request that introduced the commit.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from semrel.config.models import LabelsConfig, VersionBump
from semrel.core.version import BumpType
from semrel.exceptions import ConfigValidationError, UnrecognizedOptionError

if TYPE_CHECKING:
    from semrel.vcs.github import PullRequest, ReleaseHost


class NoReleaseReason(StrEnum):
    """Why a bump resolved to no release."""

    NO_RELEASE_REQUESTED = "No release will be created."
    NO_PULL_REQUESTS = "No PRs associated with this commit."
    NO_RELEASE_LABELS = "No release labels found on the PR."
    MULTIPLE_RELEASE_LABELS = "Multiple release labels found on the PR."

    @property
    def is_error(self) -> bool:
        return self != NoReleaseReason.NO_RELEASE_REQUESTED


@dataclass(frozen=True, slots=True)
class BumpDecision:
    """Outcome of resolving a bump policy."""

    bump: BumpType
    reason: NoReleaseReason | None = None
    pull_request: int | None = None
    pull_request_count: int = 0

    @property
    def releases(self) -> bool:
        return self.bump != BumpType.NONE

    @classmethod
    def skip(
        cls,
        reason: NoReleaseReason,
        pull_request: int | None = None,
        pull_request_count: int = 0,
    ) -> BumpDecision:
        return cls(BumpType.NONE, reason, pull_request, pull_request_count)


_FIXED_BUMPS = {
    VersionBump.MAJOR: BumpType.MAJOR,
    VersionBump.MINOR: BumpType.MINOR,
    VersionBump.PATCH: BumpType.PATCH,
}


def resolve_bump(
    policy: VersionBump | str,
    host: ReleaseHost,
    commit_sha: str | None,
    labels: LabelsConfig | None = None,
) -> BumpDecision:
    """Resolve a bump policy into a bump decision.

    Args:
        policy: Configured version_bump policy
        host: Repository host, only queried for the prlabel policy
        commit_sha: Commit being released
        labels: Release label names

    Returns:
        Decision carrying the bump, or BumpType.NONE and the reason

    Raises:
        UnrecognizedOptionError: If policy is not a known VersionBump
    """
    if not isinstance(policy, VersionBump):
        policy = VersionBump.parse("version_bump", str(policy))

    if policy == VersionBump.NORELEASE:
        return BumpDecision.skip(NoReleaseReason.NO_RELEASE_REQUESTED)
    if policy in _FIXED_BUMPS:
        return BumpDecision(bump=_FIXED_BUMPS[policy])
    if policy == VersionBump.PRLABEL:
        if not commit_sha:
            raise ConfigValidationError(
                "version_bump prlabel requires the commit sha (GITHUB_SHA)."
            )
        return bump_from_pr_labels(host.list_associated_pull_requests(commit_sha), labels)

    raise UnrecognizedOptionError("version_bump", str(policy), [m.value for m in VersionBump])


def bump_from_pr_labels(
    pull_requests: list[PullRequest],
    labels: LabelsConfig | None = None,
) -> BumpDecision:
    """Pick the bump from the release label of the first pull request.

    Only the first pull request is considered; the API order decides
    which one that is when a commit belongs to several.
    """
    if not pull_requests:
        return BumpDecision.skip(NoReleaseReason.NO_PULL_REQUESTS)

    target = pull_requests[0]
    count = len(pull_requests)
    bumps = label_bumps(target.labels, labels or LabelsConfig())

    if not bumps:
        return BumpDecision.skip(
            NoReleaseReason.NO_RELEASE_LABELS,
            pull_request=target.number,
            pull_request_count=count,
        )
    if len(bumps) > 1:
        return BumpDecision.skip(
            NoReleaseReason.MULTIPLE_RELEASE_LABELS,
            pull_request=target.number,
            pull_request_count=count,
        )
    return BumpDecision(bump=bumps[0], pull_request=target.number, pull_request_count=count)


def label_bumps(names: tuple[str, ...] | list[str], labels: LabelsConfig) -> list[BumpType]:
    """Map label names to bumps, ignoring labels that are not release labels."""
    mapping = {
        labels.major: BumpType.MAJOR,
        labels.minor: BumpType.MINOR,
        labels.patch: BumpType.PATCH,
    }
    return [mapping[name] for name in names if name in mapping]
