"""Release orchestration.

A run operates in exactly one release mode:

- prerelease / release: resolve the bump, find the latest tagged
  version and create the release that follows it
- promote: turn an existing prerelease into the matching final release

Conditions such as "no release label" or "nothing to promote" end the
run without a release and without raising. Configuration problems,
malformed tags in the history and API failures raise.
"""

from __future__ import annotations

from collections.abc import Collection, Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from semrel.config.models import ReleaseMode, VersionSelection
from semrel.core.bump import resolve_bump
from semrel.core.transitions import next_version
from semrel.core.version import BumpType, Version
from semrel.exceptions import ConfigValidationError, NoReleasesFoundError, ReleaseExistsError

if TYPE_CHECKING:
    from semrel.actions import ActionsReporter
    from semrel.config.models import SemrelConfig
    from semrel.vcs.github import Release, ReleaseHost


@dataclass(frozen=True, slots=True)
class ReleaseOutcome:
    """Result of a run."""

    release_created: bool
    version: Version | None = None
    tag_name: str | None = None
    prerelease: bool = False
    body: str = ""
    reason: str | None = None
    dry_run: bool = False

    @classmethod
    def skipped(cls, reason: str) -> ReleaseOutcome:
        return cls(release_created=False, reason=reason)

    @property
    def publish_version(self) -> str | None:
        return self.version.to_publish_version() if self.version else None

    @property
    def release_type(self) -> str:
        return "beta" if self.prerelease else "release"

    def to_outputs(self) -> dict[str, str]:
        """Step outputs for this outcome."""
        outputs = {"release_created": _bool(self.release_created)}
        if self.version is None:
            return outputs
        outputs.update(
            tag_name=self.tag_name or self.version.to_tag(),
            prerelease=_bool(self.prerelease),
            body=self.body,
            publish_version=self.version.to_publish_version(),
            release_type=self.release_type,
        )
        return outputs


def _bool(value: bool) -> str:
    return "true" if value else "false"


def parse_tags(tags: Iterable[str]) -> list[Version]:
    """Parse tag names into versions.

    Raises:
        InvalidTagFormatError: On the first tag that is not a version
    """
    return [Version.parse(tag) for tag in tags]


def find_latest_version(
    versions: Iterable[Version],
    prerelease: bool | None = None,
) -> Version | None:
    """Find the highest version.

    Args:
        versions: Candidate versions
        prerelease: When given, only consider versions whose prerelease
            status equals it

    Returns:
        Highest matching version, or None if there is none
    """
    candidates = [
        v for v in versions if prerelease is None or v.is_prerelease == prerelease
    ]
    return max(candidates, default=None)


class ReleaseOrchestrator:
    """Runs one release according to the configuration."""

    def __init__(
        self,
        config: SemrelConfig,
        host: ReleaseHost,
        reporter: ActionsReporter,
    ) -> None:
        self.config = config
        self.host = host
        self.reporter = reporter

    def run(self) -> ReleaseOutcome:
        """Run the configured release mode.

        Returns:
            The outcome, with release_created False when nothing was released

        Raises:
            SemrelError: On configuration, history or API errors
        """
        config = self.config
        self.reporter.info(f"owner: {config.github.owner}")
        self.reporter.info(f"repo: {config.github.repo}")
        self.reporter.info(f"version_bump: {config.version_bump or ''}")
        self.reporter.info(f"release_mode: {config.release_mode}")

        match config.release_mode:
            case ReleaseMode.PRERELEASE | ReleaseMode.RELEASE:
                return self.release(prerelease=config.is_prerelease)
            case ReleaseMode.PROMOTE:
                return self.promote()
            case _:
                raise ConfigValidationError(f"Unhandled release mode: {config.release_mode}")

    def release(self, *, prerelease: bool) -> ReleaseOutcome:
        """Bump the latest version and create a release or prerelease."""
        if self.config.version_bump is None:
            raise ConfigValidationError("version_bump is required for release and prerelease.")

        decision = resolve_bump(
            self.config.version_bump,
            self.host,
            self.config.commit_sha,
            self.config.labels,
        )
        if decision.pull_request_count > 1:
            self.reporter.warning(
                f"{decision.pull_request_count} PRs are associated with this commit. "
                f"Using the first one, #{decision.pull_request}."
            )
        if not decision.releases:
            reason = decision.reason
            if reason is not None and reason.is_error:
                self.reporter.error(str(reason))
            self.reporter.info("No release will be created.")
            return ReleaseOutcome.skipped(str(reason))

        source = f" (from PR #{decision.pull_request})" if decision.pull_request else ""
        self.reporter.info(f"Version bump: {decision.bump}{source}")

        versions = parse_tags(self.host.list_tags())
        self.reporter.debug(f"Found {len(versions)} version tags")
        match_prerelease = (
            prerelease if self.config.version_selection == VersionSelection.MATCHING else None
        )
        latest = find_latest_version(versions, match_prerelease)
        if latest is None:
            raise NoReleasesFoundError("No releases found.")
        self.reporter.info(f"Latest release: {latest}")

        target = next_version(latest, decision.bump, prerelease=prerelease)
        self.reporter.info(f"Next version: {target}")
        return self._create_release(target, versions)

    def promote(self) -> ReleaseOutcome:
        """Promote a prerelease to the matching final release."""
        requested = self.config.promote_from.strip() if self.config.promote_from else None
        target = Version.parse(requested) if requested else None

        tags_by_version: dict[Version, list[str]] = {}
        for tag in self.host.list_tags():
            tags_by_version.setdefault(Version.parse(tag), []).append(tag)

        if target is None:
            target = find_latest_version(tags_by_version)
            if target is None:
                self.reporter.error("No version found.")
                return ReleaseOutcome.skipped("No version found.")
        self.reporter.info(f"Target version: {target}")

        candidates = [requested] if requested else []
        candidates.extend(tags_by_version.get(target, []))
        existing = self._find_release(target, candidates)
        if existing is None:
            return self._skip_promotion("No prerelease found.")
        if existing.draft:
            return self._skip_promotion(f"The release {existing.tag_name} is a draft.")
        if not existing.prerelease:
            return self._skip_promotion("The specified release is not a prerelease.")

        promoted = next_version(Version.parse(existing.tag_name), BumpType.PATCH, prerelease=False)
        self.reporter.info(f"Next version: {promoted}")
        return self._create_release(promoted, tags_by_version)

    def _find_release(self, version: Version, tags: Iterable[str]) -> Release | None:
        """Find the release of the first tag naming version that has one.

        ``1.0.0-pre`` and ``1.0.0-pre.0`` name the same version; the
        canonical tag is tried first.
        """
        canonical = version.to_tag()
        for tag in sorted(dict.fromkeys(tags), key=lambda name: name != canonical):
            release = self.host.get_release_by_tag(tag)
            if release is not None:
                return release
        return None

    def _skip_promotion(self, reason: str) -> ReleaseOutcome:
        self.reporter.error(reason)
        self.reporter.info("No release will be created.")
        return ReleaseOutcome.skipped(reason)

    def _create_release(self, version: Version, known: Collection[Version]) -> ReleaseOutcome:
        tag = version.to_tag()
        if version in known or self.host.get_release_by_tag(tag) is not None:
            raise ReleaseExistsError(tag)

        if self.config.dry_run:
            self.reporter.info(f"Dry run: would create release {tag}")
            return ReleaseOutcome(
                release_created=False,
                version=version,
                tag_name=tag,
                prerelease=version.is_prerelease,
                dry_run=True,
            )

        release = self.host.create_release(tag, prerelease=version.is_prerelease)
        self.reporter.success(f"Created release {release.tag_name}")
        self.reporter.debug(f"New release: {release}")
        return ReleaseOutcome(
            release_created=True,
            version=version,
            tag_name=release.tag_name,
            prerelease=release.prerelease,
            body=release.body,
        )
