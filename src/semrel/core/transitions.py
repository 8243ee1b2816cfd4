"""Next-version computation.

The next version depends on whether the current version is a
prerelease and whether the target release is a prerelease, giving
four transition tables:

- release -> release: bump the component, zero the lower ones
- release -> prerelease: same bump, opening prerelease ordinal 0
- prerelease -> release: finalize in place when the prerelease line
  already carries the requested bump, otherwise bump and finalize
- prerelease -> prerelease: advance the ordinal when the line already
  carries the requested bump, otherwise open a new line at ordinal 0

The "already carries the bump" test is the at-least-X predicate on
Version. Once ``1.0.0-pre`` exists, another major bump continues the
1.0.0 line instead of jumping to 2.0.0.
"""

from __future__ import annotations

from semrel.core.version import BumpType, Version
from semrel.exceptions import VersionError


def next_version(current: Version, bump: BumpType, *, prerelease: bool) -> Version:
    """Compute the version that follows ``current``.

    Args:
        current: Latest existing version
        bump: Requested bump magnitude
        prerelease: Whether the new version is a prerelease

    Returns:
        The next version

    Raises:
        VersionError: If bump is not MAJOR, MINOR or PATCH
    """
    if current.is_prerelease:
        if prerelease:
            return bump_prerelease_to_prerelease(current, bump)
        return bump_prerelease_to_release(current, bump)
    if prerelease:
        return bump_release_to_prerelease(current, bump)
    return bump_release_to_release(current, bump)


def bump_prerelease_to_prerelease(version: Version, bump: BumpType) -> Version:
    ordinal = (version.prerelease or 0) + 1
    match bump:
        case BumpType.MAJOR:
            if version.is_at_least_major_release:
                return Version(version.major, 0, 0, ordinal)
            return Version(version.major + 1, 0, 0, 0)
        case BumpType.MINOR:
            if version.is_at_least_minor_release:
                return Version(version.major, version.minor, 0, ordinal)
            return Version(version.major, version.minor + 1, 0, 0)
        case BumpType.PATCH:
            if version.is_at_least_patch_release:
                return Version(version.major, version.minor, version.patch, ordinal)
            return Version(version.major, version.minor, version.patch + 1, 0)
        case _:
            raise VersionError(f"Unhandled bump action: {bump}")


def bump_prerelease_to_release(version: Version, bump: BumpType) -> Version:
    match bump:
        case BumpType.MAJOR:
            if version.is_at_least_major_release:
                return Version(version.major, 0, 0)
            return Version(version.major + 1, 0, 0)
        case BumpType.MINOR:
            if version.is_at_least_minor_release:
                return Version(version.major, version.minor, 0)
            return Version(version.major, version.minor + 1, 0)
        case BumpType.PATCH:
            if version.is_at_least_patch_release:
                return Version(version.major, version.minor, version.patch)
            return Version(version.major, version.minor, version.patch + 1)
        case _:
            raise VersionError(f"Unhandled bump action: {bump}")


def bump_release_to_prerelease(version: Version, bump: BumpType) -> Version:
    match bump:
        case BumpType.MAJOR:
            return Version(version.major + 1, 0, 0, 0)
        case BumpType.MINOR:
            return Version(version.major, version.minor + 1, 0, 0)
        case BumpType.PATCH:
            return Version(version.major, version.minor, version.patch + 1, 0)
        case _:
            raise VersionError(f"Unhandled bump action: {bump}")


def bump_release_to_release(version: Version, bump: BumpType) -> Version:
    match bump:
        case BumpType.MAJOR:
            return Version(version.major + 1, 0, 0)
        case BumpType.MINOR:
            return Version(version.major, version.minor + 1, 0)
        case BumpType.PATCH:
            return Version(version.major, version.minor, version.patch + 1)
        case _:
            raise VersionError(f"Unhandled bump action: {bump}")
