"""Tests for next-version transitions."""

from __future__ import annotations

import pytest

from semrel.core.transitions import (
    bump_prerelease_to_prerelease,
    bump_prerelease_to_release,
    bump_release_to_prerelease,
    bump_release_to_release,
    next_version,
)
from semrel.core.version import BumpType, Version
from semrel.exceptions import VersionError


def _next(tag: str, bump: BumpType, *, prerelease: bool) -> str:
    return next_version(Version.parse(tag), bump, prerelease=prerelease).to_tag()


class TestReleaseToRelease:
    """Final release followed by a final release."""

    @pytest.mark.parametrize(
        ("bump", "expected"),
        [
            (BumpType.MAJOR, "2.0.0"),
            (BumpType.MINOR, "1.3.0"),
            (BumpType.PATCH, "1.2.4"),
        ],
    )
    def test_bump(self, bump: BumpType, expected: str):
        """Bumps from a final release."""
        assert _next("1.2.3", bump, prerelease=False) == expected


class TestReleaseToPrerelease:
    """Final release followed by a prerelease."""

    @pytest.mark.parametrize(
        ("bump", "expected"),
        [
            (BumpType.MAJOR, "2.0.0-pre"),
            (BumpType.MINOR, "1.3.0-pre"),
            (BumpType.PATCH, "1.2.4-pre"),
        ],
    )
    def test_bump_opens_prerelease_line(self, bump: BumpType, expected: str):
        """Prerelease bumps from a final release open a new line."""
        result = next_version(Version.parse("1.2.3"), bump, prerelease=True)

        assert result.to_tag() == expected
        assert result.prerelease == 0

    def test_patch_after_minor_release(self):
        """1.2.0 is not yet patched, so a patch prerelease opens 1.2.1."""
        assert _next("1.2.0", BumpType.PATCH, prerelease=True) == "1.2.1-pre"


class TestPrereleaseToRelease:
    """Prerelease followed by a final release."""

    def test_major_finalizes_major_line(self):
        """1.0.0-pre with a major bump becomes 1.0.0, not 2.0.0."""
        assert _next("1.0.0-pre", BumpType.MAJOR, prerelease=False) == "1.0.0"

    def test_major_from_minor_line_bumps(self):
        """Major from a minor prerelease line bumps major."""
        assert _next("1.2.0-pre.3", BumpType.MAJOR, prerelease=False) == "2.0.0"

    def test_minor_finalizes_minor_line(self):
        """Minor finalizes a minor prerelease line."""
        assert _next("1.2.0-pre.3", BumpType.MINOR, prerelease=False) == "1.2.0"

    def test_minor_finalizes_major_line(self):
        """Minor finalizes a major prerelease line."""
        assert _next("2.0.0-pre", BumpType.MINOR, prerelease=False) == "2.0.0"

    def test_minor_from_patch_line_bumps(self):
        """Minor from a patch prerelease line bumps minor."""
        assert _next("1.2.3-pre.1", BumpType.MINOR, prerelease=False) == "1.3.0"

    @pytest.mark.parametrize("tag", ["1.0.0-pre", "1.2.0-pre.4", "1.2.3-pre.2"])
    def test_patch_always_finalizes(self, tag: str):
        """Every version is at least a patch release."""
        expected = tag.split("-")[0]
        assert _next(tag, BumpType.PATCH, prerelease=False) == expected

    def test_promotion_of_major_prerelease(self):
        """Promotion uses a patch bump and keeps major.minor.patch."""
        assert _next("2.0.0-pre.1", BumpType.PATCH, prerelease=False) == "2.0.0"


class TestPrereleaseToPrerelease:
    """Prerelease followed by another prerelease."""

    def test_major_advances_ordinal(self):
        """Another major prerelease continues the 1.0.0 line."""
        assert _next("1.0.0-pre", BumpType.MAJOR, prerelease=True) == "1.0.0-pre.1"

    def test_major_from_minor_line_opens_new_line(self):
        """Major from a minor prerelease line opens a new major line."""
        assert _next("1.2.0-pre.5", BumpType.MAJOR, prerelease=True) == "2.0.0-pre"

    def test_minor_advances_ordinal(self):
        """Minor on a minor line advances the ordinal."""
        assert _next("1.2.0-pre.5", BumpType.MINOR, prerelease=True) == "1.2.0-pre.6"

    def test_minor_from_patch_line_opens_new_line(self):
        """Minor from a patch prerelease line opens a new minor line."""
        assert _next("1.2.3-pre.5", BumpType.MINOR, prerelease=True) == "1.3.0-pre"

    def test_patch_advances_ordinal(self):
        """Patch advances the ordinal."""
        assert _next("1.2.3-pre.2", BumpType.PATCH, prerelease=True) == "1.2.3-pre.3"

    def test_ordinal_zero_advances_to_one(self):
        """Ordinal 0 advances to 1."""
        assert _next("1.2.3-pre", BumpType.PATCH, prerelease=True) == "1.2.3-pre.1"


class TestUnhandledBump:
    """BumpType.NONE is not a transition."""

    @pytest.mark.parametrize(
        ("table", "tag"),
        [
            (bump_release_to_release, "1.0.0"),
            (bump_release_to_prerelease, "1.0.0"),
            (bump_prerelease_to_release, "1.0.0-pre"),
            (bump_prerelease_to_prerelease, "1.0.0-pre"),
        ],
    )
    def test_none_raises(self, table, tag: str):
        """Every table rejects BumpType.NONE."""
        with pytest.raises(VersionError, match="Unhandled bump action"):
            table(Version.parse(tag), BumpType.NONE)


class TestTransitionProperties:
    """Properties that hold across all tables."""

    @pytest.mark.parametrize("tag", ["0.1.0", "1.2.3", "1.0.0-pre", "1.2.0-pre.2", "1.2.3-pre.1"])
    @pytest.mark.parametrize("bump", [BumpType.MAJOR, BumpType.MINOR, BumpType.PATCH])
    @pytest.mark.parametrize("prerelease", [True, False])
    def test_next_is_never_lower(self, tag: str, bump: BumpType, prerelease: bool):
        """The next version never sorts below the current one."""
        current = Version.parse(tag)
        result = next_version(current, bump, prerelease=prerelease)

        assert result >= current
        assert result.is_prerelease is prerelease
