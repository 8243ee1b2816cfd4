"""Semantic version model with prerelease ordinals.

Tags follow a small, strict grammar:

- ``1.2.3``        final release
- ``1.2.3-pre``    first prerelease of 1.2.3 (ordinal 0)
- ``1.2.3-pre.4``  fifth prerelease of 1.2.3 (ordinal 4)

A final release sorts after every prerelease of the same
major.minor.patch, so ``1.2.0 > 1.2.0-pre.9 > 1.2.0-pre > 1.1.9``.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from enum import StrEnum

from semrel.exceptions import InvalidTagFormatError, VersionError

PRERELEASE_MARKER = "pre"
SNAPSHOT_SUFFIX = "SNAPSHOT"

_CORE_PATTERN = re.compile(r"(0|[1-9][0-9]*)\.(0|[1-9][0-9]*)\.(0|[1-9][0-9]*)")
_ORDINAL_PATTERN = re.compile(r"0|[1-9][0-9]*")


class BumpType(StrEnum):
    """Magnitude of a version bump."""

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"
    NONE = "none"


@dataclass(frozen=True, slots=True)
class Version:
    """An immutable release or prerelease version.

    ``prerelease`` is the prerelease ordinal, or None for a final release.
    """

    major: int
    minor: int
    patch: int
    prerelease: int | None = None

    def __post_init__(self) -> None:
        for name in ("major", "minor", "patch"):
            if getattr(self, name) < 0:
                raise VersionError(f"{name} must be non-negative, got {getattr(self, name)}")
        if self.prerelease is not None and self.prerelease < 0:
            raise VersionError(f"prerelease ordinal must be non-negative, got {self.prerelease}")

    @classmethod
    def parse(cls, tag: str) -> Version:
        """Parse a tag string into a Version.

        Args:
            tag: Tag name such as ``1.2.3`` or ``1.2.3-pre.1``

        Returns:
            Parsed Version

        Raises:
            InvalidTagFormatError: If the tag does not follow the tag grammar
        """
        core, sep, suffix = tag.partition("-")

        match = _CORE_PATTERN.fullmatch(core)
        if match is None:
            raise InvalidTagFormatError(
                tag, "expected <major>.<minor>.<patch> without leading zeros"
            )
        major, minor, patch = (int(part) for part in match.groups())

        if not sep:
            return cls(major, minor, patch)

        marker, dot, ordinal = suffix.partition(".")
        if marker != PRERELEASE_MARKER:
            raise InvalidTagFormatError(tag, f"prerelease marker must be '{PRERELEASE_MARKER}'")
        if not dot:
            return cls(major, minor, patch, 0)
        if _ORDINAL_PATTERN.fullmatch(ordinal) is None:
            raise InvalidTagFormatError(
                tag, "prerelease ordinal must be a non-negative integer without leading zeros"
            )
        return cls(major, minor, patch, int(ordinal))

    # Release kind predicates

    @property
    def is_prerelease(self) -> bool:
        return self.prerelease is not None

    @property
    def is_major_release(self) -> bool:
        return self.minor == 0 and self.patch == 0

    @property
    def is_minor_release(self) -> bool:
        return self.patch == 0

    @property
    def is_patch_release(self) -> bool:
        return self.patch > 0

    @property
    def is_at_least_major_release(self) -> bool:
        return self.is_major_release

    @property
    def is_at_least_minor_release(self) -> bool:
        return self.is_major_release or self.is_minor_release

    @property
    def is_at_least_patch_release(self) -> bool:
        return self.is_major_release or self.is_minor_release or self.is_patch_release

    # Ordering

    @property
    def _sort_key(self) -> tuple[int, int, int, float]:
        ordinal = math.inf if self.prerelease is None else self.prerelease
        return (self.major, self.minor, self.patch, ordinal)

    def compare(self, other: Version) -> int:
        """Compare with another version.

        Returns:
            -1, 0 or 1 when self is lower, equal or higher
        """
        if self._sort_key < other._sort_key:
            return -1
        if self._sort_key > other._sort_key:
            return 1
        return 0

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._sort_key < other._sort_key

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._sort_key <= other._sort_key

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._sort_key > other._sort_key

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._sort_key >= other._sort_key

    # Serialization

    @property
    def base(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    def to_tag(self) -> str:
        """Render the canonical tag string."""
        if self.prerelease is None:
            return self.base
        if self.prerelease == 0:
            return f"{self.base}-{PRERELEASE_MARKER}"
        return f"{self.base}-{PRERELEASE_MARKER}.{self.prerelease}"

    def to_publish_version(self) -> str:
        """Render the version used when publishing build artifacts.

        Prereleases publish as ``<major>.<minor>.<patch>-SNAPSHOT``.
        """
        if self.prerelease is None:
            return self.base
        return f"{self.base}-{SNAPSHOT_SUFFIX}"

    def __str__(self) -> str:
        return self.to_tag()


def parse_version(tag: str) -> Version:
    """Parse a tag string into a Version. See Version.parse."""
    return Version.parse(tag)
