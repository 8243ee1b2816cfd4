"""Core business logic for semrel.

This module contains the fundamental building blocks:
- Version parsing, ordering and tag rendering
- Bump policy resolution (fixed or from pull request labels)
- Next-version transitions for releases and prereleases
- Release orchestration
"""

from __future__ import annotations

from semrel.core.bump import BumpDecision, NoReleaseReason, resolve_bump
from semrel.core.release import (
    ReleaseOrchestrator,
    ReleaseOutcome,
    find_latest_version,
    parse_tags,
)
from semrel.core.transitions import next_version
from semrel.core.version import BumpType, Version, parse_version

__all__ = [
    # Bump
    "BumpDecision",
    # Version
    "BumpType",
    "NoReleaseReason",
    # Release
    "ReleaseOrchestrator",
    "ReleaseOutcome",
    "Version",
    "find_latest_version",
    "next_version",
    "parse_tags",
    "parse_version",
    "resolve_bump",
]
