"""Version control hosting integration."""

from __future__ import annotations

from semrel.vcs.github import GitHubClient, PullRequest, Release, ReleaseHost

__all__ = [
    "GitHubClient",
    "PullRequest",
    "Release",
    "ReleaseHost",
]
