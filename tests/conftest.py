"""Shared fixtures for semrel tests."""

from __future__ import annotations

import io
import os
from collections.abc import Callable
from typing import Any
from unittest.mock import MagicMock

import pytest
from rich.console import Console

from semrel.actions import ActionsReporter
from semrel.config.models import GitHubConfig, ReleaseMode, SemrelConfig, VersionBump
from semrel.vcs.github import GitHubClient, PullRequest, Release


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Isolate tests from the workflow environment they may run in."""
    for name in list(os.environ):
        if name.startswith(("INPUT_", "GITHUB_", "RUNNER_")):
            monkeypatch.delenv(name)


def make_console() -> Console:
    return Console(file=io.StringIO(), width=200, force_terminal=False, color_system=None)


def console_text(console: Console) -> str:
    """Return everything printed to a test console."""
    return console.file.getvalue()  # type: ignore[attr-defined]


@pytest.fixture
def console() -> Console:
    return make_console()


@pytest.fixture
def err_console() -> Console:
    return make_console()


@pytest.fixture
def reporter(console: Console, err_console: Console) -> ActionsReporter:
    """Reporter writing to in-memory consoles, outputs printed."""
    return ActionsReporter(console, err_console, verbose=True)


@pytest.fixture
def github_config() -> GitHubConfig:
    return GitHubConfig(token="ghp_test", owner="octo", repo="widgets")


@pytest.fixture
def make_config(github_config: GitHubConfig) -> Callable[..., SemrelConfig]:
    """Factory for SemrelConfig with release-mode defaults."""

    def _make(**overrides: Any) -> SemrelConfig:
        values: dict[str, Any] = {
            "github": github_config,
            "release_mode": ReleaseMode.RELEASE,
            "version_bump": VersionBump.PATCH,
            "commit_sha": "abc123",
        }
        values.update(overrides)
        return SemrelConfig(**values)

    return _make


@pytest.fixture
def host() -> MagicMock:
    """Mock GitHub client with an empty repository."""
    client = MagicMock(spec=GitHubClient)
    client.list_associated_pull_requests.return_value = []
    client.list_tags.return_value = []
    client.get_release_by_tag.return_value = None

    def _create(tag_name: str, *, prerelease: bool, generate_notes: bool = True) -> Release:
        return Release(tag_name=tag_name, prerelease=prerelease, body=f"Notes for {tag_name}")

    client.create_release.side_effect = _create
    return client


@pytest.fixture
def labelled_pr() -> Callable[..., PullRequest]:
    def _make(*labels: str, number: int = 1) -> PullRequest:
        return PullRequest(number=number, labels=labels)

    return _make
