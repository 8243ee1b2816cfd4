"""Tests for the command line interface."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from semrel import __version__
from semrel.cli.main import app
from semrel.exceptions import GitHubAPIError

runner = CliRunner()


@pytest.fixture
def action_env(tmp_path: Path) -> dict[str, str]:
    return {
        "GITHUB_REPOSITORY": "octo/widgets",
        "GITHUB_SHA": "deadbeef",
        "GITHUB_OUTPUT": str(tmp_path / "github_output"),
        "INPUT_GITHUB_TOKEN": "ghp_secret",
        "INPUT_RELEASE_MODE": "release",
        "INPUT_VERSION_BUMP": "major",
    }


@pytest.fixture
def github_client(host: MagicMock):
    """Patch GitHubClient so the release command talks to the mock host."""
    with patch("semrel.cli.commands.release.GitHubClient") as client_cls:
        client_cls.from_config.return_value.__enter__.return_value = host
        yield client_cls


class TestVersionOption:
    """Tests for the --version option."""

    def test_version(self):
        """--version prints the package version."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output


class TestNextCommand:
    """Tests for 'semrel next'."""

    def test_next_prerelease(self):
        """Next prerelease tag and publish version are printed."""
        result = runner.invoke(app, ["next", "1.2.3-pre.2", "--bump", "patch", "--prerelease"])

        assert result.exit_code == 0
        assert "tag_name=1.2.3-pre.3" in result.output
        assert "publish_version=1.2.3-SNAPSHOT" in result.output

    def test_next_release(self):
        """Next release tag is printed."""
        result = runner.invoke(app, ["next", "1.2.3", "-b", "minor"])

        assert result.exit_code == 0
        assert "tag_name=1.3.0" in result.output

    def test_next_invalid_tag(self):
        """An invalid current tag fails the command."""
        result = runner.invoke(app, ["next", "0.0.0-beta.1", "--bump", "patch"])

        assert result.exit_code == 1
        assert "Invalid tag format" in result.output

    def test_next_bump_none(self):
        """Bump none has no next version."""
        result = runner.invoke(app, ["next", "1.0.0", "--bump", "none"])

        assert result.exit_code == 1


class TestReleaseCommand:
    """Tests for 'semrel release'."""

    def test_release(self, action_env, github_client, host: MagicMock):
        """A release run writes all step outputs."""
        host.list_tags.return_value = ["1.0.0", "1.1.0", "1.1.0-pre"]

        result = runner.invoke(app, ["release"], env=action_env)

        assert result.exit_code == 0, result.output
        outputs = Path(action_env["GITHUB_OUTPUT"]).read_text()
        assert "release_created=true\n" in outputs
        assert "tag_name=2.0.0\n" in outputs
        assert "publish_version=2.0.0\n" in outputs
        assert "release_type=release\n" in outputs
        host.create_release.assert_called_once_with("2.0.0", prerelease=False)

    def test_options_override_inputs(self, action_env, github_client, host: MagicMock):
        """Command line options override INPUT_* variables."""
        host.list_tags.return_value = ["1.0.0"]

        result = runner.invoke(
            app,
            ["release", "--release-mode", "prerelease", "--version-bump", "minor"],
            env=action_env,
        )

        assert result.exit_code == 0, result.output
        host.create_release.assert_called_once_with("1.1.0-pre", prerelease=True)

    def test_dry_run(self, action_env, github_client, host: MagicMock):
        """--dry-run computes the version without creating a release."""
        host.list_tags.return_value = ["1.0.0"]

        result = runner.invoke(app, ["release", "--dry-run"], env=action_env)

        assert result.exit_code == 0, result.output
        host.create_release.assert_not_called()
        outputs = Path(action_env["GITHUB_OUTPUT"]).read_text()
        assert "release_created=false\n" in outputs
        assert "tag_name=2.0.0\n" in outputs

    def test_no_release_label_succeeds(self, action_env, github_client, host: MagicMock):
        """A missing release label ends the run successfully."""
        action_env["INPUT_VERSION_BUMP"] = "prlabel"

        result = runner.invoke(app, ["release"], env=action_env)

        assert result.exit_code == 0, result.output
        assert Path(action_env["GITHUB_OUTPUT"]).read_text() == "release_created=false\n"

    def test_invalid_release_mode(self, action_env, github_client):
        """An invalid release_mode fails before contacting GitHub."""
        action_env["INPUT_RELEASE_MODE"] = "hotfix"

        result = runner.invoke(app, ["release"], env=action_env)

        assert result.exit_code == 1
        assert "Invalid release_mode" in result.output
        github_client.from_config.assert_not_called()

    def test_missing_token(self, action_env, github_client):
        """A missing token fails the run."""
        del action_env["INPUT_GITHUB_TOKEN"]

        result = runner.invoke(app, ["release"], env=action_env)

        assert result.exit_code == 1
        assert "github_token" in result.output

    def test_api_error_fails_run(self, action_env, github_client, host: MagicMock):
        """API errors fail the run without writing outputs."""
        host.list_tags.side_effect = GitHubAPIError("Bad credentials", status_code=401)

        result = runner.invoke(app, ["release"], env=action_env)

        assert result.exit_code == 1
        assert "Bad credentials" in result.output
        assert not Path(action_env["GITHUB_OUTPUT"]).exists()

    def test_no_releases_fails_run(self, action_env, github_client):
        """A repository without tags fails the run."""
        result = runner.invoke(app, ["release"], env=action_env)

        assert result.exit_code == 1
        assert "No releases found." in result.output
