"""Command line interface for semrel."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console

from semrel import __version__
from semrel.cli.commands.next import run_next
from semrel.cli.commands.release import run_release
from semrel.core.version import BumpType

app = typer.Typer(
    name="semrel",
    help="Compute the next semantic version and create GitHub releases.",
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()
err_console = Console(stderr=True)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"semrel {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = False,
) -> None:
    """semrel - semantic version releases for GitHub repositories."""


@app.command()
def release(
    github_token: Annotated[
        str | None,
        typer.Option(help="GitHub token. Defaults to INPUT_GITHUB_TOKEN.", show_default=False),
    ] = None,
    repo_owner: Annotated[
        str | None,
        typer.Option(help="Repository owner. Defaults to GITHUB_REPOSITORY's owner."),
    ] = None,
    repo_name: Annotated[
        str | None,
        typer.Option(help="Repository name. Defaults to GITHUB_REPOSITORY's name."),
    ] = None,
    version_bump: Annotated[
        str | None,
        typer.Option(help="prlabel, norelease, major, minor or patch."),
    ] = None,
    release_mode: Annotated[
        str | None,
        typer.Option(help="prerelease, release or promote."),
    ] = None,
    promote_from: Annotated[
        str | None,
        typer.Option(help="Prerelease tag to promote. Only valid with release_mode promote."),
    ] = None,
    version_selection: Annotated[
        str | None,
        typer.Option(help="all (default) or matching: which tags count as latest version."),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Compute the next version without creating a release."),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Print debug messages."),
    ] = False,
) -> None:
    """Create the next release, prerelease or promotion.

    Every option falls back to the matching [cyan]INPUT_*[/] environment
    variable set by GitHub Actions.
    """
    inputs: dict[str, str | bool | None] = {
        "github_token": github_token,
        "repo_owner": repo_owner,
        "repo_name": repo_name,
        "version_bump": version_bump,
        "release_mode": release_mode,
        "promote_from": promote_from,
        "version_selection": version_selection,
        "dry_run": True if dry_run else None,
    }
    run_release(inputs, verbose, console, err_console)


@app.command("next")
def next_(
    current: Annotated[str, typer.Argument(help="Current tag, e.g. 1.2.0-pre.3.")],
    bump: Annotated[BumpType, typer.Option("--bump", "-b", help="Bump to apply.")],
    prerelease: Annotated[
        bool,
        typer.Option("--prerelease", help="Compute the next prerelease instead of a release."),
    ] = False,
) -> None:
    """Print the version that follows CURRENT."""
    run_next(current, bump, prerelease, console, err_console)


if __name__ == "__main__":
    app()
