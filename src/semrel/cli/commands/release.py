"""Implementation of the 'release' command.

The release command is the GitHub Actions entry point: it reads the
action inputs, runs the configured release mode and publishes the
step outputs.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from semrel.actions import ActionsReporter
from semrel.config import load_config
from semrel.core.release import ReleaseOrchestrator
from semrel.exceptions import SemrelError
from semrel.vcs import GitHubClient

if TYPE_CHECKING:
    from collections.abc import Mapping

    from rich.console import Console


def run_release(
    inputs: Mapping[str, str | bool | None],
    verbose: bool,
    console: Console,
    err_console: Console,
) -> None:
    """Run the release command.

    Args:
        inputs: Input values given on the command line, keyed by input name.
            Missing inputs fall back to ``INPUT_*`` environment variables.
        verbose: Print debug messages
        console: Console for standard output
        err_console: Console for error output
    """
    reporter = ActionsReporter.from_env(console, err_console, verbose=verbose)

    try:
        config = load_config(inputs)
    except SemrelError as e:
        reporter.error(str(e))
        raise SystemExit(1) from e

    if config.dry_run:
        console.print("[yellow]DRY-RUN[/] - no release will be created\n")

    try:
        with GitHubClient.from_config(config.github) as client:
            outcome = ReleaseOrchestrator(config, client, reporter).run()
    except SemrelError as e:
        reporter.error(str(e))
        raise SystemExit(1) from e

    reporter.set_outputs(outcome.to_outputs())
