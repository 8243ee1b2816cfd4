"""Implementation of the 'next' command.

Computes the version that follows a given tag without talking to
GitHub.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from semrel.core.transitions import next_version
from semrel.core.version import BumpType, Version
from semrel.exceptions import SemrelError

if TYPE_CHECKING:
    from rich.console import Console


def run_next(
    current: str,
    bump: BumpType,
    prerelease: bool,
    console: Console,
    err_console: Console,
) -> None:
    """Print the tag and publish version that follow a tag.

    Args:
        current: Current tag, e.g. ``1.2.0-pre.3``
        bump: Bump to apply
        prerelease: Compute the next prerelease instead of a release
        console: Console for standard output
        err_console: Console for error output

    Raises:
        SystemExit: If the tag is invalid or the bump is not a transition
    """
    try:
        version = next_version(Version.parse(current), bump, prerelease=prerelease)
    except SemrelError as e:
        err_console.print(f"[red]Error:[/] {e}")
        raise SystemExit(1) from e

    console.print(f"tag_name={version.to_tag()}", markup=False, highlight=False)
    console.print(
        f"publish_version={version.to_publish_version()}", markup=False, highlight=False
    )
