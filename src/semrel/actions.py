"""GitHub Actions integration: logging and step outputs.

Messages go to rich consoles. Inside a workflow run, errors and
warnings are additionally emitted as workflow commands so they show
up as annotations, and outputs are appended to the ``GITHUB_OUTPUT``
file.
"""

from __future__ import annotations

import uuid
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic_settings import BaseSettings, SettingsConfigDict
from rich.markup import escape

if TYPE_CHECKING:
    from collections.abc import Mapping

    from rich.console import Console


def escape_command_data(value: str) -> str:
    """Escape a workflow command message."""
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def format_output(name: str, value: str) -> str:
    """Format one entry of the GITHUB_OUTPUT file.

    Multi-line values use the heredoc form with a random delimiter.
    """
    if "\n" not in value and "\r" not in value:
        return f"{name}={value}\n"
    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    return f"{name}<<{delimiter}\n{value}\n{delimiter}\n"


class RunnerEnvironment(BaseSettings):
    """Runner variables that shape reporting."""

    github_output: Path | None = None
    github_actions: bool = False
    runner_debug: bool = False

    model_config = SettingsConfigDict(env_ignore_empty=True, extra="ignore", frozen=True)


class ActionsReporter:
    """Reports progress, problems and outputs of a run."""

    def __init__(
        self,
        console: Console,
        err_console: Console,
        *,
        output_path: Path | None = None,
        annotate: bool = False,
        verbose: bool = False,
    ) -> None:
        """Initialize the reporter.

        Args:
            console: Console for standard output
            err_console: Console for error output
            output_path: GITHUB_OUTPUT file, or None to print outputs instead
            annotate: Emit workflow commands for errors and warnings
            verbose: Print debug messages
        """
        self.console = console
        self.err_console = err_console
        self.output_path = output_path
        self.annotate = annotate
        self.verbose = verbose

    @classmethod
    def from_env(
        cls,
        console: Console,
        err_console: Console,
        *,
        verbose: bool = False,
        runner: RunnerEnvironment | None = None,
    ) -> ActionsReporter:
        """Build a reporter for the current runner.

        ``RUNNER_DEBUG`` turns on debug messages as ``--verbose`` does.
        """
        runner = runner or RunnerEnvironment()
        return cls(
            console,
            err_console,
            output_path=runner.github_output,
            annotate=runner.github_actions,
            verbose=verbose or runner.runner_debug,
        )

    def _command(self, command: str, message: str) -> None:
        self.console.print(
            f"::{command}::{escape_command_data(message)}",
            markup=False,
            highlight=False,
            soft_wrap=True,
        )

    def info(self, message: str) -> None:
        self.console.print(escape(message))

    def success(self, message: str) -> None:
        self.console.print(f"[green]✓[/] {escape(message)}")

    def debug(self, message: str) -> None:
        if not self.verbose:
            return
        if self.annotate:
            self._command("debug", message)
        else:
            self.console.print(f"[dim]{escape(message)}[/]")

    def warning(self, message: str) -> None:
        if self.annotate:
            self._command("warning", message)
        self.err_console.print(f"[yellow]Warning:[/] {escape(message)}")

    def error(self, message: str) -> None:
        if self.annotate:
            self._command("error", message)
        self.err_console.print(f"[red]Error:[/] {escape(message)}")

    def set_outputs(self, outputs: Mapping[str, str]) -> None:
        """Publish step outputs."""
        if self.output_path is None:
            for name, value in outputs.items():
                self.console.print(f"[cyan]{name}[/]={escape(value)}")
            return
        with self.output_path.open("a", encoding="utf-8") as fh:
            for name, value in outputs.items():
                fh.write(format_output(name, value))
