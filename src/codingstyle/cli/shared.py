# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Options and runtime wiring shared by every CLI command."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

import typer

from ..cache.providers import JsonFileStateStore
from ..config.loader import load_settings
from ..config.models import ConfigError, Settings
from ..core.process import run_command
from ..execution.coordinator import AnalysisCoordinator
from ..execution.scheduler import ThreadingScheduler
from ..execution.tool_runner import ToolRunner
from ..interfaces.runtime import CommandRunner, Scheduler
from ..logging import ConsoleNotifier, configure_logging, detect_tty, fail
from ..reporting.diagnostics import DiagnosticCollection
from ..workspace import WorkspaceValidator

EXIT_FINDINGS = 1
EXIT_FAILURE = 2

RootArgument = Annotated[
    Path,
    typer.Argument(file_okay=False, dir_okay=True, exists=True, help="Workspace root to analyze."),
]
ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", help="Extra TOML configuration file applied last."),
]
VerboseOption = Annotated[bool, typer.Option("--verbose", "-v", help="Show debug logging on stderr.")]
NoColorOption = Annotated[bool, typer.Option("--no-color", help="Disable ANSI colour output.")]
NoEmojiOption = Annotated[bool, typer.Option("--no-emoji", help="Disable emoji prefixes.")]


class CLIError(RuntimeError):
    """Error raised when a CLI command fails and should exit with a status code."""

    def __init__(self, message: str, *, exit_code: int = EXIT_FAILURE) -> None:
        """Initialise the error with a message and exit code.

        Args:
            message: Human-readable error message shown to the user.
            exit_code: Exit status associated with the failure.
        """

        super().__init__(message)
        self.exit_code = exit_code


@dataclass(slots=True)
class CommonOptions:
    """Presentation and configuration flags accepted by every command."""

    config: Path | None = None
    verbose: bool = False
    use_color: bool = True
    use_emoji: bool = True

    @classmethod
    def from_flags(cls, *, config: Path | None, verbose: bool, no_color: bool, no_emoji: bool) -> CommonOptions:
        """Build options from raw flags and configure logging accordingly."""

        options = cls(
            config=config,
            verbose=verbose,
            use_color=not no_color and detect_tty(),
            use_emoji=not no_emoji,
        )
        configure_logging(verbose=verbose, use_color=options.use_color)
        return options


class RecordingNotifier(ConsoleNotifier):
    """Console notifier that also remembers every failure it reported."""

    def __init__(self, *, use_emoji: bool = True, use_color: bool | None = None) -> None:
        super().__init__(use_emoji=use_emoji, use_color=use_color)
        self.messages: list[str] = []

    def error(self, message: str) -> None:
        self.messages.append(message)
        super().error(message)


@dataclass(slots=True)
class Runtime:
    """Collaborators wired for a workspace root."""

    root: Path
    settings: Settings
    tool_runner: ToolRunner
    sink: DiagnosticCollection
    notifier: RecordingNotifier
    coordinator: AnalysisCoordinator


def load_cli_settings(root: Path, options: CommonOptions) -> Settings:
    """Load settings for ``root`` converting configuration errors.

    Raises:
        CLIError: If the configuration cannot be loaded.
    """

    try:
        return load_settings(root, config_file=options.config)
    except ConfigError as exc:
        raise CLIError(str(exc)) from exc


def build_tool_runner(settings: Settings, *, runner: CommandRunner | None = None) -> ToolRunner:
    store = JsonFileStateStore(settings.resolved_state_file())
    return ToolRunner(settings, store, runner=runner or run_command)


def build_runtime(
    root: Path,
    settings: Settings,
    options: CommonOptions,
    *,
    runner: CommandRunner | None = None,
    scheduler: Scheduler | None = None,
) -> Runtime:
    """Wire the coordinator and its default collaborators for ``root``.

    Args:
        root: Workspace root the coordinator serves.
        settings: Resolved settings.
        options: Presentation flags.
        runner: Optional command runner replacing :func:`run_command`.
        scheduler: Optional scheduler replacing :class:`ThreadingScheduler`.

    Returns:
        Runtime: Fully wired collaborators.
    """

    tool_runner = build_tool_runner(settings, runner=runner)
    sink = DiagnosticCollection()
    notifier = RecordingNotifier(use_emoji=options.use_emoji, use_color=options.use_color)
    coordinator = AnalysisCoordinator(
        settings,
        tool_runner,
        sink,
        notifier,
        WorkspaceValidator.from_settings([root], settings),
        scheduler or ThreadingScheduler(),
    )
    return Runtime(
        root=root,
        settings=settings,
        tool_runner=tool_runner,
        sink=sink,
        notifier=notifier,
        coordinator=coordinator,
    )


def exit_on_cli_error(exc: CLIError, options: CommonOptions) -> typer.Exit:
    """Report ``exc`` and return the matching :class:`typer.Exit`."""

    fail(str(exc), use_emoji=options.use_emoji, use_color=options.use_color)
    return typer.Exit(code=exc.exit_code)


__all__ = [
    "EXIT_FAILURE",
    "EXIT_FINDINGS",
    "CLIError",
    "CommonOptions",
    "ConfigOption",
    "NoColorOption",
    "NoEmojiOption",
    "RecordingNotifier",
    "RootArgument",
    "Runtime",
    "VerboseOption",
    "build_runtime",
    "build_tool_runner",
    "exit_on_cli_error",
    "load_cli_settings",
]
