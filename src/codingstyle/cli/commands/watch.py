# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI command re-running the checker whenever the workspace changes."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import typer

from ...logging import info, ok, warn
from ...reporting.console import render_diagnostics, status_text
from ...watcher import WorkspaceWatcher
from ..shared import (
    CLIError,
    CommonOptions,
    ConfigOption,
    NoColorOption,
    NoEmojiOption,
    RootArgument,
    Runtime,
    VerboseOption,
    build_runtime,
    exit_on_cli_error,
    load_cli_settings,
)


def _reporter(runtime: Runtime, options: CommonOptions) -> Callable[[int], None]:
    def report(total: int) -> None:
        if total:
            render_diagnostics(
                runtime.sink,
                root=runtime.root,
                use_color=options.use_color,
                use_emoji=options.use_emoji,
            )
            warn(status_text(total), use_emoji=options.use_emoji, use_color=options.use_color)
        else:
            ok(status_text(total), use_emoji=options.use_emoji, use_color=options.use_color)

    return report


def watch_command(
    root: RootArgument = Path("."),
    config: ConfigOption = None,
    verbose: VerboseOption = False,
    no_color: NoColorOption = False,
    no_emoji: NoEmojiOption = False,
) -> None:
    """Analyze the workspace now and again after every burst of changes."""

    options = CommonOptions.from_flags(config=config, verbose=verbose, no_color=no_color, no_emoji=no_emoji)
    workspace = root.resolve()
    try:
        settings = load_cli_settings(workspace, options)
    except CLIError as exc:
        raise exit_on_cli_error(exc, options) from exc
    if not settings.enabled:
        info(status_text(0, enabled=False), use_emoji=options.use_emoji, use_color=options.use_color)
        raise typer.Exit(code=0)

    runtime = build_runtime(workspace, settings, options)
    watcher = WorkspaceWatcher(workspace, settings, runtime.coordinator, on_result=_reporter(runtime, options))
    try:
        watcher.trigger(workspace)
        info(f"Watching {workspace} (Ctrl+C to stop)", use_emoji=options.use_emoji, use_color=options.use_color)
        watcher.run()
    finally:
        runtime.coordinator.dispose()


__all__ = ["watch_command"]
