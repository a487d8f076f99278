# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI command running one analysis of a workspace."""

from __future__ import annotations

from pathlib import Path

import typer

from ...logging import info, ok, section, warn
from ...reporting.console import render_diagnostics, status_text
from ..shared import (
    EXIT_FAILURE,
    EXIT_FINDINGS,
    CLIError,
    CommonOptions,
    ConfigOption,
    NoColorOption,
    NoEmojiOption,
    RootArgument,
    VerboseOption,
    build_runtime,
    exit_on_cli_error,
    load_cli_settings,
)


def check(
    root: RootArgument = Path("."),
    config: ConfigOption = None,
    verbose: VerboseOption = False,
    no_color: NoColorOption = False,
    no_emoji: NoEmojiOption = False,
) -> None:
    """Run the coding-style checker once and print its findings.

    Exits with ``0`` when the workspace is clean, ``1`` when findings were
    reported and ``2`` when the checker could not run.
    """

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
    try:
        total = runtime.coordinator.run_analysis(workspace).result()
        if runtime.notifier.messages:
            raise typer.Exit(code=EXIT_FAILURE)

        summary = status_text(total)
        if total == 0:
            ok(summary, use_emoji=options.use_emoji, use_color=options.use_color)
            raise typer.Exit(code=0)
        section("Coding style findings", use_color=options.use_color)
        render_diagnostics(runtime.sink, root=workspace, use_color=options.use_color, use_emoji=options.use_emoji)
        warn(summary, use_emoji=options.use_emoji, use_color=options.use_color)
        raise typer.Exit(code=EXIT_FINDINGS)
    finally:
        runtime.coordinator.dispose()


__all__ = ["check"]
