# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI command parsing an existing checker report without running docker."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from ...core.models import count_findings
from ...filesystem.paths import resolve_in_root
from ...logging import ok, warn
from ...parsers.report import ReportParser
from ...reporting.console import render_diagnostics, status_text
from ...reporting.diagnostics import DiagnosticCollection
from ..shared import (
    EXIT_FINDINGS,
    CLIError,
    CommonOptions,
    ConfigOption,
    NoColorOption,
    NoEmojiOption,
    VerboseOption,
    exit_on_cli_error,
    load_cli_settings,
)


def parse(
    report: Annotated[
        Path,
        typer.Argument(exists=True, file_okay=True, dir_okay=False, help="Report file written by the checker."),
    ],
    root: Annotated[
        Path,
        typer.Option("--root", file_okay=False, dir_okay=True, exists=True, help="Workspace the report describes."),
    ] = Path("."),
    config: ConfigOption = None,
    verbose: VerboseOption = False,
    no_color: NoColorOption = False,
    no_emoji: NoEmojiOption = False,
) -> None:
    """Print the findings recorded in an existing report file."""

    options = CommonOptions.from_flags(config=config, verbose=verbose, no_color=no_color, no_emoji=no_emoji)
    workspace = root.resolve()
    try:
        settings = load_cli_settings(workspace, options)
    except CLIError as exc:
        raise exit_on_cli_error(exc, options) from exc

    try:
        findings = ReportParser.for_workspace(workspace, ignore_file=settings.ignore_file).parse(report)
    except (OSError, UnicodeDecodeError) as exc:
        raise exit_on_cli_error(CLIError(f"Unable to read report {report}: {exc}"), options) from exc

    sink = DiagnosticCollection()
    for relative, entries in findings.items():
        sink.update(resolve_in_root(workspace, relative), entries)

    total = count_findings(findings)
    if total == 0:
        ok(status_text(total), use_emoji=options.use_emoji, use_color=options.use_color)
        raise typer.Exit(code=0)
    render_diagnostics(sink, root=workspace, use_color=options.use_color, use_emoji=options.use_emoji)
    warn(status_text(total), use_emoji=options.use_emoji, use_color=options.use_color)
    raise typer.Exit(code=EXIT_FINDINGS)


__all__ = ["parse"]
