# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Rich rendering of published diagnostics."""

from __future__ import annotations

from pathlib import Path
from typing import Final

from rich import box
from rich.table import Table
from rich.text import Text

from ..core.severity import DiagnosticLevel
from ..filesystem.paths import is_within
from ..logging import get_console_manager
from .diagnostics import Diagnostic, DiagnosticCollection

DISABLED_STATUS: Final[str] = "Disabled"
CLEAN_STATUS: Final[str] = "No Coding Style Errors"

LEVEL_STYLES: Final[dict[DiagnosticLevel, str]] = {
    DiagnosticLevel.ERROR: "bold red",
    DiagnosticLevel.WARNING: "yellow",
    DiagnosticLevel.INFO: "cyan",
    DiagnosticLevel.HINT: "dim",
}


def status_text(total: int, *, enabled: bool = True) -> str:
    """Return the one-line summary shown after a run.

    Args:
        total: Number of findings published by the run.
        enabled: Whether analysis is enabled at all.

    Returns:
        str: ``"Disabled"``, ``"No Coding Style Errors"`` or
        ``"<n> Coding Style Error(s)"``.
    """

    if not enabled:
        return DISABLED_STATUS
    if total == 0:
        return CLEAN_STATUS
    noun = "Error" if total == 1 else "Errors"
    return f"{total} Coding Style {noun}"


def _display_path(path: Path, root: Path | None) -> str:
    if root is not None and is_within(path, root):
        return path.relative_to(root).as_posix()
    return str(path)


def build_table(entries: list[tuple[Path, list[Diagnostic]]], *, root: Path | None = None) -> Table:
    """Lay out diagnostics as a table with one row per finding.

    Args:
        entries: ``(path, diagnostics)`` pairs to render.
        root: Optional workspace root used to shorten paths.

    Returns:
        Table: Rich table ready for printing.
    """

    table = Table(box=box.SIMPLE_HEAVY, show_edge=False, pad_edge=False)
    table.add_column("File", overflow="fold")
    table.add_column("Line", justify="right")
    table.add_column("Level")
    table.add_column("Code")
    table.add_column("Description", overflow="fold")
    for path, diagnostics in entries:
        label = _display_path(path, root)
        for diagnostic in diagnostics:
            table.add_row(
                label,
                str(diagnostic.line + 1),
                Text(diagnostic.level.value, style=LEVEL_STYLES[diagnostic.level]),
                diagnostic.code,
                diagnostic.message.partition(" - ")[2] or diagnostic.message,
            )
    return table


def render_diagnostics(
    collection: DiagnosticCollection,
    *,
    root: Path | None = None,
    use_color: bool,
    use_emoji: bool,
) -> None:
    """Print every diagnostic held by ``collection``.

    Args:
        collection: Sink populated by a run.
        root: Optional workspace root used to shorten paths.
        use_color: Flag indicating whether ANSI colour support is desired.
        use_emoji: Flag indicating whether emoji output is desired.
    """

    entries = collection.items()
    if not entries:
        return
    console = get_console_manager().get(color=use_color, emoji=use_emoji)
    console.print(build_table(entries, root=root))


__all__ = ["CLEAN_STATUS", "DISABLED_STATUS", "build_table", "render_diagnostics", "status_text"]
