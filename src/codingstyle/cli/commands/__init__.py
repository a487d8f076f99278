# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Command registration for the codingstyle CLI."""

from __future__ import annotations

import typer

from .cache import clear_cache
from .check import check
from .parse import parse
from .watch import watch_command


def register_commands(app: typer.Typer) -> None:
    """Attach every command to ``app``.

    Args:
        app: Typer application receiving the commands.
    """

    app.command("check")(check)
    app.command("parse")(parse)
    app.command("watch")(watch_command)
    app.command("clear-cache")(clear_cache)


__all__ = ["register_commands"]
