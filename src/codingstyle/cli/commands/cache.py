# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI command forgetting the image freshness record."""

from __future__ import annotations

from pathlib import Path

from ...logging import ok
from ..shared import (
    CLIError,
    CommonOptions,
    ConfigOption,
    NoColorOption,
    NoEmojiOption,
    RootArgument,
    VerboseOption,
    build_tool_runner,
    exit_on_cli_error,
    load_cli_settings,
)


def clear_cache(
    root: RootArgument = Path("."),
    config: ConfigOption = None,
    verbose: VerboseOption = False,
    no_color: NoColorOption = False,
    no_emoji: NoEmojiOption = False,
) -> None:
    """Force the next analysis to pull the checker image again."""

    options = CommonOptions.from_flags(config=config, verbose=verbose, no_color=no_color, no_emoji=no_emoji)
    try:
        settings = load_cli_settings(root.resolve(), options)
    except CLIError as exc:
        raise exit_on_cli_error(exc, options) from exc
    build_tool_runner(settings).forget_image()
    ok(
        f"Cleared image freshness record in {settings.resolved_state_file()}",
        use_emoji=options.use_emoji,
        use_color=options.use_color,
    )


__all__ = ["clear_cache"]
