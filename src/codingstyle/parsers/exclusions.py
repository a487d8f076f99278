# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Gitignore-flavoured path exclusion rules.

The matcher deliberately implements a reduced dialect: ``*`` matches any run
of characters including ``/`` and a pattern without a trailing slash must
match the whole path. Patterns are never interpreted relative to the
directory that contains them.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from pathlib import Path
from re import Pattern
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, model_validator

LOGGER = logging.getLogger(__name__)

_COMMENT_PREFIX: Final[str] = "#"
_DIRECTORY_SUFFIX: Final[str] = "/"
_ESCAPED_WILDCARD: Final[str] = re.escape("*")


def compile_pattern(pattern: str) -> Pattern[str]:
    """Translate one ignore pattern into an anchored regular expression.

    Args:
        pattern: Non-blank, non-comment ignore pattern.

    Returns:
        Pattern[str]: Compiled expression matching workspace-relative paths.
    """

    directory = pattern.endswith(_DIRECTORY_SUFFIX)
    body = pattern.rstrip(_DIRECTORY_SUFFIX) if directory else pattern
    translated = re.escape(body).replace(_ESCAPED_WILDCARD, ".*")
    if directory:
        return re.compile(f"^{translated}(?:/.*)?$")
    return re.compile(f"^{translated}$")


def clean_patterns(lines: Iterable[str]) -> tuple[str, ...]:
    """Drop blank lines and comments from raw ignore-file lines.

    Args:
        lines: Lines read from an ignore file.

    Returns:
        tuple[str, ...]: Trimmed patterns in file order.
    """

    cleaned: list[str] = []
    for raw in lines:
        entry = raw.strip()
        if not entry or entry.startswith(_COMMENT_PREFIX):
            continue
        cleaned.append(entry)
    return tuple(cleaned)


class ExclusionMatcher(BaseModel):
    """Decide whether a workspace-relative path is excluded from the report."""

    model_config = ConfigDict(frozen=True)

    patterns: tuple[str, ...] = Field(default_factory=tuple)
    _compiled: tuple[Pattern[str], ...] = PrivateAttr(default_factory=tuple)

    @model_validator(mode="after")
    def _compile_patterns(self) -> ExclusionMatcher:
        """Compile the configured patterns once for reuse.

        Returns:
            ExclusionMatcher: Matcher instance with compiled patterns cached.
        """

        self._compiled = tuple(compile_pattern(pattern) for pattern in clean_patterns(self.patterns))
        return self

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> ExclusionMatcher:
        """Build a matcher from raw ignore-file lines.

        Args:
            lines: Lines that may include comments and blanks.

        Returns:
            ExclusionMatcher: Matcher over the meaningful patterns.
        """

        return cls(patterns=clean_patterns(lines))

    @classmethod
    def from_file(cls, path: Path) -> ExclusionMatcher:
        """Load patterns from ``path``; a missing file excludes nothing.

        Args:
            path: Location of the ignore file.

        Returns:
            ExclusionMatcher: Matcher built from the file contents.
        """

        if not path.is_file():
            LOGGER.debug("No ignore file at %s", path)
            return cls()
        return cls.from_lines(path.read_text(encoding="utf-8").splitlines())

    def matches(self, path: str) -> bool:
        """Return whether any pattern matches ``path``.

        Args:
            path: Normalised, forward-slash separated relative path.

        Returns:
            bool: ``True`` when the path is excluded.
        """

        return any(pattern.match(path) for pattern in self._compiled)


__all__ = ["ExclusionMatcher", "clean_patterns", "compile_pattern"]
