# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Workspace membership checks deciding which triggers start an analysis."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path

from .config.models import Settings
from .constants import C_SOURCE_SUFFIXES
from .errors import InvalidTargetError
from .filesystem.paths import is_within
from .interfaces.diagnostics import TargetValidator

LOGGER = logging.getLogger(__name__)


def has_c_sources(directory: Path) -> bool:
    """Return whether ``directory`` contains a C or C++ source or header.

    Args:
        directory: Directory searched recursively.

    Returns:
        bool: ``True`` as soon as one matching file is found.
    """

    for _current, _dirs, files in os.walk(directory):
        if any(Path(name).suffix.lower() in C_SOURCE_SUFFIXES for name in files):
            return True
    return False


class WorkspaceValidator(TargetValidator):
    """Map triggers to the workspace root that owns them."""

    def __init__(
        self,
        roots: Iterable[Path],
        *,
        banned_extensions: Iterable[str] = (),
        require_c_sources: bool = False,
    ) -> None:
        """Record the known workspace roots and eligibility rules.

        Args:
            roots: Workspace roots; a trigger must lie beneath one of them.
            banned_extensions: File extensions, without the dot, that never
                trigger an analysis.
            require_c_sources: Reject roots without any C sources when ``True``.
        """

        self._roots = sorted({root.resolve() for root in roots}, key=lambda path: len(path.parts), reverse=True)
        self._banned = frozenset(ext.lstrip(".").lower() for ext in banned_extensions)
        self._require_c_sources = require_c_sources

    @classmethod
    def from_settings(cls, roots: Iterable[Path], settings: Settings) -> WorkspaceValidator:
        return cls(
            roots,
            banned_extensions=settings.banned_extensions,
            require_c_sources=settings.require_c_sources,
        )

    @property
    def roots(self) -> tuple[Path, ...]:
        return tuple(self._roots)

    def resolve_target(self, trigger: Path) -> Path:
        """Return the innermost workspace root containing ``trigger``.

        Args:
            trigger: File or directory that prompted the analysis.

        Returns:
            Path: Resolved workspace root.

        Raises:
            InvalidTargetError: If ``trigger`` has a banned extension, lies
                outside every root, or its root holds no C sources while they
                are required.
        """

        candidate = trigger.resolve()
        extension = candidate.suffix.lstrip(".").lower()
        if extension and extension in self._banned and not candidate.is_dir():
            raise InvalidTargetError(f"{trigger} has a banned extension (.{extension})")
        for root in self._roots:
            if is_within(candidate, root):
                break
        else:
            raise InvalidTargetError(f"{trigger} is not inside a known workspace")
        if self._require_c_sources and not has_c_sources(root):
            raise InvalidTargetError(f"{root} contains no C sources")
        LOGGER.debug("Trigger %s resolved to workspace %s", trigger, root)
        return root


__all__ = ["WorkspaceValidator", "has_c_sources"]
