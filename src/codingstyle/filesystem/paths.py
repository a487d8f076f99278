# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Helpers for reasoning about report and workspace paths."""

from __future__ import annotations

from os import PathLike
from pathlib import Path
from typing import Final

from ..constants import TESTS_DIR

_Pathish = str | PathLike[str] | Path
_CURRENT_DIR_PREFIX: Final[str] = "./"
_TESTS_PREFIX: Final[str] = f"{TESTS_DIR}/"
_TESTS_SEGMENT: Final[str] = f"/{TESTS_DIR}/"


def normalize_report_path(path: str) -> str:
    """Return ``path`` with a single leading ``./`` removed.

    Args:
        path: File path as printed by the checker.

    Returns:
        str: Workspace-relative key used in :data:`FileFindings`.
    """

    if path.startswith(_CURRENT_DIR_PREFIX):
        return path[len(_CURRENT_DIR_PREFIX) :]
    return path


def is_test_path(path: str) -> bool:
    """Return whether ``path`` lives under a directory literally named ``tests``.

    Args:
        path: Normalised workspace-relative path.

    Returns:
        bool: ``True`` when the path starts with ``tests/`` or contains ``/tests/``.
    """

    return path.startswith(_TESTS_PREFIX) or _TESTS_SEGMENT in path


def resolve_in_root(root: _Pathish, relative: str) -> Path:
    """Return the absolute location of ``relative`` inside ``root``.

    Args:
        root: Workspace root that anchors the relative path.
        relative: Forward-slash separated path relative to ``root``.

    Returns:
        Path: Absolute path; ``..`` segments are collapsed without touching the disk.
    """

    base = Path(root).expanduser()
    if not base.is_absolute():
        base = base.absolute()
    candidate = base / relative
    return Path(*_collapse(candidate.parts))


def is_within(path: _Pathish, root: _Pathish) -> bool:
    """Return whether ``path`` equals ``root`` or lies beneath it.

    Args:
        path: Candidate location.
        root: Directory that may contain ``path``.

    Returns:
        bool: ``True`` when ``path`` is ``root`` or one of its descendants.
    """

    candidate = Path(*_collapse(Path(path).absolute().parts))
    base = Path(*_collapse(Path(root).absolute().parts))
    return candidate == base or base in candidate.parents


def _collapse(parts: tuple[str, ...]) -> list[str]:
    collapsed: list[str] = []
    for part in parts:
        if part == ".":
            continue
        if part == ".." and len(collapsed) > 1:
            collapsed.pop()
            continue
        collapsed.append(part)
    return collapsed


__all__ = (
    "is_test_path",
    "is_within",
    "normalize_report_path",
    "resolve_in_root",
)
