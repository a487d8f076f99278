# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models shared across the codingstyle package."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from .severity import SeverityLabel


@dataclass(frozen=True, slots=True)
class Finding:
    """Describe one coding-style violation reported by the checker.

    Attributes:
        line: Zero-based line index inside the reported file.
        severity: Severity label, possibly unrecognized.
        code: Taxonomy identifier such as ``C-F3``.
        message: Trimmed remainder of the report line after the line number.
    """

    line: int
    severity: SeverityLabel
    code: str
    message: str

    def __post_init__(self) -> None:
        if self.line < 0:
            raise ValueError(f"finding line must be non-negative, got {self.line}")


FileFindings = dict[str, list[Finding]]


def count_findings(findings: Mapping[str, Sequence[Finding]]) -> int:
    """Return the number of findings across every file in ``findings``.

    Args:
        findings: Mapping of relative paths to the findings reported for them.

    Returns:
        int: Total number of findings.
    """

    return sum(len(entries) for entries in findings.values())


__all__ = ["FileFindings", "Finding", "count_findings"]
