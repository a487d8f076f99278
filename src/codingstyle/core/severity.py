# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity related types and helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final


class Severity(str, Enum):
    """Severity vocabulary emitted by the coding-style checker."""

    MAJOR = "MAJOR"
    MINOR = "MINOR"
    INFO = "INFO"


@dataclass(frozen=True, slots=True)
class UnrecognizedSeverity:
    """Severity label outside :class:`Severity`, kept verbatim."""

    raw: str

    @property
    def value(self) -> str:
        """Return the original label so callers can treat both variants alike.

        Returns:
            str: Severity text exactly as it appeared in the report.
        """

        return self.raw

    def __str__(self) -> str:
        return self.raw


SeverityLabel = Severity | UnrecognizedSeverity


class DiagnosticLevel(str, Enum):
    """Presentation levels understood by diagnostic sinks."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    HINT = "hint"


_SEVERITY_TO_LEVEL: Final[dict[Severity, DiagnosticLevel]] = {
    Severity.MAJOR: DiagnosticLevel.ERROR,
    Severity.MINOR: DiagnosticLevel.WARNING,
    Severity.INFO: DiagnosticLevel.INFO,
}


def parse_severity(label: str) -> SeverityLabel:
    """Return the severity matching ``label``.

    Args:
        label: Severity token extracted from a report line.

    Returns:
        SeverityLabel: Known :class:`Severity` member, or an
        :class:`UnrecognizedSeverity` carrying ``label`` unchanged.
    """

    try:
        return Severity(label)
    except ValueError:
        return UnrecognizedSeverity(label)


def severity_to_level(severity: SeverityLabel) -> DiagnosticLevel:
    """Map ``severity`` to the level used when rendering diagnostics.

    Args:
        severity: Severity attached to a finding.

    Returns:
        DiagnosticLevel: Rendering level; unrecognized labels fall back to
        :attr:`DiagnosticLevel.HINT`.
    """

    if isinstance(severity, Severity):
        return _SEVERITY_TO_LEVEL[severity]
    return DiagnosticLevel.HINT


__all__ = [
    "DiagnosticLevel",
    "Severity",
    "SeverityLabel",
    "UnrecognizedSeverity",
    "parse_severity",
    "severity_to_level",
]
