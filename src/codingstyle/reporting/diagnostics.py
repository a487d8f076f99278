# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""In-memory diagnostics sink used by the command line front end."""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from ..constants import DIAGNOSTIC_SOURCE
from ..core.models import Finding
from ..core.severity import DiagnosticLevel, UnrecognizedSeverity, severity_to_level
from ..interfaces.diagnostics import DiagnosticsSink
from .descriptions import format_message

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Presentation-ready view of a finding anchored to a whole line."""

    path: Path
    line: int
    level: DiagnosticLevel
    code: str
    message: str
    detail: str
    source: str = DIAGNOSTIC_SOURCE

    @classmethod
    def from_finding(cls, path: Path, finding: Finding) -> Diagnostic:
        """Build a diagnostic for ``finding`` reported against ``path``.

        Args:
            path: Absolute path of the offending file.
            finding: Parsed finding.

        Returns:
            Diagnostic: Diagnostic carrying the described rule code.
        """

        if isinstance(finding.severity, UnrecognizedSeverity):
            LOGGER.warning("Unknown severity level %r for %s", finding.severity.raw, finding.code)
        return cls(
            path=path,
            line=finding.line,
            level=severity_to_level(finding.severity),
            code=finding.code,
            message=format_message(finding.code),
            detail=finding.message,
        )


class DiagnosticCollection(DiagnosticsSink):
    """Hold the current diagnostics per file."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: dict[Path, list[Diagnostic]] = {}
        self._disposed = False

    def update(self, path: Path, findings: Sequence[Finding]) -> None:
        """Replace the diagnostics of ``path``; an empty sequence removes them.

        Args:
            path: Absolute file path.
            findings: Findings to render for ``path``.
        """

        diagnostics = [Diagnostic.from_finding(path, finding) for finding in findings]
        LOGGER.debug("Updating diagnostics for %s (%d entries)", path, len(diagnostics))
        with self._lock:
            if self._disposed:
                return
            if diagnostics:
                self._entries[path] = diagnostics
            else:
                self._entries.pop(path, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def dispose(self) -> None:
        with self._lock:
            self._entries.clear()
            self._disposed = True

    def get(self, path: Path) -> list[Diagnostic]:
        """Return the diagnostics currently held for ``path``."""

        with self._lock:
            return list(self._entries.get(path, ()))

    def items(self) -> list[tuple[Path, list[Diagnostic]]]:
        """Return every ``(path, diagnostics)`` pair sorted by path."""

        with self._lock:
            return [(path, list(entries)) for path, entries in sorted(self._entries.items())]

    def total(self) -> int:
        with self._lock:
            return sum(len(entries) for entries in self._entries.values())


__all__ = ["Diagnostic", "DiagnosticCollection"]
