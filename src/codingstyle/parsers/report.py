# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parser for the checker's colon-delimited text report.

Each non-blank line has the shape::

    <relativeFilePath>:<lineNumber>:<SEVERITY>:<CODE>[:<freeText>]

Lines under a ``tests`` directory or matched by the workspace ignore file are
skipped silently; structurally invalid lines are logged and skipped.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from ..constants import IGNORE_FILE
from ..core.models import FileFindings, Finding
from ..core.severity import SeverityLabel, parse_severity
from ..errors import MalformedReportLineError, MissingReportError
from ..filesystem.paths import is_test_path, normalize_report_path
from .exclusions import ExclusionMatcher

LOGGER = logging.getLogger(__name__)

FIELD_SEPARATOR: Final[str] = ":"
MIN_FIELDS: Final[int] = 4
_LINE_NUMBER_RE: Final[re.Pattern[str]] = re.compile(r"\d+", re.ASCII)


@dataclass(frozen=True, slots=True)
class ReportEntry:
    """Structured view of one report line before exclusion rules apply."""

    path: str
    line_number: int
    severity: SeverityLabel
    code: str
    message: str

    def to_finding(self) -> Finding:
        """Convert the one-based report entry into a zero-based finding.

        Returns:
            Finding: Finding anchored at ``line_number - 1``.
        """

        return Finding(
            line=self.line_number - 1,
            severity=self.severity,
            code=self.code,
            message=self.message,
        )


def parse_report_line(raw_line: str, *, line_number: int) -> ReportEntry:
    """Split one report line into its fields.

    Args:
        raw_line: Report line without its terminator.
        line_number: One-based position of the line inside the report, used
            for error reporting only.

    Returns:
        ReportEntry: Parsed fields with the path normalised.

    Raises:
        MalformedReportLineError: If the line has fewer than four fields, an
            empty path, severity or code, or a line number that is not a
            positive decimal integer.
    """

    fields = raw_line.split(FIELD_SEPARATOR)
    if len(fields) < MIN_FIELDS:
        raise MalformedReportLineError(
            f"expected at least {MIN_FIELDS} fields, found {len(fields)}",
            line_number=line_number,
            raw_line=raw_line,
        )
    raw_path, raw_number, *rest = fields
    path = normalize_report_path(raw_path.strip())
    if not path:
        raise MalformedReportLineError("empty file path", line_number=line_number, raw_line=raw_line)

    number_text = raw_number.strip()
    if not _LINE_NUMBER_RE.fullmatch(number_text):
        raise MalformedReportLineError(
            f"line number {raw_number!r} is not a decimal integer",
            line_number=line_number,
            raw_line=raw_line,
        )
    reported_line = int(number_text)
    if reported_line < 1:
        raise MalformedReportLineError(
            f"line number {reported_line} would normalise below zero",
            line_number=line_number,
            raw_line=raw_line,
        )

    message = FIELD_SEPARATOR.join(rest).strip()
    severity_text, code_text = (token.strip() for token in message.split(FIELD_SEPARATOR)[:2])
    if not severity_text or not code_text:
        raise MalformedReportLineError("missing severity or code", line_number=line_number, raw_line=raw_line)

    return ReportEntry(
        path=path,
        line_number=reported_line,
        severity=parse_severity(severity_text),
        code=code_text,
        message=message,
    )


class ReportParser:
    """Turn a checker report into :data:`FileFindings`."""

    def __init__(self, matcher: ExclusionMatcher | None = None) -> None:
        """Create a parser applying ``matcher`` on top of the ``tests/`` rule.

        Args:
            matcher: Exclusion patterns; ``None`` excludes nothing.
        """

        self._matcher = matcher if matcher is not None else ExclusionMatcher()

    @classmethod
    def for_workspace(cls, root: Path, *, ignore_file: str = IGNORE_FILE) -> ReportParser:
        """Build a parser using the ignore file found at ``root``.

        Args:
            root: Workspace root that may contain the ignore file.
            ignore_file: Name of the ignore file relative to ``root``.

        Returns:
            ReportParser: Parser bound to the workspace exclusion rules.
        """

        return cls(ExclusionMatcher.from_file(root / ignore_file))

    @property
    def matcher(self) -> ExclusionMatcher:
        """Return the exclusion matcher in use."""

        return self._matcher

    def parse(self, report_path: Path) -> FileFindings:
        """Parse the report stored at ``report_path``.

        Args:
            report_path: Location of the UTF-8 report file.

        Returns:
            FileFindings: Findings grouped per relative path; empty when the
            report file does not exist.

        Raises:
            OSError: If the report exists but cannot be read.
            UnicodeDecodeError: If the report is not valid UTF-8.
        """

        if not report_path.is_file():
            LOGGER.warning("%s", MissingReportError(report_path))
            return {}
        return self.parse_text(report_path.read_text(encoding="utf-8"))

    def parse_text(self, text: str) -> FileFindings:
        """Parse report content held in memory.

        Args:
            text: Full report text; LF and CRLF terminators are accepted.

        Returns:
            FileFindings: Findings grouped per relative path.
        """

        return self.parse_lines(text.splitlines())

    def parse_lines(self, lines: Iterable[str]) -> FileFindings:
        """Parse individual report lines.

        Args:
            lines: Report lines without terminators.

        Returns:
            FileFindings: Findings grouped per relative path, in report order.
        """

        findings: FileFindings = {}
        for index, raw_line in enumerate(lines, start=1):
            if not raw_line.strip():
                continue
            try:
                entry = parse_report_line(raw_line, line_number=index)
            except MalformedReportLineError as exc:
                LOGGER.error("Skipping malformed report line: %s", exc)
                continue
            if self.is_excluded(entry.path):
                continue
            findings.setdefault(entry.path, []).append(entry.to_finding())
        return findings

    def is_excluded(self, path: str) -> bool:
        """Return whether findings for ``path`` are dropped.

        Args:
            path: Normalised relative path.

        Returns:
            bool: ``True`` for test directories and ignore-file matches.
        """

        return is_test_path(path) or self._matcher.matches(path)


__all__ = [
    "FIELD_SEPARATOR",
    "MIN_FIELDS",
    "ReportEntry",
    "ReportParser",
    "parse_report_line",
]
