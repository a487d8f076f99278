# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception taxonomy for the analysis pipeline."""

from __future__ import annotations

from pathlib import Path


class CodingStyleError(Exception):
    """Base class for every error raised by the codingstyle pipeline."""


class ToolExecutionError(CodingStyleError):
    """Raised when the checker container exits non-zero or cannot be spawned."""

    def __init__(self, message: str, *, stderr: str = "", exit_code: int | None = None) -> None:
        """Initialise the error with the captured process metadata.

        Args:
            message: Human-readable summary of the failure.
            stderr: Standard error text captured from the container.
            exit_code: Exit status, or ``None`` when the process never started.
        """

        detail = f"{message}: {stderr.strip()}" if stderr.strip() else message
        super().__init__(detail)
        self.stderr = stderr
        self.exit_code = exit_code


class ImagePullError(CodingStyleError):
    """Raised when pulling the checker image fails."""

    def __init__(self, message: str, *, stderr: str = "", exit_code: int | None = None) -> None:
        detail = f"{message}: {stderr.strip()}" if stderr.strip() else message
        super().__init__(detail)
        self.stderr = stderr
        self.exit_code = exit_code


class MalformedReportLineError(CodingStyleError):
    """Raised when a report line does not follow the colon-delimited grammar."""

    def __init__(self, reason: str, *, line_number: int, raw_line: str) -> None:
        """Initialise the error with the offending report line.

        Args:
            reason: Description of the structural problem.
            line_number: One-based position of the line inside the report.
            raw_line: Report line exactly as read.
        """

        super().__init__(f"report line {line_number}: {reason}: {raw_line!r}")
        self.reason = reason
        self.line_number = line_number
        self.raw_line = raw_line


class MissingReportError(CodingStyleError):
    """Raised when the checker left no report file behind."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"report file not found: {path}")
        self.path = path


class InvalidTargetError(CodingStyleError):
    """Raised when a trigger does not designate an analyzable target."""


__all__ = [
    "CodingStyleError",
    "ImagePullError",
    "InvalidTargetError",
    "MalformedReportLineError",
    "MissingReportError",
    "ToolExecutionError",
]
