# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Core models, severities and process helpers."""

from __future__ import annotations

from .models import FileFindings, Finding, count_findings
from .severity import (
    DiagnosticLevel,
    Severity,
    SeverityLabel,
    UnrecognizedSeverity,
    parse_severity,
    severity_to_level,
)

__all__ = [
    "DiagnosticLevel",
    "FileFindings",
    "Finding",
    "Severity",
    "SeverityLabel",
    "UnrecognizedSeverity",
    "count_findings",
    "parse_severity",
    "severity_to_level",
]
