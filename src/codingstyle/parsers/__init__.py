# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Report parsing and exclusion rules."""

from __future__ import annotations

from .exclusions import ExclusionMatcher, clean_patterns, compile_pattern
from .report import ReportEntry, ReportParser, parse_report_line

__all__ = [
    "ExclusionMatcher",
    "ReportEntry",
    "ReportParser",
    "clean_patterns",
    "compile_pattern",
    "parse_report_line",
]
