# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Diagnostics presentation helpers."""

from __future__ import annotations

from .console import render_diagnostics, status_text
from .descriptions import ERROR_DESCRIPTIONS, describe, format_message
from .diagnostics import Diagnostic, DiagnosticCollection

__all__ = [
    "ERROR_DESCRIPTIONS",
    "Diagnostic",
    "DiagnosticCollection",
    "describe",
    "format_message",
    "render_diagnostics",
    "status_text",
]
