# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Filesystem utilities for path handling."""

from __future__ import annotations

from .paths import is_test_path, is_within, normalize_report_path, resolve_in_root

__all__ = [
    "is_test_path",
    "is_within",
    "normalize_report_path",
    "resolve_in_root",
]
