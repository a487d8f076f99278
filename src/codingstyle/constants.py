# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared constants for the coding-style runner."""

from __future__ import annotations

from typing import Final

DOCKER_IMAGE: Final[str] = "ghcr.io/epitech/coding-style-checker:latest"
DOCKER_EXECUTABLE: Final[str] = "docker"
DOCKER_CACHE_KEY: Final[str] = "lastImagePull"
CACHE_DURATION_MS: Final[int] = 24 * 60 * 60 * 1000

DELIVERY_MOUNT_DIR: Final[str] = "/mnt/delivery"
REPORT_MOUNT_DIR: Final[str] = "/mnt/reports"
REPORT_DIR: Final[str] = ".vscode"
REPORT_FILE: Final[str] = "coding-style-reports.log"

DEBOUNCE_DELAY_MS: Final[int] = 500
CONTAINER_TIMEOUT_S: Final[float] = 600.0
PULL_TIMEOUT_S: Final[float] = 900.0
TIMEOUT_EXIT_CODE: Final[int] = 124

IGNORE_FILE: Final[str] = ".gitignore"
TESTS_DIR: Final[str] = "tests"

BANNED_EXTENSIONS: Final[tuple[str, ...]] = ("md",)
C_SOURCE_SUFFIXES: Final[frozenset[str]] = frozenset({".c", ".h", ".cpp", ".hpp"})

DIAGNOSTIC_SOURCE: Final[str] = "codingstyle"

__all__ = [
    "BANNED_EXTENSIONS",
    "CACHE_DURATION_MS",
    "CONTAINER_TIMEOUT_S",
    "C_SOURCE_SUFFIXES",
    "DEBOUNCE_DELAY_MS",
    "DELIVERY_MOUNT_DIR",
    "DIAGNOSTIC_SOURCE",
    "DOCKER_CACHE_KEY",
    "DOCKER_EXECUTABLE",
    "DOCKER_IMAGE",
    "IGNORE_FILE",
    "PULL_TIMEOUT_S",
    "REPORT_DIR",
    "REPORT_FILE",
    "REPORT_MOUNT_DIR",
    "TESTS_DIR",
    "TIMEOUT_EXIT_CODE",
]
