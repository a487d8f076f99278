# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models and loaders."""

from __future__ import annotations

from .loader import ConfigLoader, ConfigLoadResult, load_settings
from .models import ConfigError, Settings

__all__ = ["ConfigError", "ConfigLoadResult", "ConfigLoader", "Settings", "load_settings"]
