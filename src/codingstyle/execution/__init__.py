# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Container execution and analysis scheduling."""

from __future__ import annotations

from .coordinator import AnalysisCoordinator
from .scheduler import ThreadingScheduler
from .tool_runner import DockerCommands, ToolRunner

__all__ = ["AnalysisCoordinator", "DockerCommands", "ThreadingScheduler", "ToolRunner"]
