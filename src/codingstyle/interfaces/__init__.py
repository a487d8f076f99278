# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Protocols describing the collaborators of the analysis pipeline."""

from __future__ import annotations

from .cache import StateStore
from .diagnostics import DiagnosticsSink, Notifier, TargetValidator
from .runtime import CommandRunner, ScheduledCall, Scheduler

__all__ = [
    "CommandRunner",
    "DiagnosticsSink",
    "Notifier",
    "ScheduledCall",
    "Scheduler",
    "StateStore",
    "TargetValidator",
]
