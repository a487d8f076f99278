# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Persistence helpers for the image freshness record."""

from __future__ import annotations

from .providers import InMemoryStateStore, JsonFileStateStore, StatePayload

__all__ = ["InMemoryStateStore", "JsonFileStateStore", "StatePayload"]
