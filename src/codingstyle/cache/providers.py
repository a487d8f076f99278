# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Concrete state store implementations."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from threading import RLock

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..interfaces.cache import StateStore

LOGGER = logging.getLogger(__name__)


class StatePayload(BaseModel):
    """On-disk layout of :class:`JsonFileStateStore`."""

    model_config = ConfigDict(validate_assignment=True)

    entries: dict[str, int] = Field(default_factory=dict)


class InMemoryStateStore(StateStore):
    """Keep state in a dictionary for the lifetime of the process."""

    def __init__(self, initial: dict[str, int] | None = None) -> None:
        self._store: dict[str, int] = dict(initial or {})
        self._lock = RLock()

    def get(self, key: str) -> int | None:
        """Return the value stored for ``key``."""

        with self._lock:
            return self._store.get(key)

    def set(self, key: str, value: int) -> None:
        """Store ``value`` for ``key``."""

        with self._lock:
            self._store[key] = value

    def delete(self, key: str) -> None:
        """Remove the value stored for ``key``."""

        with self._lock:
            self._store.pop(key, None)


class JsonFileStateStore(StateStore):
    """Persist state as a single JSON document.

    A corrupt or unreadable document is treated as empty so a damaged state
    file only costs one extra image pull.
    """

    def __init__(self, path: Path) -> None:
        self._path = path
        self._lock = RLock()

    @property
    def path(self) -> Path:
        """Return the backing file location."""

        return self._path

    def get(self, key: str) -> int | None:
        """Return the value stored for ``key`` when the document holds one."""

        with self._lock:
            return self._read().entries.get(key)

    def set(self, key: str, value: int) -> None:
        """Persist ``value`` for ``key``.

        Raises:
            OSError: When the document cannot be written.
        """

        with self._lock:
            payload = self._read()
            payload.entries[key] = value
            self._write(payload)

    def delete(self, key: str) -> None:
        """Remove ``key`` from the document when present."""

        with self._lock:
            payload = self._read()
            if payload.entries.pop(key, None) is not None:
                self._write(payload)

    def _read(self) -> StatePayload:
        if not self._path.is_file():
            return StatePayload()
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
            return StatePayload.model_validate(raw)
        except (OSError, json.JSONDecodeError, ValidationError) as exc:
            LOGGER.warning("Ignoring unreadable state file %s: %s", self._path, exc)
            return StatePayload()

    def _write(self, payload: StatePayload) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(payload.model_dump(), indent=2), encoding="utf-8")


__all__ = ["InMemoryStateStore", "JsonFileStateStore", "StatePayload"]
