# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the image freshness state stores."""

from __future__ import annotations

import json
from pathlib import Path

from codingstyle.cache.providers import InMemoryStateStore, JsonFileStateStore
from codingstyle.interfaces.cache import StateStore


def test_in_memory_store_roundtrip() -> None:
    store = InMemoryStateStore({"a": 1})

    assert isinstance(store, StateStore)
    assert store.get("a") == 1
    store.set("b", 2)
    store.delete("a")
    assert store.get("a") is None
    assert store.get("b") == 2


def test_json_store_persists_between_instances(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "state.json"
    JsonFileStateStore(path).set("lastImagePull", 123)

    reopened = JsonFileStateStore(path)

    assert reopened.get("lastImagePull") == 123
    assert json.loads(path.read_text(encoding="utf-8")) == {"entries": {"lastImagePull": 123}}


def test_json_store_delete(tmp_path: Path) -> None:
    store = JsonFileStateStore(tmp_path / "state.json")
    store.set("k", 1)

    store.delete("k")
    store.delete("missing")

    assert store.get("k") is None


def test_json_store_treats_corrupt_file_as_empty(tmp_path: Path) -> None:
    path = tmp_path / "state.json"
    path.write_text("{not json", encoding="utf-8")
    store = JsonFileStateStore(path)

    assert store.get("k") is None
    store.set("k", 5)
    assert store.get("k") == 5
