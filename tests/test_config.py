# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for settings validation and layered configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from codingstyle.config.loader import ConfigLoader, load_settings
from codingstyle.config.models import ConfigError, Settings
from codingstyle.constants import CACHE_DURATION_MS, DEBOUNCE_DELAY_MS, DOCKER_IMAGE


def test_defaults() -> None:
    settings = Settings()

    assert settings.enabled is True
    assert settings.debounce_delay_ms == DEBOUNCE_DELAY_MS
    assert settings.cache_duration_ms == CACHE_DURATION_MS
    assert settings.image == DOCKER_IMAGE
    assert settings.banned_extensions == ["md"]
    assert settings.debounce_delay_s == 0.5


def test_report_paths_are_relative_to_root(tmp_path: Path) -> None:
    settings = Settings()

    assert settings.report_path_for(tmp_path) == tmp_path / ".vscode" / "coding-style-reports.log"
    settings.report_dir = tmp_path / "abs"
    assert settings.report_dir_for(Path("/elsewhere")) == tmp_path / "abs"


def test_validation_rejects_bad_values() -> None:
    with pytest.raises(ValidationError):
        Settings(debounce_delay_ms=-1)
    with pytest.raises(ValidationError):
        Settings(image="  ")
    with pytest.raises(ValidationError):
        Settings(unknown_option=True)


def test_assignment_is_validated() -> None:
    settings = Settings()

    with pytest.raises(ValidationError):
        settings.cache_duration_ms = -5


def test_banned_extensions_are_normalised() -> None:
    assert Settings(banned_extensions=[".MD", " txt ", ""]).banned_extensions == ["md", "txt"]


def test_missing_files_yield_defaults(tmp_path: Path) -> None:
    result = ConfigLoader.for_root(tmp_path).load_with_sources()

    assert result.settings == Settings()
    assert result.sources == []


def test_precedence_pyproject_then_project_file_then_explicit(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text(
        "[tool.codingstyle]\ndebounce_delay_ms = 100\nenabled = false\nimage = 'a'\n",
        encoding="utf-8",
    )
    (tmp_path / ".codingstyle.toml").write_text("debounce_delay_ms = 200\nimage = 'b'\n", encoding="utf-8")
    explicit = tmp_path / "override.toml"
    explicit.write_text("image = 'c'\n", encoding="utf-8")

    result = ConfigLoader.for_root(tmp_path, config_file=explicit).load_with_sources()

    assert result.settings.enabled is False
    assert result.settings.debounce_delay_ms == 200
    assert result.settings.image == "c"
    assert len(result.sources) == 3


def test_pyproject_without_section_is_ignored(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text("[project]\nname = 'x'\n", encoding="utf-8")

    assert load_settings(tmp_path) == Settings()


def test_invalid_toml_raises_config_error(tmp_path: Path) -> None:
    (tmp_path / ".codingstyle.toml").write_text("enabled = [", encoding="utf-8")

    with pytest.raises(ConfigError, match="Invalid TOML"):
        load_settings(tmp_path)


def test_invalid_values_raise_config_error(tmp_path: Path) -> None:
    (tmp_path / ".codingstyle.toml").write_text("cache_duration_ms = -1\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="Invalid configuration"):
        load_settings(tmp_path)


def test_missing_explicit_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="not found"):
        ConfigLoader.for_root(tmp_path, config_file=tmp_path / "absent.toml")
