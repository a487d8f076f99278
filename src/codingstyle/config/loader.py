# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Layered configuration loading (defaults, pyproject, TOML)."""

from __future__ import annotations

import tomllib
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .models import ConfigError, Settings

PYPROJECT_FILE: Final[str] = "pyproject.toml"
PROJECT_CONFIG_FILE: Final[str] = ".codingstyle.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "codingstyle"


class TomlConfigSource:
    """Load settings from a standalone TOML document."""

    def __init__(self, path: Path, *, name: str | None = None) -> None:
        self.path = path
        self.name = name or str(path)

    def load(self) -> Mapping[str, Any]:
        """Return the document as a mapping; a missing file yields ``{}``.

        Raises:
            ConfigError: If the document is not valid TOML.
        """

        if not self.path.is_file():
            return {}
        try:
            with self.path.open("rb") as handle:
                return tomllib.load(handle)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"Invalid TOML in {self.path}: {exc}") from exc

    def describe(self) -> str:
        return f"TOML configuration at {self.name}"


class PyProjectConfigSource(TomlConfigSource):
    """Read settings from ``[tool.codingstyle]`` within ``pyproject.toml``."""

    def load(self) -> Mapping[str, Any]:
        data = super().load()
        tool_section = data.get(PYPROJECT_TOOL_KEY)
        if not isinstance(tool_section, Mapping):
            return {}
        section = tool_section.get(PYPROJECT_SECTION_KEY)
        if not isinstance(section, Mapping):
            return {}
        return dict(section)

    def describe(self) -> str:
        return f"pyproject.toml ({self.name})"


class ConfigLoadResult(BaseModel):
    """Resolved settings plus the sources that contributed to them."""

    model_config = ConfigDict(validate_assignment=True)

    settings: Settings
    sources: list[str] = Field(default_factory=list)


class ConfigLoader:
    """Merge configuration sources in order; later sources win."""

    def __init__(self, sources: Sequence[TomlConfigSource]) -> None:
        self._sources = list(sources)

    @classmethod
    def for_root(cls, project_root: Path, *, config_file: Path | None = None) -> ConfigLoader:
        """Build a loader honouring pyproject, project file and explicit overrides.

        Args:
            project_root: Workspace root used to discover configuration files.
            config_file: Optional explicit TOML file applied last.

        Returns:
            ConfigLoader: Loader with the default precedence ordering.
        """

        sources: list[TomlConfigSource] = [
            PyProjectConfigSource(project_root / PYPROJECT_FILE),
            TomlConfigSource(project_root / PROJECT_CONFIG_FILE),
        ]
        if config_file is not None:
            if not config_file.is_file():
                raise ConfigError(f"Configuration file not found: {config_file}")
            sources.append(TomlConfigSource(config_file))
        return cls(sources)

    def load_with_sources(self) -> ConfigLoadResult:
        """Resolve settings and record which sources contributed.

        Returns:
            ConfigLoadResult: Validated settings and contributing source names.

        Raises:
            ConfigError: If a source is unreadable or the merged data is invalid.
        """

        merged: dict[str, Any] = {}
        contributing: list[str] = []
        for source in self._sources:
            fragment = source.load()
            if not fragment:
                continue
            merged.update(fragment)
            contributing.append(source.describe())
        try:
            settings = Settings.model_validate(merged)
        except ValidationError as exc:
            raise ConfigError(f"Invalid configuration: {exc}") from exc
        return ConfigLoadResult(settings=settings, sources=contributing)

    def load(self) -> Settings:
        """Return the merged settings.

        Returns:
            Settings: Validated settings.
        """

        return self.load_with_sources().settings


def load_settings(project_root: Path, *, config_file: Path | None = None) -> Settings:
    """Load settings for ``project_root`` with default precedence.

    Args:
        project_root: Workspace root used to discover configuration files.
        config_file: Optional explicit TOML file applied last.

    Returns:
        Settings: Validated settings.
    """

    return ConfigLoader.for_root(project_root, config_file=config_file).load()


__all__ = [
    "PROJECT_CONFIG_FILE",
    "ConfigLoadResult",
    "ConfigLoader",
    "PyProjectConfigSource",
    "TomlConfigSource",
    "load_settings",
]
