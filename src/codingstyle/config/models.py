# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models for the coding-style runner."""

from __future__ import annotations

from pathlib import Path
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..constants import (
    BANNED_EXTENSIONS,
    CACHE_DURATION_MS,
    CONTAINER_TIMEOUT_S,
    DEBOUNCE_DELAY_MS,
    DOCKER_EXECUTABLE,
    DOCKER_IMAGE,
    IGNORE_FILE,
    PULL_TIMEOUT_S,
    REPORT_DIR,
    REPORT_FILE,
)

DEFAULT_STATE_FILE: Final[Path] = Path("~/.cache/codingstyle/state.json")


class ConfigError(Exception):
    """Raised when configuration input is invalid."""


class Settings(BaseModel):
    """Recognised runner options.

    ``enabled``, ``debounce_delay_ms`` and ``cache_duration_ms`` drive the
    coordinator and the image freshness window; the remaining fields describe
    how the checker container is invoked.
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    enabled: bool = True
    debounce_delay_ms: int = Field(default=DEBOUNCE_DELAY_MS, ge=0)
    cache_duration_ms: int = Field(default=CACHE_DURATION_MS, ge=0)
    image: str = DOCKER_IMAGE
    docker_executable: str = DOCKER_EXECUTABLE
    report_dir: Path = Field(default_factory=lambda: Path(REPORT_DIR))
    report_file: str = REPORT_FILE
    container_timeout_s: float | None = Field(default=CONTAINER_TIMEOUT_S, gt=0)
    pull_timeout_s: float | None = Field(default=PULL_TIMEOUT_S, gt=0)
    state_file: Path = Field(default_factory=lambda: DEFAULT_STATE_FILE)
    banned_extensions: list[str] = Field(default_factory=lambda: list(BANNED_EXTENSIONS))
    ignore_file: str = IGNORE_FILE
    require_c_sources: bool = False

    @field_validator("image", "docker_executable", "report_file", "ignore_file")
    @classmethod
    def _reject_blank(cls, value: str) -> str:
        """Refuse empty strings for required textual options.

        Args:
            value: Candidate option value.

        Returns:
            str: The stripped value.

        Raises:
            ValueError: If ``value`` is blank.
        """

        stripped = value.strip()
        if not stripped:
            raise ValueError("value must not be blank")
        return stripped

    @field_validator("banned_extensions")
    @classmethod
    def _normalise_extensions(cls, value: list[str]) -> list[str]:
        """Store extensions lower-cased and without a leading dot.

        Args:
            value: Extensions as written by the user.

        Returns:
            list[str]: Normalised extensions.
        """

        return [entry.strip().lstrip(".").lower() for entry in value if entry.strip()]

    @property
    def debounce_delay_s(self) -> float:
        """Return the coalescing window in seconds."""

        return self.debounce_delay_ms / 1000

    def report_dir_for(self, root: Path) -> Path:
        """Return the host directory receiving reports for ``root``.

        Args:
            root: Workspace root being analyzed.

        Returns:
            Path: Absolute report directory.
        """

        return self.report_dir if self.report_dir.is_absolute() else root / self.report_dir

    def report_path_for(self, root: Path) -> Path:
        """Return the report file location for ``root``.

        Args:
            root: Workspace root being analyzed.

        Returns:
            Path: Absolute path of the report the checker writes.
        """

        return self.report_dir_for(root) / self.report_file

    def resolved_state_file(self) -> Path:
        """Return :attr:`state_file` with ``~`` expanded."""

        return self.state_file.expanduser()


__all__ = ["DEFAULT_STATE_FILE", "ConfigError", "Settings"]
