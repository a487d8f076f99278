# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Lifecycle of the containerized coding-style checker.

The runner refreshes the checker image at most once per freshness window,
prunes dangling images after a successful pull, and runs the container with
the workspace and the report directory bind-mounted at fixed locations.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path
from subprocess import CompletedProcess

from ..config.models import Settings
from ..constants import DELIVERY_MOUNT_DIR, DOCKER_CACHE_KEY, REPORT_MOUNT_DIR, TIMEOUT_EXIT_CODE
from ..core.process import CommandOptions, run_command
from ..errors import ImagePullError, ToolExecutionError
from ..interfaces.cache import StateStore
from ..interfaces.runtime import CommandRunner

LOGGER = logging.getLogger(__name__)

Clock = Callable[[], int]


def wall_clock_ms() -> int:
    """Return the current wall-clock time in milliseconds since the epoch."""

    return time.time_ns() // 1_000_000


@dataclass(frozen=True, slots=True)
class DockerCommands:
    """Build the argument lists for every docker invocation."""

    executable: str
    image: str

    def pull(self) -> list[str]:
        return [self.executable, "pull", self.image]

    def prune(self) -> list[str]:
        return [self.executable, "image", "prune", "-f"]

    def run(self, target_dir: Path, report_dir: Path) -> list[str]:
        """Return the container invocation for ``target_dir``.

        Args:
            target_dir: Absolute host path of the sources.
            report_dir: Absolute host path receiving the report.

        Returns:
            list[str]: Arguments mounting both directories and passing the
            in-container paths to the checker entry point.
        """

        return [
            self.executable,
            "run",
            "--rm",
            "-i",
            "-v",
            f"{target_dir}:{DELIVERY_MOUNT_DIR}",
            "-v",
            f"{report_dir}:{REPORT_MOUNT_DIR}",
            self.image,
            DELIVERY_MOUNT_DIR,
            REPORT_MOUNT_DIR,
        ]


def _log_stream(label: str, text: str | None) -> None:
    for line in (text or "").splitlines():
        if line.strip():
            LOGGER.debug("%s: %s", label, line.rstrip())


class ToolRunner:
    """Produce a fresh report by running the checker container."""

    def __init__(
        self,
        settings: Settings,
        store: StateStore,
        *,
        runner: CommandRunner = run_command,
        clock: Clock = wall_clock_ms,
        cache_key: str = DOCKER_CACHE_KEY,
    ) -> None:
        """Create a runner bound to ``settings`` and the freshness ``store``.

        Args:
            settings: Image reference, timeouts and report layout.
            store: Durable store holding the last successful pull timestamp.
            runner: Process execution facility.
            clock: Source of the current time in milliseconds.
            cache_key: Key of the freshness record inside ``store``.
        """

        self._settings = settings
        self._store = store
        self._runner = runner
        self._clock = clock
        self._cache_key = cache_key
        self._commands = DockerCommands(executable=settings.docker_executable, image=settings.image)

    @property
    def commands(self) -> DockerCommands:
        return self._commands

    def ensure_image(
        self,
        cache_key: str | None = None,
        now_ms: int | None = None,
        cache_duration_ms: int | None = None,
    ) -> None:
        """Pull the checker image unless the last pull is still fresh.

        Args:
            cache_key: Freshness record key; defaults to the runner's key.
            now_ms: Current time in milliseconds; defaults to the clock.
            cache_duration_ms: Freshness window; defaults to the settings.

        Raises:
            ImagePullError: If the pull command fails or cannot be spawned.
        """

        key = cache_key or self._cache_key
        now = self._clock() if now_ms is None else now_ms
        window = self._settings.cache_duration_ms if cache_duration_ms is None else cache_duration_ms
        last_pull = self._store.get(key) or 0
        if now - last_pull < window:
            LOGGER.info("Using cached checker image %s", self._settings.image)
            return

        LOGGER.info("Pulling checker image %s", self._settings.image)
        completed = self._execute_pull()
        _log_stream("pull stdout", completed.stdout)
        _log_stream("pull stderr", completed.stderr)
        if completed.returncode != 0:
            raise ImagePullError(
                "Failed to pull image",
                stderr=completed.stderr or "",
                exit_code=completed.returncode,
            )
        self._store.set(key, now)
        self._prune_images()

    def run(self, target_dir: Path, report_dir: Path | None = None) -> Path:
        """Run the checker against ``target_dir`` and return the report path.

        A failed image refresh is logged and the locally cached image is used.

        Args:
            target_dir: Workspace root to analyze.
            report_dir: Host directory receiving the report; defaults to the
                configured directory under ``target_dir``.

        Returns:
            Path: Location the checker writes its report to.

        Raises:
            ToolExecutionError: If the container cannot be spawned, times out
                or exits with a non-zero status.
        """

        target = target_dir.resolve()
        reports = (report_dir or self._settings.report_dir_for(target)).resolve()
        if not reports.is_dir():
            LOGGER.info("Creating report directory %s", reports)
            reports.mkdir(parents=True, exist_ok=True)
        report_path = reports / self._settings.report_file
        if report_path.exists():
            report_path.unlink()

        try:
            self.ensure_image()
        except (ImagePullError, OSError) as exc:
            LOGGER.warning("Using cached image after pull failure: %s", exc)

        args = self._commands.run(target, reports)
        LOGGER.info("Running checker container on %s", target)
        LOGGER.debug("Container arguments: %s", args)
        completed = self._execute(args, timeout=self._settings.container_timeout_s, failure=ToolExecutionError)
        _log_stream("container stdout", completed.stdout)
        _log_stream("container stderr", completed.stderr)
        if completed.returncode != 0:
            reason = (
                "Container execution timed out"
                if completed.returncode == TIMEOUT_EXIT_CODE
                else "Container execution failed"
            )
            raise ToolExecutionError(reason, stderr=completed.stderr or "", exit_code=completed.returncode)
        return report_path

    def forget_image(self) -> None:
        """Drop the freshness record so the next run pulls again."""

        self._store.delete(self._cache_key)

    def _execute_pull(self) -> CompletedProcess[str]:
        return self._execute(self._commands.pull(), timeout=self._settings.pull_timeout_s, failure=ImagePullError)

    def _execute(
        self,
        args: Sequence[str],
        *,
        timeout: float | None,
        failure: type[ToolExecutionError] | type[ImagePullError],
    ) -> CompletedProcess[str]:
        try:
            return self._runner(args, CommandOptions(timeout=timeout))
        except OSError as exc:
            raise failure(f"Failed to execute {args[0]}: {exc}") from exc

    def _prune_images(self) -> None:
        LOGGER.info("Pruning unused images")
        try:
            completed = self._runner(self._commands.prune(), CommandOptions(timeout=self._settings.pull_timeout_s))
        except OSError as exc:
            LOGGER.warning("Prune failed: %s", exc)
            return
        if completed.returncode != 0:
            LOGGER.warning("Prune failed with status %s: %s", completed.returncode, (completed.stderr or "").strip())
            return
        if completed.stderr and completed.stderr.strip():
            LOGGER.warning("Prune warnings: %s", completed.stderr.strip())
        else:
            LOGGER.info("Prune successful")


__all__ = ["Clock", "DockerCommands", "ToolRunner", "wall_clock_ms"]
