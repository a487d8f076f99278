# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Filesystem watcher turning change bursts into analysis triggers."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable
from concurrent.futures import Future
from pathlib import Path

from watchfiles import Change, DefaultFilter, watch

from .config.models import Settings
from .execution.coordinator import AnalysisCoordinator
from .filesystem.paths import is_within

LOGGER = logging.getLogger(__name__)

ResultCallback = Callable[[int], None]


class SourceChangeFilter(DefaultFilter):
    """Ignore editor noise, VCS folders and the checker's own report output."""

    def __init__(self, root: Path, settings: Settings) -> None:
        super().__init__()
        self._excluded = (
            settings.report_dir_for(root).resolve(),
            settings.resolved_state_file().resolve(),
        )

    def __call__(self, change: Change, path: str) -> bool:
        if not super().__call__(change, path):
            return False
        candidate = Path(path)
        return not any(is_within(candidate, excluded) for excluded in self._excluded)


class WorkspaceWatcher:
    """Feed change bursts under ``root`` to an :class:`AnalysisCoordinator`.

    Each burst dispatches a single trigger on a worker thread so that bursts
    arriving while an analysis runs reach the coordinator and are coalesced
    there.
    """

    def __init__(
        self,
        root: Path,
        settings: Settings,
        coordinator: AnalysisCoordinator,
        *,
        on_result: ResultCallback | None = None,
    ) -> None:
        self.root = root.resolve()
        self.settings = settings
        self.coordinator = coordinator
        self._on_result = on_result
        self._stop_event = threading.Event()
        self._workers: list[threading.Thread] = []

    @property
    def stop_event(self) -> threading.Event:
        return self._stop_event

    def stop(self) -> None:
        """Ask :meth:`run` to return after the current burst."""

        self._stop_event.set()

    def run(self) -> None:
        """Block, dispatching one trigger per change burst until stopped."""

        LOGGER.info("Watching %s for changes", self.root)
        for changes in watch(
            self.root,
            watch_filter=SourceChangeFilter(self.root, self.settings),
            debounce=max(self.settings.debounce_delay_ms, 1),
            stop_event=self._stop_event,
            raise_interrupt=False,
        ):
            self.dispatch(changes)
        self.join()

    def dispatch(self, changes: Iterable[tuple[Change, str]]) -> threading.Thread | None:
        """Start an analysis for the first changed path of a burst.

        Args:
            changes: ``(change, path)`` pairs reported by ``watchfiles``.

        Returns:
            threading.Thread | None: Worker running the analysis, or ``None``
            when the burst was empty.
        """

        paths = sorted(path for _change, path in changes)
        if not paths:
            return None
        LOGGER.info("Detected %d changed path(s)", len(paths))
        worker = threading.Thread(
            target=self.trigger,
            args=(Path(paths[0]),),
            name="codingstyle-analysis",
            daemon=True,
        )
        self._workers = [thread for thread in self._workers if thread.is_alive()]
        self._workers.append(worker)
        worker.start()
        return worker

    def trigger(self, path: Path) -> Future[int]:
        """Request an analysis for ``path`` and report its result when ready."""

        future = self.coordinator.run_analysis(path)
        if self._on_result is not None:
            callback = self._on_result
            future.add_done_callback(lambda done: callback(done.result()))
        return future

    def join(self, timeout: float | None = None) -> None:
        """Wait for dispatched workers to finish."""

        for worker in list(self._workers):
            worker.join(timeout)


__all__ = ["SourceChangeFilter", "WorkspaceWatcher"]
