# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Single-flight analysis scheduling per workspace root.

At most one pipeline (container run, report parse, publication) executes for a
given root at a time. Triggers arriving while a run is in flight collapse into
a single pending follow-up whose debounce timer is restarted by every new
trigger. When the in-flight run finishes, the follow-up starts right away if
its quiet period has already elapsed; otherwise the timer starts it.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable
from concurrent.futures import Future
from dataclasses import dataclass, field
from functools import partial
from pathlib import Path

from ..config.models import Settings
from ..core.models import FileFindings, count_findings
from ..errors import InvalidTargetError
from ..filesystem.paths import resolve_in_root
from ..interfaces.diagnostics import DiagnosticsSink, Notifier, TargetValidator
from ..interfaces.runtime import ScheduledCall, Scheduler
from ..parsers.report import ReportParser
from .tool_runner import ToolRunner

LOGGER = logging.getLogger(__name__)

ParserFactory = Callable[[Path], ReportParser]
FAILURE_PREFIX = "Failed to analyze workspace"


def resolved(value: int) -> Future[int]:
    """Return a future already completed with ``value``."""

    future: Future[int] = Future()
    future.set_result(value)
    return future


@dataclass(slots=True)
class PendingTrigger:
    """Coalesced follow-up request shared by every trigger it absorbed."""

    trigger: Path
    future: Future[int] = field(default_factory=Future)
    timer: ScheduledCall | None = None
    ready: bool = False
    generation: int = 0

    def cancel_timer(self) -> None:
        if self.timer is not None:
            self.timer.cancel()
            self.timer = None


@dataclass(slots=True)
class AnalysisRun:
    """Transient scheduling state for one workspace root."""

    target: Path
    in_flight: bool = False
    pending: PendingTrigger | None = None


def _settle(futures: Iterable[Future[int]], value: int) -> None:
    for future in futures:
        if not future.done():
            future.set_result(value)


class AnalysisCoordinator:
    """Serialize analyses per target and publish their findings."""

    def __init__(
        self,
        settings: Settings,
        tool_runner: ToolRunner,
        sink: DiagnosticsSink,
        notifier: Notifier,
        validator: TargetValidator,
        scheduler: Scheduler,
        *,
        parser_factory: ParserFactory | None = None,
    ) -> None:
        """Wire the coordinator to its collaborators.

        Args:
            settings: Enablement flag and debounce interval.
            tool_runner: Runner producing a fresh report for a root.
            sink: Receiver of per-file findings.
            notifier: Surface for one error message per failed run.
            validator: Maps a trigger to its workspace root.
            scheduler: Delayed-call facility driving the debounce timers.
            parser_factory: Builds the report parser for a root; defaults to
                one honouring the root's ignore file.
        """

        self._settings = settings
        self._tool_runner = tool_runner
        self._sink = sink
        self._notifier = notifier
        self._validator = validator
        self._scheduler = scheduler
        self._parser_factory = parser_factory or self._default_parser
        self._lock = threading.Lock()
        self._runs: dict[Path, AnalysisRun] = {}
        self._published: dict[Path, set[Path]] = {}
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    def is_running(self, target: Path) -> bool:
        """Return whether a pipeline is currently executing for ``target``."""

        with self._lock:
            run = self._runs.get(target)
            return run is not None and run.in_flight

    def run_analysis(self, trigger: Path) -> Future[int]:
        """Analyze the workspace owning ``trigger``.

        When the workspace is idle the pipeline runs in the calling thread and
        the returned future is already resolved. When a run is in flight the
        request is coalesced and the future resolves once the follow-up run
        completes.

        Args:
            trigger: File or directory that prompted the analysis.

        Returns:
            Future[int]: Total number of findings published by the run that
            serves this trigger; ``0`` when the coordinator is disabled or
            disposed, the trigger is ineligible, or the run failed.
        """

        if self._disposed or not self._settings.enabled:
            LOGGER.debug("Analysis skipped for %s: coordinator inactive", trigger)
            return resolved(0)
        try:
            target = self._validator.resolve_target(trigger)
        except InvalidTargetError as exc:
            LOGGER.debug("Analysis skipped for %s: %s", trigger, exc)
            return resolved(0)

        future: Future[int] = Future()
        waiting = [future]
        with self._lock:
            if self._disposed:
                return resolved(0)
            run = self._runs.get(target)
            if run is None:
                run = AnalysisRun(target=target)
                self._runs[target] = run
            elif run.in_flight:
                return self._coalesce(run, trigger)
            elif run.pending is not None:
                stale = run.pending
                run.pending = None
                stale.cancel_timer()
                waiting.append(stale.future)
            run.in_flight = True
        self._drive(run, trigger, waiting)
        return future

    def clear_all(self) -> None:
        """Remove every published diagnostic."""

        with self._lock:
            self._published.clear()
        self._sink.clear()

    def dispose(self) -> None:
        """Cancel pending follow-ups and release the diagnostics sink."""

        with self._lock:
            if self._disposed:
                return
            self._disposed = True
            abandoned: list[Future[int]] = []
            for run in self._runs.values():
                if run.pending is not None:
                    run.pending.cancel_timer()
                    abandoned.append(run.pending.future)
                    run.pending = None
            self._runs = {target: run for target, run in self._runs.items() if run.in_flight}
        _settle(abandoned, 0)
        self._sink.dispose()

    def _coalesce(self, run: AnalysisRun, trigger: Path) -> Future[int]:
        pending = run.pending
        if pending is None:
            pending = PendingTrigger(trigger=trigger)
            run.pending = pending
            LOGGER.debug("Analysis of %s in progress; queueing follow-up", run.target)
        else:
            pending.trigger = trigger
        self._arm(run, pending, self._settings.debounce_delay_s)
        return pending.future

    def _arm(self, run: AnalysisRun, pending: PendingTrigger, delay: float) -> None:
        """(Re)start the quiet-period timer; callbacks of earlier timers become no-ops.

        Must be called with ``self._lock`` held.
        """

        pending.cancel_timer()
        pending.generation += 1
        pending.ready = False
        pending.timer = self._scheduler.call_later(
            delay,
            partial(self._on_quiet, run.target, pending, pending.generation),
        )

    def _on_quiet(self, target: Path, pending: PendingTrigger, generation: int) -> None:
        with self._lock:
            run = self._runs.get(target)
            if self._disposed or run is None or run.pending is not pending:
                return
            if pending.generation != generation:
                return
            pending.timer = None
            if run.in_flight:
                pending.ready = True
                return
            run.pending = None
            run.in_flight = True
        self._drive(run, pending.trigger, [pending.future])

    def _drive(self, run: AnalysisRun, trigger: Path, waiting: list[Future[int]]) -> None:
        try:
            while True:
                try:
                    total = self._execute(run.target, trigger)
                except Exception:  # noqa: BLE001
                    LOGGER.exception("Analysis of %s aborted", run.target)
                    total = 0
                _settle(waiting, total)
                with self._lock:
                    pending = run.pending
                    if pending is None or not pending.ready or self._disposed:
                        return
                    run.pending = None
                    trigger = pending.trigger
                    waiting = [pending.future]
        finally:
            _settle(waiting, 0)
            with self._lock:
                self._release(run)

    def _release(self, run: AnalysisRun) -> None:
        """Return ``run`` to idle. Must be called with ``self._lock`` held."""

        run.in_flight = False
        pending = run.pending
        if pending is None:
            if self._runs.get(run.target) is run:
                del self._runs[run.target]
        elif pending.ready and not self._disposed:
            self._arm(run, pending, 0)

    def _execute(self, target: Path, trigger: Path) -> int:
        try:
            self._clear_target(target, trigger)
            report_path = self._tool_runner.run(target, self._settings.report_dir_for(target))
            findings = self._parser_factory(target).parse(report_path)
            self._publish(target, findings)
        except Exception as exc:  # noqa: BLE001 - every pipeline failure becomes one notification
            LOGGER.exception("Analysis of %s failed", target)
            self._notifier.error(f"{FAILURE_PREFIX}\n{exc}")
            return 0
        total = count_findings(findings)
        LOGGER.info("Analysis of %s found %d issue(s) in %d file(s)", target, total, len(findings))
        return total

    def _clear_target(self, target: Path, trigger: Path) -> None:
        with self._lock:
            previous = self._published.pop(target, set())
        if trigger.is_file():
            previous.add(trigger.resolve())
        for path in sorted(previous):
            self._sink.update(path, [])

    def _publish(self, target: Path, findings: FileFindings) -> None:
        for relative, entries in findings.items():
            absolute = resolve_in_root(target, relative)
            with self._lock:
                self._published.setdefault(target, set()).add(absolute)
            self._sink.update(absolute, entries)

    def _default_parser(self, target: Path) -> ReportParser:
        return ReportParser.for_workspace(target, ignore_file=self._settings.ignore_file)


__all__ = ["AnalysisCoordinator", "AnalysisRun", "PendingTrigger", "resolved"]
