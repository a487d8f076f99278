# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path
from subprocess import CompletedProcess

import pytest

from codingstyle.cache.providers import InMemoryStateStore
from codingstyle.config.models import Settings
from codingstyle.core.models import Finding
from codingstyle.core.process import CommandOptions
from codingstyle.execution.tool_runner import ToolRunner
from codingstyle.reporting.diagnostics import DiagnosticCollection

NOW_MS = 1_700_000_000_000


class FakeCommandRunner:
    """Record docker invocations and answer them from canned outcomes.

    Outcomes are keyed by the docker verb (``pull``, ``image``, ``run``). A
    ``run`` invocation writes ``report_text`` into the mounted report
    directory before ``on_run`` is called.
    """

    def __init__(
        self,
        *,
        report_text: str | None = None,
        report_file: str = "coding-style-reports.log",
    ) -> None:
        self.outcomes: dict[str, CompletedProcess[str] | Exception] = {}
        self.report_text = report_text
        self.report_file = report_file
        self.on_run: Callable[[list[str]], None] | None = None
        self.calls: list[list[str]] = []
        self.options: list[CommandOptions | None] = []

    def __call__(self, args: Sequence[str], options: CommandOptions | None = None) -> CompletedProcess[str]:
        argv = list(args)
        self.calls.append(argv)
        self.options.append(options)
        verb = argv[1]
        outcome = self.outcomes.get(verb)
        if isinstance(outcome, Exception):
            raise outcome
        if verb == "run":
            if self.report_text is not None and (outcome is None or outcome.returncode == 0):
                (report_dir_of(argv) / self.report_file).write_text(self.report_text, encoding="utf-8")
            if self.on_run is not None:
                self.on_run(argv)
        if outcome is None:
            return CompletedProcess(argv, 0, "", "")
        return CompletedProcess(argv, outcome.returncode, outcome.stdout, outcome.stderr)

    def fail(self, verb: str, returncode: int = 1, stderr: str = "boom") -> None:
        self.outcomes[verb] = CompletedProcess([], returncode, "", stderr)

    def verbs(self) -> list[str]:
        return [call[1] for call in self.calls]


def report_dir_of(argv: Sequence[str]) -> Path:
    """Return the host report directory mounted by a ``docker run`` call."""

    mounts = [argv[index + 1] for index, value in enumerate(argv) if value == "-v"]
    return Path(mounts[1].rsplit(":", 1)[0])


class ManualCall:
    def __init__(self, delay: float, callback: Callable[[], None]) -> None:
        self.delay = delay
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Scheduler whose timers only fire when the test says so."""

    def __init__(self) -> None:
        self.calls: list[ManualCall] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> ManualCall:
        call = ManualCall(delay, callback)
        self.calls.append(call)
        return call

    def pending(self) -> list[ManualCall]:
        return [call for call in self.calls if not call.cancelled and not call.fired]

    def fire_all(self) -> None:
        for call in self.pending():
            call.fired = True
            call.callback()


class RecordingNotifier:
    def __init__(self) -> None:
        self.messages: list[str] = []

    def error(self, message: str) -> None:
        self.messages.append(message)


class RecordingSink(DiagnosticCollection):
    """Diagnostic collection that also keeps an ordered event log."""

    def __init__(self) -> None:
        super().__init__()
        self.events: list[tuple[str, Path | None, int]] = []

    def update(self, path: Path, findings: Sequence[Finding]) -> None:
        self.events.append(("update", path, len(findings)))
        super().update(path, findings)

    def clear(self) -> None:
        self.events.append(("clear", None, 0))
        super().clear()

    def dispose(self) -> None:
        self.events.append(("dispose", None, 0))
        super().dispose()


SAMPLE_REPORT = (
    "./src/main.c:12:MAJOR:C-F3:Line exceeds 80 columns\n"
    "tests/unit.c:5:MINOR:C-L2:bad indent\n"
    "./src/main.c:40:MINOR:C-G7:trailing space\n"
)


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    root = (tmp_path / "project").resolve()
    (root / "src").mkdir(parents=True)
    (root / "src" / "main.c").write_text("int main(void) { return 0; }\n", encoding="utf-8")
    return root


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(state_file=tmp_path / "state" / "state.json", debounce_delay_ms=500)


@pytest.fixture
def fake_runner() -> FakeCommandRunner:
    return FakeCommandRunner(report_text=SAMPLE_REPORT)


@pytest.fixture
def state_store() -> InMemoryStateStore:
    return InMemoryStateStore()


@pytest.fixture
def tool_runner(settings: Settings, state_store: InMemoryStateStore, fake_runner: FakeCommandRunner) -> ToolRunner:
    return ToolRunner(settings, state_store, runner=fake_runner, clock=lambda: NOW_MS)
