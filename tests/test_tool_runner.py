# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the docker tool runner."""

from __future__ import annotations

from pathlib import Path

import pytest
from conftest import NOW_MS, FakeCommandRunner

from codingstyle.cache.providers import InMemoryStateStore, JsonFileStateStore
from codingstyle.config.models import Settings
from codingstyle.constants import CACHE_DURATION_MS, DOCKER_CACHE_KEY
from codingstyle.errors import ImagePullError, ToolExecutionError
from codingstyle.execution.tool_runner import DockerCommands, ToolRunner


def test_docker_commands_layout() -> None:
    commands = DockerCommands(executable="docker", image="img:latest")

    assert commands.pull() == ["docker", "pull", "img:latest"]
    assert commands.prune() == ["docker", "image", "prune", "-f"]
    assert commands.run(Path("/w"), Path("/w/.vscode")) == [
        "docker",
        "run",
        "--rm",
        "-i",
        "-v",
        "/w:/mnt/delivery",
        "-v",
        "/w/.vscode:/mnt/reports",
        "img:latest",
        "/mnt/delivery",
        "/mnt/reports",
    ]


def test_ensure_image_pulls_once_within_window(
    tool_runner: ToolRunner,
    fake_runner: FakeCommandRunner,
    state_store: InMemoryStateStore,
) -> None:
    tool_runner.ensure_image()
    tool_runner.ensure_image(now_ms=NOW_MS + 1000)

    assert fake_runner.verbs() == ["pull", "image"]
    assert state_store.get(DOCKER_CACHE_KEY) == NOW_MS


def test_ensure_image_pulls_again_after_window(
    tool_runner: ToolRunner,
    fake_runner: FakeCommandRunner,
    state_store: InMemoryStateStore,
) -> None:
    state_store.set(DOCKER_CACHE_KEY, NOW_MS - CACHE_DURATION_MS)

    tool_runner.ensure_image()

    assert fake_runner.verbs() == ["pull", "image"]


def test_ensure_image_honours_explicit_window(tool_runner: ToolRunner, fake_runner: FakeCommandRunner) -> None:
    tool_runner.ensure_image(cache_key="custom", now_ms=10, cache_duration_ms=5)
    tool_runner.ensure_image(cache_key="custom", now_ms=14, cache_duration_ms=5)
    tool_runner.ensure_image(cache_key="custom", now_ms=15, cache_duration_ms=5)

    assert fake_runner.verbs() == ["pull", "image", "pull", "image"]


def test_pull_failure_raises_and_keeps_timestamp(
    tool_runner: ToolRunner,
    fake_runner: FakeCommandRunner,
    state_store: InMemoryStateStore,
) -> None:
    fake_runner.fail("pull", returncode=1, stderr="denied")

    with pytest.raises(ImagePullError) as excinfo:
        tool_runner.ensure_image()

    assert excinfo.value.exit_code == 1
    assert "denied" in excinfo.value.stderr
    assert state_store.get(DOCKER_CACHE_KEY) is None
    assert fake_runner.verbs() == ["pull"]


def test_prune_failure_is_swallowed(
    tool_runner: ToolRunner,
    fake_runner: FakeCommandRunner,
    state_store: InMemoryStateStore,
) -> None:
    fake_runner.outcomes["image"] = OSError("no daemon")

    tool_runner.ensure_image()

    assert state_store.get(DOCKER_CACHE_KEY) == NOW_MS


def test_run_creates_report_dir_and_returns_report_path(
    tool_runner: ToolRunner,
    fake_runner: FakeCommandRunner,
    workspace: Path,
) -> None:
    report = tool_runner.run(workspace)

    assert report == workspace / ".vscode" / "coding-style-reports.log"
    assert report.is_file()
    assert fake_runner.verbs() == ["pull", "image", "run"]
    run_call = fake_runner.calls[-1]
    assert f"{workspace}:/mnt/delivery" in run_call
    assert f"{workspace / '.vscode'}:/mnt/reports" in run_call


def test_run_uses_explicit_report_dir(tool_runner: ToolRunner, workspace: Path, tmp_path: Path) -> None:
    reports = tmp_path / "reports"

    report = tool_runner.run(workspace, reports)

    assert report == reports.resolve() / "coding-style-reports.log"
    assert reports.is_dir()


def test_run_removes_stale_report(tool_runner: ToolRunner, fake_runner: FakeCommandRunner, workspace: Path) -> None:
    stale = workspace / ".vscode" / "coding-style-reports.log"
    stale.parent.mkdir()
    stale.write_text("old:1:MAJOR:C-F3:stale\n", encoding="utf-8")
    fake_runner.report_text = None

    report = tool_runner.run(workspace)

    assert not report.exists()


def test_pull_failure_falls_back_to_cached_image(
    tool_runner: ToolRunner,
    fake_runner: FakeCommandRunner,
    workspace: Path,
) -> None:
    fake_runner.fail("pull")

    report = tool_runner.run(workspace)

    assert report.is_file()
    assert fake_runner.verbs() == ["pull", "run"]


def test_spawn_failure_during_pull_falls_back(
    tool_runner: ToolRunner,
    fake_runner: FakeCommandRunner,
    workspace: Path,
) -> None:
    fake_runner.outcomes["pull"] = FileNotFoundError("docker")

    tool_runner.run(workspace)

    assert fake_runner.verbs() == ["pull", "run"]


def test_unwritable_freshness_record_does_not_abort_run(
    settings: Settings,
    fake_runner: FakeCommandRunner,
    workspace: Path,
    tmp_path: Path,
) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    store = JsonFileStateStore(blocker / "state.json")
    runner = ToolRunner(settings, store, runner=fake_runner, clock=lambda: NOW_MS)

    runner.run(workspace)

    assert fake_runner.verbs() == ["pull", "run"]


def test_container_failure_raises_tool_execution_error(
    tool_runner: ToolRunner,
    fake_runner: FakeCommandRunner,
    workspace: Path,
) -> None:
    fake_runner.fail("run", returncode=3, stderr="mount denied")

    with pytest.raises(ToolExecutionError) as excinfo:
        tool_runner.run(workspace)

    assert excinfo.value.exit_code == 3
    assert excinfo.value.stderr == "mount denied"
    assert "Container execution failed" in str(excinfo.value)


def test_container_timeout_is_reported(
    tool_runner: ToolRunner,
    fake_runner: FakeCommandRunner,
    workspace: Path,
) -> None:
    fake_runner.fail("run", returncode=124, stderr="Command timed out after 600.0s")

    with pytest.raises(ToolExecutionError, match="timed out"):
        tool_runner.run(workspace)


def test_container_spawn_failure_raises_tool_execution_error(
    tool_runner: ToolRunner,
    fake_runner: FakeCommandRunner,
    workspace: Path,
) -> None:
    fake_runner.outcomes["run"] = FileNotFoundError("docker not found")

    with pytest.raises(ToolExecutionError) as excinfo:
        tool_runner.run(workspace)

    assert excinfo.value.exit_code is None


def test_container_timeout_option_is_forwarded(
    settings: Settings,
    fake_runner: FakeCommandRunner,
    state_store: InMemoryStateStore,
    workspace: Path,
) -> None:
    settings.container_timeout_s = 42.0
    runner = ToolRunner(settings, state_store, runner=fake_runner, clock=lambda: NOW_MS)

    runner.run(workspace)

    run_options = fake_runner.options[fake_runner.verbs().index("run")]
    assert run_options is not None
    assert run_options.timeout == 42.0


def test_forget_image_forces_next_pull(
    tool_runner: ToolRunner,
    fake_runner: FakeCommandRunner,
    state_store: InMemoryStateStore,
) -> None:
    tool_runner.ensure_image()
    tool_runner.forget_image()
    tool_runner.ensure_image()

    assert state_store.get(DOCKER_CACHE_KEY) == NOW_MS
    assert fake_runner.verbs() == ["pull", "image", "pull", "image"]
