# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the typer command line."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from conftest import SAMPLE_REPORT, FakeCommandRunner
from typer.testing import CliRunner

from codingstyle.cli import shared
from codingstyle.cli.app import app

FLAGS = ["--no-color", "--no-emoji"]


@pytest.fixture
def project(workspace: Path, tmp_path: Path) -> Path:
    state = (tmp_path / "state.json").as_posix()
    (workspace / ".codingstyle.toml").write_text(f'state_file = "{state}"\n', encoding="utf-8")
    return workspace


@pytest.fixture
def cli_runner(monkeypatch: pytest.MonkeyPatch) -> FakeCommandRunner:
    fake = FakeCommandRunner(report_text=SAMPLE_REPORT)
    monkeypatch.setattr(shared, "run_command", fake)
    return fake


def test_check_reports_findings(project: Path, cli_runner: FakeCommandRunner) -> None:
    result = CliRunner().invoke(app, ["check", str(project), *FLAGS])

    assert result.exit_code == 1
    assert "2 Coding Style Errors" in result.output
    assert cli_runner.verbs() == ["pull", "image", "run"]


def test_check_clean_workspace(project: Path, cli_runner: FakeCommandRunner) -> None:
    cli_runner.report_text = ""

    result = CliRunner().invoke(app, ["check", str(project), *FLAGS])

    assert result.exit_code == 0
    assert "No Coding Style Errors" in result.output


def test_check_tool_failure_exits_2(project: Path, cli_runner: FakeCommandRunner) -> None:
    cli_runner.fail("run", returncode=125, stderr="daemon unavailable")

    result = CliRunner().invoke(app, ["check", str(project), *FLAGS])

    assert result.exit_code == 2
    assert "Failed to analyze workspace" in result.output


def test_check_disabled(project: Path, cli_runner: FakeCommandRunner) -> None:
    (project / ".codingstyle.toml").write_text("enabled = false\n", encoding="utf-8")

    result = CliRunner().invoke(app, ["check", str(project), *FLAGS])

    assert result.exit_code == 0
    assert "Disabled" in result.output
    assert cli_runner.calls == []


def test_check_invalid_configuration(project: Path, cli_runner: FakeCommandRunner) -> None:
    (project / ".codingstyle.toml").write_text("debounce_delay_ms = -3\n", encoding="utf-8")

    result = CliRunner().invoke(app, ["check", str(project), *FLAGS])

    assert result.exit_code == 2
    assert "Invalid configuration" in result.output


def test_parse_existing_report(project: Path, tmp_path: Path) -> None:
    report = tmp_path / "report.log"
    report.write_text(SAMPLE_REPORT, encoding="utf-8")

    result = CliRunner().invoke(app, ["parse", str(report), "--root", str(project), *FLAGS])

    assert result.exit_code == 1
    assert "C-F3" in result.output
    assert "2 Coding Style Errors" in result.output


def test_parse_honours_ignore_file(project: Path, tmp_path: Path) -> None:
    (project / ".gitignore").write_text("src/\n", encoding="utf-8")
    report = tmp_path / "report.log"
    report.write_text(SAMPLE_REPORT, encoding="utf-8")

    result = CliRunner().invoke(app, ["parse", str(report), "--root", str(project), *FLAGS])

    assert result.exit_code == 0
    assert "No Coding Style Errors" in result.output


def test_parse_missing_report_is_usage_error(project: Path, tmp_path: Path) -> None:
    result = CliRunner().invoke(app, ["parse", str(tmp_path / "absent.log"), "--root", str(project)])

    assert result.exit_code == 2


def test_clear_cache_forgets_pull_timestamp(project: Path, tmp_path: Path) -> None:
    state = tmp_path / "state.json"
    state.write_text(json.dumps({"entries": {"lastImagePull": 1}}), encoding="utf-8")

    result = CliRunner().invoke(app, ["clear-cache", str(project), *FLAGS])

    assert result.exit_code == 0
    assert json.loads(state.read_text(encoding="utf-8")) == {"entries": {}}
