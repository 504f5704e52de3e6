# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the flymux command line."""

from __future__ import annotations

import io
import os
import sys
from pathlib import Path

import pytest
from rich.console import Console
from typer.testing import CliRunner

from flymux import cli
from flymux.cli import app, run_flymake
from flymux.config import FlymuxConfig
from flymux.errors import SpawnError
from flymux.logging import DebugLogger
from flymux.orchestrator import RunSummary
from flymux.sink import LineSink

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="uses POSIX shell scripts")


@pytest.fixture
def captured(monkeypatch: pytest.MonkeyPatch) -> list[FlymuxConfig]:
    configs: list[FlymuxConfig] = []

    def _fake_run(config: FlymuxConfig, **_kwargs: object) -> RunSummary:
        configs.append(config)
        return RunSummary()

    monkeypatch.setattr(cli, "run_flymake", _fake_run)
    return configs


def test_cli_builds_config_from_options(captured: list[FlymuxConfig]) -> None:
    result = CliRunner().invoke(
        app,
        ["pkg/flymake_main.go", "--prefix", "tmp_", "--timeout", "2.5", "--go", "go1.22", "--gofmt", "gofumpt"],
    )

    assert result.exit_code == 0, result.output
    assert len(captured) == 1
    config = captured[0]
    assert config.source_file == Path("pkg/flymake_main.go")
    assert config.prefix == "tmp_"
    assert config.timeout == 2.5
    assert config.go_tool == "go1.22"
    assert config.gofmt_tool == "gofumpt"
    assert config.debug is False


def test_cli_reads_environment(captured: list[FlymuxConfig]) -> None:
    result = CliRunner().invoke(app, ["main.go"], env={"FLYMUX_PREFIX": "emacs_", "FLYMUX_DEBUG": "1"})

    assert result.exit_code == 0, result.output
    assert captured[0].prefix == "emacs_"
    assert captured[0].debug is True


def test_cli_requires_a_source_file(captured: list[FlymuxConfig]) -> None:
    result = CliRunner().invoke(app, ["--prefix", "x_"])

    assert result.exit_code != 0
    assert captured == []


def test_cli_rejects_invalid_configuration(captured: list[FlymuxConfig]) -> None:
    result = CliRunner().invoke(app, ["main.go", "--timeout=-3"])

    assert result.exit_code == 1
    assert "invalid configuration" in result.output
    assert captured == []


def test_cli_reports_spawn_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    def _fail(config: FlymuxConfig, **_kwargs: object) -> RunSummary:
        raise SpawnError("vet", ["go", "vet", str(config.source_file)], "Executable 'go' was not found on PATH")

    monkeypatch.setattr(cli, "run_flymake", _fail)

    result = CliRunner().invoke(app, ["main.go"])

    assert result.exit_code == 1
    assert "Failed to start vet" in result.output


FAKE_GO = """\
case "$1" in
  list) exit 1 ;;
  build) echo "main.go:4:2: undefined: y" >&2; exit 1 ;;
  vet) echo "main.go:7: unreachable code" >&2; exit 1 ;;
  tool) printf 'diff main.go.orig main.go\\n--- main.go.orig\\n+++ main.go\\n@@ -2,3 +2,2 @@\\n x\\n-old\\n y\\n' ;;
esac
"""

FAKE_GOFMT = """\
printf 'diff main.go.orig main.go\\n--- main.go.orig\\n+++ main.go\\n@@ -5,1 +5,1 @@\\n-x:=1\\n+x := 1\\n'
exit 1
"""


@posix_only
def test_cli_end_to_end_with_fake_tools(tmp_path: Path, write_script) -> None:
    go = write_script("go", FAKE_GO)
    gofmt = write_script("gofmt", FAKE_GOFMT)
    source = tmp_path / "main.go"
    source.write_text("package main\n", encoding="utf-8")

    result = CliRunner().invoke(app, [str(source), "--go", str(go), "--gofmt", str(gofmt)])

    assert result.exit_code == 0, result.output
    assert sorted(result.output.splitlines()) == sorted(
        [
            "main.go:4:2: undefined: y",
            "main.go:7:warning: unreachable code",
            "main.go:5:warning:fmt:changed: x := 1",
            "main.go:3:warning:fix:removed line",
        ]
    )


EXPECTED_DIAGNOSTICS = sorted(
    [
        "main.go:4:2: undefined: y",
        "main.go:7:warning: unreachable code",
        "main.go:5:warning:fmt:changed: x := 1",
        "main.go:3:warning:fix:removed line",
    ]
)


@posix_only
def test_debug_output_goes_to_the_logger_not_the_sink(
    tmp_path: Path, write_script, buffer: io.StringIO, debug_logger: DebugLogger, log_output: io.StringIO
) -> None:
    go = write_script("go", FAKE_GO)
    gofmt = write_script("gofmt", FAKE_GOFMT)
    source = tmp_path / "main.go"
    source.write_text("package main\n", encoding="utf-8")
    config = FlymuxConfig(source_file=source, debug=True, go_tool=str(go), gofmt_tool=str(gofmt))
    environ = {"PATH": os.environ.get("PATH", ""), "GOPATH": "/flymux/gopath", "GOROOT": "/flymux/goroot"}

    summary = run_flymake(config, logger=debug_logger, sink=LineSink(buffer), environ=environ)

    assert summary.completed
    assert sorted(buffer.getvalue().splitlines()) == EXPECTED_DIAGNOSTICS
    log = log_output.getvalue()
    assert "[debug] PATH=" in log
    assert "GOPATH=/flymux/gopath" in log
    assert "GOROOT=/flymux/goroot" in log
    assert "go build arguments" in log
    assert "starting command=build" in log


@posix_only
def test_disabled_debug_logger_stays_silent(tmp_path: Path, write_script, buffer: io.StringIO) -> None:
    go = write_script("go", FAKE_GO)
    gofmt = write_script("gofmt", FAKE_GOFMT)
    source = tmp_path / "main.go"
    source.write_text("package main\n", encoding="utf-8")
    config = FlymuxConfig(source_file=source, go_tool=str(go), gofmt_tool=str(gofmt))
    log_output = io.StringIO()
    logger = DebugLogger(enabled=False, console=Console(file=log_output, color_system=None))

    run_flymake(config, logger=logger, sink=LineSink(buffer))

    assert log_output.getvalue() == ""
    assert sorted(buffer.getvalue().splitlines()) == EXPECTED_DIAGNOSTICS
