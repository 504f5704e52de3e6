# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for building the per-file tool commands."""

from __future__ import annotations

import os
from pathlib import Path

from flymux.commands import (
    BUILD_ARGUMENTS,
    TEST_ARGUMENTS,
    build_command,
    default_commands,
    fix_command,
    fmt_command,
    vet_command,
)
from flymux.config import FlymuxConfig
from flymux.discovery import PackageFiles
from flymux.transformers import TransformerKind, diff_annotate, passthrough, severity_annotate


class FakeLookup:
    """Package lookup returning a fixed answer and recording queried directories."""

    def __init__(self, package: PackageFiles | None) -> None:
        self._package = package
        self.calls: list[Path] = []

    def lookup(self, directory: Path) -> PackageFiles | None:
        self.calls.append(directory)
        return self._package


PACKAGE = PackageFiles(
    go_files=("server.go", "flymake_server.go", "util.go"),
    cgo_files=("native.go",),
    test_go_files=("server_test.go",),
    xtest_go_files=("api_test.go",),
)


def test_build_uses_package_files_and_skips_shadowed_original(tmp_path: Path) -> None:
    source = tmp_path / "flymake_server.go"
    lookup = FakeLookup(PACKAGE)

    command = build_command(FlymuxConfig(source_file=source), lookup)

    assert lookup.calls == [tmp_path]
    assert command.name == "build"
    assert command.argv == ("go", *BUILD_ARGUMENTS, "flymake_server.go", "util.go", "native.go")
    assert command.cwd == tmp_path
    assert command.stdout == passthrough()
    assert command.stderr == passthrough()


def test_build_for_test_file_compiles_test_binary(tmp_path: Path) -> None:
    source = tmp_path / "server_test.go"

    command = build_command(FlymuxConfig(source_file=source, go_tool="/opt/go/bin/go"), FakeLookup(PACKAGE))

    assert command.argv[0] == "/opt/go/bin/go"
    assert command.argv[1 : 1 + len(TEST_ARGUMENTS)] == TEST_ARGUMENTS
    assert TEST_ARGUMENTS == ("test", "-c", "-o", os.devnull)
    assert list(command.argv[1 + len(TEST_ARGUMENTS) :]) == [
        "server.go",
        "flymake_server.go",
        "util.go",
        "native.go",
        "server_test.go",
        "api_test.go",
    ]


def test_build_falls_back_to_single_file(tmp_path: Path) -> None:
    source = tmp_path / "script.go"

    command = build_command(FlymuxConfig(source_file=source), FakeLookup(None))

    assert command.argv == ("go", "build", "-o", os.devnull, str(source))
    assert command.cwd is None


def test_vet_marks_stderr_findings_as_warnings() -> None:
    command = vet_command(FlymuxConfig(source_file=Path("pkg/main.go")))

    assert command.argv == ("go", "vet", str(Path("pkg/main.go")))
    assert command.stdout == passthrough()
    assert command.stderr == severity_annotate()


def test_fmt_and_fix_read_diffs_from_stdout() -> None:
    config = FlymuxConfig(source_file=Path("main.go"), gofmt_tool="gofumpt")

    fmt = fmt_command(config)
    fix = fix_command(config)

    assert fmt.argv == ("gofumpt", "-d", "main.go")
    assert fmt.stdout == diff_annotate("fmt")
    assert fix.argv == ("go", "tool", "fix", "-diff", "main.go")
    assert fix.stdout == diff_annotate("fix")
    assert fmt.stderr.kind is fix.stderr.kind is TransformerKind.PASSTHROUGH


def test_default_commands_cover_all_four_tools(tmp_path: Path) -> None:
    commands = default_commands(FlymuxConfig(source_file=tmp_path / "main.go"), FakeLookup(None))

    assert [command.name for command in commands] == ["build", "vet", "fmt", "fix"]
