# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Construct the tool commands run for one source file."""

from __future__ import annotations

import os
from typing import Final

from .config import FlymuxConfig
from .discovery import PackageLookup
from .logging import DebugLogger
from .runner import FlymakeCommand
from .transformers import diff_annotate, passthrough, severity_annotate

BUILD_ARGUMENTS: Final[tuple[str, ...]] = ("build", "-o", os.devnull)
TEST_ARGUMENTS: Final[tuple[str, ...]] = ("test", "-c", "-o", os.devnull)
FMT_LABEL: Final[str] = "fmt"
FIX_LABEL: Final[str] = "fix"


def build_command(
    config: FlymuxConfig,
    lookup: PackageLookup,
    *,
    logger: DebugLogger | None = None,
) -> FlymakeCommand:
    """Return the command compiling the file's package, or its test binary.

    When the file belongs to a package the whole package is built from its
    directory, leaving out the original of a prefixed temporary copy. Files
    outside any package are built on their own.

    Args:
        config: Run configuration naming the source file and prefix.
        lookup: Build-metadata service listing package files.
        logger: Optional logger receiving the final argument list.

    Returns:
        FlymakeCommand: Build command with passthrough transformers on both channels.
    """

    source = config.source_file
    arguments = list(TEST_ARGUMENTS if config.is_test_file else BUILD_ARGUMENTS)
    package = lookup.lookup(source.parent)
    cwd = None
    if package is None:
        arguments.append(str(source))
    else:
        shadowed = config.shadowed_name
        arguments.extend(name for name in package.build_files(include_tests=config.is_test_file) if name != shadowed)
        cwd = source.parent

    if logger is not None:
        logger.debug(f"go build arguments argv=\"{' '.join(arguments)}\"")
    return FlymakeCommand(
        name="build",
        argv=(config.go_tool, *arguments),
        stdout=passthrough(),
        stderr=passthrough(),
        cwd=cwd,
    )


def vet_command(config: FlymuxConfig) -> FlymakeCommand:
    """Return ``go vet`` for the file; its stderr findings are marked as warnings."""

    return FlymakeCommand(
        name="vet",
        argv=(config.go_tool, "vet", str(config.source_file)),
        stdout=passthrough(),
        stderr=severity_annotate(),
    )


def fmt_command(config: FlymuxConfig) -> FlymakeCommand:
    """Return ``gofmt -d`` for the file with its diff turned into warnings."""

    return FlymakeCommand(
        name=FMT_LABEL,
        argv=(config.gofmt_tool, "-d", str(config.source_file)),
        stdout=diff_annotate(FMT_LABEL),
        stderr=passthrough(),
    )


def fix_command(config: FlymuxConfig) -> FlymakeCommand:
    """Return ``go tool fix -diff`` for the file with its diff turned into warnings."""

    return FlymakeCommand(
        name=FIX_LABEL,
        argv=(config.go_tool, "tool", "fix", "-diff", str(config.source_file)),
        stdout=diff_annotate(FIX_LABEL),
        stderr=passthrough(),
    )


def default_commands(
    config: FlymuxConfig,
    lookup: PackageLookup,
    *,
    logger: DebugLogger | None = None,
) -> list[FlymakeCommand]:
    """Return the compile, vet, format and fix commands for the configured file."""

    return [
        build_command(config, lookup, logger=logger),
        vet_command(config),
        fmt_command(config),
        fix_command(config),
    ]


__all__ = [
    "BUILD_ARGUMENTS",
    "FIX_LABEL",
    "FMT_LABEL",
    "TEST_ARGUMENTS",
    "build_command",
    "default_commands",
    "fix_command",
    "fmt_command",
    "vet_command",
]
