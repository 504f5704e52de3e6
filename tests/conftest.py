# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import io
import stat
import sys
from collections.abc import Callable
from pathlib import Path

import pytest
from rich.console import Console

from flymux.logging import DebugLogger
from flymux.runner import FlymakeCommand
from flymux.sink import LineSink
from flymux.transformers import LineTransformer, passthrough

PythonCommandFactory = Callable[..., FlymakeCommand]


@pytest.fixture
def buffer() -> io.StringIO:
    """Return an in-memory text stream."""
    return io.StringIO()


@pytest.fixture
def sink(buffer: io.StringIO) -> LineSink:
    """Return a sink writing into :func:`buffer`."""
    return LineSink(buffer)


@pytest.fixture
def log_output() -> io.StringIO:
    """Return the stream receiving :func:`debug_logger` output."""
    return io.StringIO()


@pytest.fixture
def debug_logger(log_output: io.StringIO) -> DebugLogger:
    """Return an enabled debug logger rendering plain text into :func:`log_output`."""
    console = Console(file=log_output, color_system=None, highlight=False, soft_wrap=True)
    return DebugLogger(enabled=True, console=console)


@pytest.fixture
def python_command() -> PythonCommandFactory:
    """Return a factory building commands that run a Python snippet."""

    def _factory(
        name: str,
        script: str,
        *,
        stdout: LineTransformer | None = None,
        stderr: LineTransformer | None = None,
    ) -> FlymakeCommand:
        return FlymakeCommand(
            name=name,
            argv=(sys.executable, "-c", script),
            stdout=stdout if stdout is not None else passthrough(),
            stderr=stderr if stderr is not None else passthrough(),
        )

    return _factory


@pytest.fixture
def write_script(tmp_path: Path) -> Callable[[str, str], Path]:
    """Return a helper writing an executable shell script into ``tmp_path``."""

    def _write(name: str, body: str) -> Path:
        path = tmp_path / name
        path.write_text(f"#!/bin/sh\n{body}", encoding="utf-8")
        path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return path

    return _write
