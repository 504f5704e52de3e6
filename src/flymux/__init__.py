# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""flymux: multiplex Go tool output into flymake diagnostics."""

from __future__ import annotations

from .config import ConfigError, FlymuxConfig, build_config
from .errors import FlymuxError, SpawnError
from .models import DiagnosticLine
from .orchestrator import Orchestrator, RunSummary
from .runner import FlymakeCommand, ProcessRunner, TransformTask
from .severity import Severity
from .sink import LineSink
from .transformers import LineTransformer, TransformerKind, diff_annotate, passthrough, severity_annotate

__all__ = [
    "ConfigError",
    "DiagnosticLine",
    "FlymakeCommand",
    "FlymuxConfig",
    "FlymuxError",
    "LineSink",
    "LineTransformer",
    "Orchestrator",
    "ProcessRunner",
    "RunSummary",
    "Severity",
    "SpawnError",
    "TransformTask",
    "TransformerKind",
    "build_config",
    "diff_annotate",
    "passthrough",
    "severity_annotate",
]
