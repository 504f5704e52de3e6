# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Line transformers turning raw tool output into flymake diagnostic lines."""

from __future__ import annotations

from .base import LineTransformer, TransformerKind, diff_annotate, passthrough, severity_annotate
from .diff import DIFF_HEADER_PREFIX, DiffCursor, iter_diff_diagnostics
from .text import LINE_NUMBER_PATTERN, annotate_severity

__all__ = [
    "DIFF_HEADER_PREFIX",
    "DiffCursor",
    "LINE_NUMBER_PATTERN",
    "LineTransformer",
    "TransformerKind",
    "annotate_severity",
    "diff_annotate",
    "iter_diff_diagnostics",
    "passthrough",
    "severity_annotate",
]
