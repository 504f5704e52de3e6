# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity related types and helpers."""

from __future__ import annotations

from enum import Enum


class Severity(str, Enum):
    """Severity levels understood by the flymake annotation stream.

    Every synthetic diagnostic is reported as a warning; tool output that
    already carries its own ``file:line:message`` shape is passed through
    untouched and never re-labelled.
    """

    WARNING = "warning"


__all__ = ["Severity"]
