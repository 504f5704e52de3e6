# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exceptions raised by flymux."""

from __future__ import annotations

from collections.abc import Sequence


class FlymuxError(RuntimeError):
    """Base class for fatal flymux failures."""


class SpawnError(FlymuxError):
    """Raised when a tool process or its output channels cannot be set up."""

    def __init__(self, name: str, argv: Sequence[str], reason: str) -> None:
        command = argv[0] if argv else "<empty>"
        super().__init__(f"Failed to start {name} ('{command}'): {reason}")
        self.name = name
        self.argv = tuple(argv)
        self.reason = reason


__all__ = ["FlymuxError", "SpawnError"]
