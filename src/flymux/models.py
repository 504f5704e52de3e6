# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models shared across the flymux package."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .severity import Severity


class DiagnosticLine(BaseModel):
    """Single line-anchored diagnostic rendered as ``file:line:severity:message``."""

    model_config = ConfigDict(frozen=True)

    source_file: str
    line_number: int = Field(ge=0)
    severity: Severity = Severity.WARNING
    message: str

    def render(self) -> str:
        """Return the flymake representation of the diagnostic."""
        return f"{self.source_file}:{self.line_number}:{self.severity.value}:{self.message}"

    def __str__(self) -> str:
        return self.render()


__all__ = ["DiagnosticLine"]
