# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Stateless line transformers for tools that already emit ``file:line:`` output."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from typing import Final

from ..severity import Severity

LINE_NUMBER_PATTERN: Final[re.Pattern[str]] = re.compile(r":[0-9]+:")


def transform_passthrough(lines: Iterable[str]) -> Iterator[str]:
    """Yield every line unchanged."""

    yield from lines


def annotate_severity(line: str, severity: Severity = Severity.WARNING) -> str:
    """Insert ``<severity>:`` after the first ``:<digits>:`` delimiter in ``line``.

    Args:
        line: Raw output line such as ``foo.go:42: undefined: x``.
        severity: Severity marker to insert.

    Returns:
        str: The annotated line, or ``line`` itself when no delimiter is present.
    """

    match = LINE_NUMBER_PATTERN.search(line)
    if match is None:
        return line
    end = match.end()
    return f"{line[:end]}{severity.value}:{line[end:]}"


def transform_severity(lines: Iterable[str]) -> Iterator[str]:
    """Yield each line with a warning marker inserted after its line number."""

    for line in lines:
        yield annotate_severity(line)


__all__ = ["LINE_NUMBER_PATTERN", "annotate_severity", "transform_passthrough", "transform_severity"]
