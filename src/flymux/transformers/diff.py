# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Convert unified diff output into line-anchored flymake warnings.

Formatters and rewrite tools run in diff mode describe what they would change
but never report ``file:line`` diagnostics. The transformer walks the diff once
and synthesises one warning per added, changed or removed line, anchored to
line numbers in the original file so the editor can place each annotation.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Final

from ..models import DiagnosticLine
from ..severity import Severity

DIFF_HEADER_PREFIX: Final[str] = "diff "
HUNK_HEADER_PATTERN: Final[re.Pattern[str]] = re.compile(r"^@@ -([0-9]+)")
BACKUP_SUFFIX: Final[str] = ".orig"
FILE_MARKER_LINES: Final[int] = 2


def parse_diff_header(line: str) -> str | None:
    """Return the file named by a ``diff`` header line, or ``None`` when malformed.

    The file is the first whitespace-delimited operand after ``diff``. Option
    tokens such as ``-u`` are skipped and the ``.orig`` suffix used by
    ``gofmt -d`` for the pristine copy is dropped.

    Args:
        line: First line of a diff stream.

    Returns:
        str | None: File name the diff applies to.
    """

    if not line.startswith(DIFF_HEADER_PREFIX):
        return None
    for token in line[len(DIFF_HEADER_PREFIX) :].split():
        if token.startswith("-"):
            continue
        return token.removesuffix(BACKUP_SUFFIX) or token
    return None


@dataclass(slots=True)
class DiffCursor:
    """Position inside the original file while a diff stream is consumed."""

    label: str
    current_file: str
    current_line: int = 0
    pending_deletions: int = 0

    def diagnostic(self, message: str) -> DiagnosticLine:
        """Return a warning anchored at the current line."""
        return DiagnosticLine(
            source_file=self.current_file,
            line_number=self.current_line,
            severity=Severity.WARNING,
            message=f"{self.label}:{message}",
        )

    def flush(self) -> list[DiagnosticLine]:
        """Report every pending deletion as a removed line.

        Each removed original line shifts the following lines up by one, so
        the cursor advances after every report.
        """

        flushed: list[DiagnosticLine] = []
        while self.pending_deletions > 0:
            flushed.append(self.diagnostic("removed line"))
            self.pending_deletions -= 1
            self.current_line += 1
        return flushed

    def feed(self, line: str) -> list[DiagnosticLine]:
        """Advance the cursor past one diff body line.

        Args:
            line: Hunk header, removal, addition or context line.

        Returns:
            list[DiagnosticLine]: Diagnostics produced by the line, possibly none.
        """

        hunk = HUNK_HEADER_PATTERN.match(line)
        if hunk is not None:
            emitted = self.flush()
            self.current_line = int(hunk.group(1))
            return emitted
        if line.startswith("-"):
            self.pending_deletions += 1
            return []
        if line.startswith("+"):
            added = line[1:]
            if self.pending_deletions > 0:
                emitted = [self.diagnostic(f"changed: {added}")]
                self.pending_deletions -= 1
                self.current_line += 1
                return emitted
            # pure insertion: the original file has no line here yet
            return [self.diagnostic(f"added: {added}")]
        emitted = self.flush()
        self.current_line += 1
        return emitted


def iter_diff_diagnostics(lines: Iterable[str], label: str) -> Iterator[DiagnosticLine]:
    """Yield synthetic diagnostics for a single-file unified diff stream.

    Args:
        lines: Diff text split into lines without trailing newlines.
        label: Short name of the producing tool, e.g. ``fmt`` or ``fix``.

    Yields:
        DiagnosticLine: Warnings in stream order. Nothing is yielded when the
        stream is empty or does not start with a ``diff`` header.
    """

    iterator = iter(lines)
    header = next(iterator, None)
    if header is None:
        return
    filename = parse_diff_header(header)
    if filename is None:
        return
    for _ in range(FILE_MARKER_LINES):
        next(iterator, None)

    cursor = DiffCursor(label=label, current_file=filename)
    for line in iterator:
        yield from cursor.feed(line)
    yield from cursor.flush()


def transform_diff(lines: Iterable[str], label: str) -> Iterator[str]:
    """Yield rendered diagnostic lines for a unified diff stream."""

    for diagnostic in iter_diff_diagnostics(lines, label):
        yield diagnostic.render()


__all__ = [
    "BACKUP_SUFFIX",
    "DIFF_HEADER_PREFIX",
    "DiffCursor",
    "HUNK_HEADER_PATTERN",
    "iter_diff_diagnostics",
    "parse_diff_header",
    "transform_diff",
]
