# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Line-atomic output sink shared by every transform task."""

from __future__ import annotations

import sys
from threading import Lock
from typing import TextIO


class LineSink:
    """Serialise complete lines from many writer threads onto one text stream.

    Each call to :meth:`write_line` holds the lock while the line, its newline
    and the flush reach the stream, so concurrent writers can interleave whole
    lines but never fragments of lines.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream
        self._lock = Lock()
        self._count = 0

    @property
    def stream(self) -> TextIO:
        """Return the underlying stream, defaulting to the current ``sys.stdout``."""
        return self._stream if self._stream is not None else sys.stdout

    @property
    def lines_written(self) -> int:
        """Return the number of lines written so far."""
        with self._lock:
            return self._count

    def write_line(self, line: str) -> None:
        """Write ``line`` followed by a newline as one indivisible operation.

        Args:
            line: Text without a trailing newline.
        """

        payload = line.rstrip("\r\n") + "\n"
        with self._lock:
            stream = self.stream
            stream.write(payload)
            stream.flush()
            self._count += 1

    def __call__(self, line: str) -> None:
        self.write_line(line)


__all__ = ["LineSink"]
