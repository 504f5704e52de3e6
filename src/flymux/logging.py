# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""User-facing logging helpers with optional colour and emoji support.

Standard output carries the diagnostic stream, so every helper here renders
on a Rich console bound to standard error.
"""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass, field
from functools import lru_cache

from rich.console import Console
from rich.text import Text


def detect_tty() -> bool:
    """Return ``True`` when stderr appears to be backed by a terminal."""

    try:
        return sys.stderr.isatty()
    except (AttributeError, ValueError):
        return False


@lru_cache(maxsize=4)
def get_console(*, color: bool, emoji: bool) -> Console:
    """Return a cached stderr console configured for ``color`` and ``emoji``.

    Args:
        color: ``True`` when ANSI colour output should be enabled.
        emoji: ``True`` when Rich should render emoji glyphs.

    Returns:
        Console: Console writing to standard error.
    """

    tty = detect_tty()
    return Console(
        stderr=True,
        color_system="auto" if color and tty else None,
        no_color=not (color and tty),
        emoji=emoji,
        highlight=False,
        soft_wrap=True,
    )


def emoji(symbol: str, enable: bool) -> str:
    """Return *symbol* when emoji output is enabled, otherwise blank."""

    return symbol if enable else ""


def _print_line(msg: str, *, style: str, use_emoji: bool, use_color: bool | None) -> None:
    color_enabled = detect_tty() if use_color is None else use_color
    text = Text(msg)
    if color_enabled:
        text.stylize(style)
    get_console(color=color_enabled, emoji=use_emoji).print(text)


def warn(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit a warning message."""

    _print_line(f"{emoji('⚠️ ', use_emoji)}{msg}", style="yellow", use_emoji=use_emoji, use_color=use_color)


def fail(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit an error message."""

    _print_line(f"{emoji('❌ ', use_emoji)}{msg}", style="red", use_emoji=use_emoji, use_color=use_color)


@dataclass(slots=True)
class DebugLogger:
    """Logger handed to every component that may report progress.

    Debug lines use ``key=value`` highlighting and are dropped entirely unless
    ``enabled`` is set; warnings and failures are always shown.
    """

    enabled: bool = False
    use_emoji: bool = False
    console: Console = field(default_factory=lambda: Console(stderr=True, highlight=False, soft_wrap=True))
    _key_value_re: re.Pattern[str] = field(default=re.compile(r"([\w-]+)=(\".*?\"|\S+)"), repr=False)

    def debug(self, message: str) -> None:
        """Emit ``message`` when debug logging is enabled.

        Args:
            message: Debug payload rendered with simple ``key=value`` highlighting.
        """

        if not self.enabled:
            return
        text = Text("[debug] ", style="bold cyan")
        cursor = 0
        for match in self._key_value_re.finditer(message):
            start, end = match.span()
            if start > cursor:
                text.append(message[cursor:start], style="dim")
            key, raw_value = match.group(1), match.group(2)
            text.append(key, style="bold magenta")
            text.append("=", style="dim")
            text.append(raw_value, style="bold blue" if key in {"command", "cmd", "argv"} else "bold green")
            cursor = end
        if cursor < len(message):
            text.append(message[cursor:], style="dim")
        self.console.print(text)

    def warn(self, message: str) -> None:
        """Log a warning message honouring emoji preferences."""

        warn(message, use_emoji=self.use_emoji)

    def fail(self, message: str) -> None:
        """Log a failure message honouring emoji preferences."""

        fail(message, use_emoji=self.use_emoji)


def build_logger(*, debug: bool, emoji: bool = False) -> DebugLogger:
    """Return a :class:`DebugLogger` bound to a dedicated stderr console.

    Rich enables colour only when stderr is a terminal.
    """

    console = Console(stderr=True, highlight=False, soft_wrap=True)
    return DebugLogger(enabled=debug, use_emoji=emoji, console=console)


__all__ = [
    "DebugLogger",
    "build_logger",
    "detect_tty",
    "emoji",
    "fail",
    "get_console",
    "warn",
]
