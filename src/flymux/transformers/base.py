# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Closed set of line transformer variants and their dispatch table."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Final

from .diff import transform_diff
from .text import transform_passthrough, transform_severity


class TransformerKind(str, Enum):
    """Supported ways of reshaping one output channel."""

    PASSTHROUGH = "passthrough"
    SEVERITY = "severity"
    DIFF = "diff"


@dataclass(frozen=True, slots=True)
class LineTransformer:
    """Tagged transformer value bound to one output channel.

    ``label`` names the upstream tool and is only meaningful for
    :attr:`TransformerKind.DIFF`, where it prefixes every generated message.
    """

    kind: TransformerKind
    label: str = ""

    def __post_init__(self) -> None:
        if self.kind is TransformerKind.DIFF and not self.label:
            raise ValueError("diff transformers require a tool label")

    def transform(self, lines: Iterable[str]) -> Iterator[str]:
        """Return the transformed lines for ``lines`` in input order.

        Args:
            lines: Raw channel output without trailing newlines.

        Returns:
            Iterator[str]: Lazily produced output lines.
        """

        return _TRANSFORMS[self.kind](self, lines)

    def __str__(self) -> str:
        return f"{self.kind.value}:{self.label}" if self.label else self.kind.value


TransformFunction = Callable[[LineTransformer, Iterable[str]], Iterator[str]]


def _passthrough(_transformer: LineTransformer, lines: Iterable[str]) -> Iterator[str]:
    return transform_passthrough(lines)


def _severity(_transformer: LineTransformer, lines: Iterable[str]) -> Iterator[str]:
    return transform_severity(lines)


def _diff(transformer: LineTransformer, lines: Iterable[str]) -> Iterator[str]:
    return transform_diff(lines, transformer.label)


_TRANSFORMS: Final[Mapping[TransformerKind, TransformFunction]] = MappingProxyType(
    {
        TransformerKind.PASSTHROUGH: _passthrough,
        TransformerKind.SEVERITY: _severity,
        TransformerKind.DIFF: _diff,
    }
)


def passthrough() -> LineTransformer:
    """Return a transformer that echoes lines unchanged."""
    return LineTransformer(TransformerKind.PASSTHROUGH)


def severity_annotate() -> LineTransformer:
    """Return a transformer that marks ``file:line:`` output as warnings."""
    return LineTransformer(TransformerKind.SEVERITY)


def diff_annotate(label: str) -> LineTransformer:
    """Return a transformer that turns unified diffs into warnings labelled ``label``."""
    return LineTransformer(TransformerKind.DIFF, label)


__all__ = [
    "LineTransformer",
    "TransformFunction",
    "TransformerKind",
    "diff_annotate",
    "passthrough",
    "severity_annotate",
]
