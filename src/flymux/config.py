# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration model for a single flymux run."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

DEFAULT_PREFIX: Final[str] = "flymake_"
TEST_FILE_SUFFIX: Final[str] = "_test.go"
TOOL_ENV_KEYS: Final[tuple[str, ...]] = ("PATH", "GOPATH", "GOROOT")


class ConfigError(Exception):
    """Raised when configuration input is invalid."""


class FlymuxConfig(BaseModel):
    """Explicit configuration shared by the orchestrator, runners and command builders."""

    model_config = ConfigDict(validate_assignment=True)

    source_file: Path
    prefix: str = DEFAULT_PREFIX
    debug: bool = False
    timeout: float | None = Field(default=None, ge=0)
    go_tool: str = "go"
    gofmt_tool: str = "gofmt"

    @field_validator("source_file")
    @classmethod
    def _reject_empty_path(cls, value: Path) -> Path:
        if not str(value).strip() or value == Path():
            raise ValueError("a source file is required")
        return value

    @field_validator("go_tool", "gofmt_tool")
    @classmethod
    def _reject_blank_tool(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("tool executable must not be blank")
        return value.strip()

    @property
    def is_test_file(self) -> bool:
        """Return ``True`` when the source file is a Go test file."""
        return self.source_file.name.endswith(TEST_FILE_SUFFIX)

    @property
    def shadowed_name(self) -> str | None:
        """Return the base name of the file replaced by a prefixed temporary copy.

        Editors write the buffer under inspection to ``<prefix><name>`` next to
        the original; building both would report duplicate declarations, so
        the original is dropped from package builds.
        """

        name = self.source_file.name
        if self.prefix and name.startswith(self.prefix):
            return name[len(self.prefix) :]
        return None


def build_config(**values: object) -> FlymuxConfig:
    """Return a validated :class:`FlymuxConfig`, translating validation failures.

    Args:
        **values: Field values forwarded to :class:`FlymuxConfig`.

    Returns:
        FlymuxConfig: Validated configuration.

    Raises:
        ConfigError: If any value fails validation.
    """

    try:
        return FlymuxConfig.model_validate(values)
    except ValidationError as exc:
        details = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']) or 'config'}: {error['msg']}" for error in exc.errors()
        )
        raise ConfigError(f"invalid configuration: {details}") from exc


def tool_environment(environ: Mapping[str, str]) -> dict[str, str]:
    """Return the tool-discovery variables visible to spawned processes."""

    return {key: environ.get(key, "") for key in TOOL_ENV_KEYS}


__all__ = [
    "ConfigError",
    "DEFAULT_PREFIX",
    "FlymuxConfig",
    "TEST_FILE_SUFFIX",
    "TOOL_ENV_KEYS",
    "build_config",
    "tool_environment",
]
