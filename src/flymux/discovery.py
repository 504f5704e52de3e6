# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Look up the Go package a source file belongs to."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .logging import DebugLogger
from .process_utils import SubprocessExecutionError, run_command


class PackageFiles(BaseModel):
    """Base names of the files making up one Go package directory."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    go_files: tuple[str, ...] = Field(default=(), alias="GoFiles")
    cgo_files: tuple[str, ...] = Field(default=(), alias="CgoFiles")
    test_go_files: tuple[str, ...] = Field(default=(), alias="TestGoFiles")
    xtest_go_files: tuple[str, ...] = Field(default=(), alias="XTestGoFiles")

    def build_files(self, *, include_tests: bool) -> list[str]:
        """Return the files compiled for a regular or a test build."""
        files = [*self.go_files, *self.cgo_files]
        if include_tests:
            files.extend(self.test_go_files)
            files.extend(self.xtest_go_files)
        return files


@runtime_checkable
class PackageLookup(Protocol):
    """Build-metadata service returning the files of the package in a directory."""

    def lookup(self, directory: Path) -> PackageFiles | None:
        """Return the package files for ``directory`` or ``None`` when it is not a package."""
        raise NotImplementedError


class GoListLookup:
    """Resolve package files by running ``go list -json`` inside the directory."""

    def __init__(
        self,
        go_tool: str = "go",
        *,
        logger: DebugLogger | None = None,
        env: Mapping[str, str] | None = None,
    ) -> None:
        self._go_tool = go_tool
        self._logger = logger if logger is not None else DebugLogger()
        self._env = env

    def lookup(self, directory: Path) -> PackageFiles | None:
        """Return the package files in ``directory``.

        Any failure (missing ``go``, a directory that is not a package, output
        that cannot be decoded) yields ``None`` so the caller falls back to
        building the single file.
        """

        try:
            completed = run_command(
                [self._go_tool, "list", "-json", "."],
                cwd=directory,
                env=self._env,
                check=True,
                capture_output=True,
            )
        except SubprocessExecutionError as exc:
            self._logger.debug(f"package lookup failed directory={directory} returncode={exc.returncode}")
            return None
        except (OSError, ValueError) as exc:
            self._logger.debug(f"package lookup failed directory={directory} error=\"{exc}\"")
            return None
        return parse_go_list(completed.stdout, logger=self._logger)


def parse_go_list(payload: str, *, logger: DebugLogger | None = None) -> PackageFiles | None:
    """Decode the JSON object printed by ``go list -json``.

    Args:
        payload: Standard output of ``go list -json``.
        logger: Optional logger receiving decode failures.

    Returns:
        PackageFiles | None: Package files, or ``None`` when ``payload`` is unusable.
    """

    try:
        data = json.loads(payload)
        return PackageFiles.model_validate(data)
    except (json.JSONDecodeError, ValidationError) as exc:
        if logger is not None:
            logger.debug(f"package lookup returned unusable output error=\"{exc}\"")
        return None


__all__ = ["GoListLookup", "PackageFiles", "PackageLookup", "parse_go_list"]
