# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Command line entry point emitting flymake diagnostics for one Go file."""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import Annotated, Final

import typer

from .commands import default_commands
from .config import DEFAULT_PREFIX, ConfigError, FlymuxConfig, build_config, tool_environment
from .discovery import GoListLookup, PackageLookup
from .errors import FlymuxError
from .logging import DebugLogger, build_logger
from .orchestrator import Orchestrator, RunSummary
from .sink import LineSink

ENV_PREFIX: Final[str] = "FLYMUX_"

SOURCE_FILE_HELP: Final[str] = "Go source file to check, usually the editor's flymake copy."
PREFIX_HELP: Final[str] = "The prefix for generated flymake artifacts."
DEBUG_HELP: Final[str] = "Enable extra diagnostic output on stderr to determine why errors are occurring."
TIMEOUT_HELP: Final[str] = "Terminate tools still running after this many seconds."
GO_HELP: Final[str] = "Executable used for build, vet and fix."
GOFMT_HELP: Final[str] = "Executable used for formatting checks."
EMOJI_HELP: Final[str] = "Decorate warnings and failures with emoji."

app = typer.Typer(
    name="flymux",
    help="Multiplex Go build, vet, gofmt and fix output into flymake diagnostics.",
    add_completion=False,
    no_args_is_help=True,
)


def run_flymake(
    config: FlymuxConfig,
    *,
    logger: DebugLogger,
    sink: LineSink | None = None,
    lookup: PackageLookup | None = None,
    environ: Mapping[str, str] | None = None,
) -> RunSummary:
    """Build the tool commands for ``config`` and stream their diagnostics.

    Args:
        config: Validated run configuration.
        logger: Logger receiving debug and warning output.
        sink: Destination for diagnostic lines; defaults to standard output.
        lookup: Package lookup service; defaults to ``go list``.
        environ: Environment inherited by the tools; defaults to ``os.environ``.

    Returns:
        RunSummary: Outcome of the orchestrated run.

    Raises:
        SpawnError: If any tool cannot be started.
    """

    env = dict(os.environ if environ is None else environ)
    for key, value in tool_environment(env).items():
        logger.debug(f"{key}={value or '<unset>'}")
    package_lookup = lookup if lookup is not None else GoListLookup(config.go_tool, logger=logger, env=env)
    commands = default_commands(config, package_lookup, logger=logger)
    orchestrator = Orchestrator(config, sink if sink is not None else LineSink(), logger=logger, env=env)
    return orchestrator.run(commands)


@app.command()
def main(
    source_file: Annotated[Path, typer.Argument(help=SOURCE_FILE_HELP, show_default=False)],
    prefix: Annotated[str, typer.Option("--prefix", envvar=f"{ENV_PREFIX}PREFIX", help=PREFIX_HELP)] = DEFAULT_PREFIX,
    debug: Annotated[bool, typer.Option("--debug/--no-debug", envvar=f"{ENV_PREFIX}DEBUG", help=DEBUG_HELP)] = False,
    timeout: Annotated[
        float | None,
        typer.Option("--timeout", envvar=f"{ENV_PREFIX}TIMEOUT", help=TIMEOUT_HELP, show_default=False),
    ] = None,
    go_tool: Annotated[str, typer.Option("--go", envvar=f"{ENV_PREFIX}GO", help=GO_HELP)] = "go",
    gofmt_tool: Annotated[str, typer.Option("--gofmt", envvar=f"{ENV_PREFIX}GOFMT", help=GOFMT_HELP)] = "gofmt",
    emoji: Annotated[bool, typer.Option("--emoji/--no-emoji", help=EMOJI_HELP)] = False,
) -> None:
    """Run every Go checker on SOURCE_FILE and print one diagnostic per line."""

    logger = build_logger(debug=debug, emoji=emoji)
    logger.debug(f"arguments argv=\"{' '.join(sys.argv)}\"")
    try:
        config = build_config(
            source_file=source_file,
            prefix=prefix,
            debug=debug,
            timeout=timeout,
            go_tool=go_tool,
            gofmt_tool=gofmt_tool,
        )
    except ConfigError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=1) from exc

    try:
        run_flymake(config, logger=logger)
    except FlymuxError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=1) from exc


__all__ = ["app", "main", "run_flymake"]
