# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run one external tool and stream both of its output channels into the sink."""

from __future__ import annotations

import os
import signal
from collections.abc import Iterator, Mapping
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from subprocess import Popen
from threading import Lock
from typing import IO, Final, cast

from .errors import SpawnError
from .logging import DebugLogger
from .process_utils import open_process
from .sink import LineSink
from .transformers import LineTransformer

STDOUT_CHANNEL: Final[str] = "stdout"
STDERR_CHANNEL: Final[str] = "stderr"


@dataclass(frozen=True, slots=True)
class FlymakeCommand:
    """Command ready for execution together with the transformers bound to its output."""

    name: str
    argv: tuple[str, ...]
    stdout: LineTransformer
    stderr: LineTransformer
    cwd: Path | None = None

    def describe(self) -> str:
        """Return the command line joined for display."""
        return " ".join(self.argv)


def iter_stream_lines(stream: IO[str]) -> Iterator[str]:
    """Yield lines from ``stream`` with line terminators removed."""

    for raw in stream:
        yield raw.rstrip("\r\n")


@dataclass(slots=True)
class TransformTask:
    """Drain one output channel through its transformer into the shared sink."""

    channel: str
    stream: IO[str]
    transformer: LineTransformer
    sink: LineSink

    def run(self) -> int:
        """Consume the channel until end of stream.

        Returns:
            int: Number of lines written to the sink.
        """

        written = 0
        with self.stream:
            for line in self.transformer.transform(iter_stream_lines(self.stream)):
                self.sink.write_line(line)
                written += 1
            # a transformer may stop early (malformed diff); keep the pipe empty
            for _ in self.stream:
                pass
        return written


def _kill_process_group(process: Popen[str]) -> None:
    """Kill ``process`` together with any children still holding its pipes."""

    if hasattr(os, "killpg"):
        try:
            os.killpg(process.pid, signal.SIGKILL)
        except (ProcessLookupError, PermissionError):
            pass
        else:
            return
    if process.poll() is None:
        process.kill()


class ProcessRunner:
    """Own one subprocess, its two pipes and the tasks draining them."""

    def __init__(
        self,
        command: FlymakeCommand,
        sink: LineSink,
        *,
        logger: DebugLogger | None = None,
        env: Mapping[str, str] | None = None,
    ) -> None:
        self.command = command
        self._sink = sink
        self._logger = logger if logger is not None else DebugLogger()
        self._env = env
        self._lock = Lock()
        self._process: Popen[str] | None = None
        self._terminated = False
        self._finished = False

    @property
    def name(self) -> str:
        """Return the command name."""
        return self.command.name

    @property
    def returncode(self) -> int | None:
        """Return the exit status once the process has been reaped."""
        process = self._process
        return None if process is None else process.returncode

    def run(self) -> int | None:
        """Start the tool, drain stdout and stderr concurrently and reap it.

        A non-zero exit status is the normal way for tools to report findings
        and is returned rather than raised.

        Returns:
            int | None: Exit status, or ``None`` when the runner was terminated
            before the process could start.

        Raises:
            SpawnError: If the process or its pipes cannot be set up.
        """

        process = self._spawn()
        if process is None:
            self._logger.debug(f"skipped command={self.name} reason=terminated")
            return None
        tasks = (
            TransformTask(STDOUT_CHANNEL, cast(IO[str], process.stdout), self.command.stdout, self._sink),
            TransformTask(STDERR_CHANNEL, cast(IO[str], process.stderr), self.command.stderr, self._sink),
        )
        try:
            with ThreadPoolExecutor(max_workers=len(tasks), thread_name_prefix=f"flymux-{self.name}") as pool:
                futures = [pool.submit(task.run) for task in tasks]
                try:
                    counts = [future.result() for future in futures]
                except BaseException:
                    # the surviving drain only sees end of stream once the tool is gone
                    _kill_process_group(process)
                    raise
        finally:
            returncode = process.wait()
            with self._lock:
                self._finished = True
        self._logger.debug(
            f"finished command={self.name} returncode={returncode} stdout_lines={counts[0]} stderr_lines={counts[1]}"
        )
        return returncode

    def terminate(self) -> None:
        """Kill the running process and everything it started.

        A runner terminated before starting never starts.
        """

        with self._lock:
            self._terminated = True
            process = self._process
            if process is None or self._finished:
                return
        self._logger.debug(f"terminating command={self.name} pid={process.pid}")
        _kill_process_group(process)

    def _spawn(self) -> Popen[str] | None:
        with self._lock:
            if self._terminated:
                return None
            self._logger.debug(f"starting command={self.name} argv=\"{self.command.describe()}\"")
            try:
                process = open_process(self.command.argv, cwd=self.command.cwd, env=self._env)
            except (OSError, ValueError) as exc:
                raise SpawnError(self.name, self.command.argv, str(exc)) from exc
            if process.stdout is None or process.stderr is None:
                process.kill()
                process.wait()
                raise SpawnError(self.name, self.command.argv, "output channels are unavailable")
            self._process = process
            return process


__all__ = [
    "FlymakeCommand",
    "ProcessRunner",
    "STDERR_CHANNEL",
    "STDOUT_CHANNEL",
    "TransformTask",
    "iter_stream_lines",
]
