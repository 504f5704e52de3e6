# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run every configured tool concurrently and join them before returning."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from concurrent.futures import TimeoutError as FuturesTimeoutError
from dataclasses import dataclass, field

from .config import FlymuxConfig
from .logging import DebugLogger
from .runner import FlymakeCommand, ProcessRunner
from .sink import LineSink

RunnerFactory = Callable[..., ProcessRunner]


@dataclass(slots=True)
class RunSummary:
    """Outcome of an orchestrated run.

    ``returncodes`` maps each finished command to its exit status (``None``
    when it never started); ``timed_out`` lists commands terminated when the
    deadline expired.
    """

    returncodes: dict[str, int | None] = field(default_factory=dict)
    timed_out: tuple[str, ...] = ()

    @property
    def completed(self) -> bool:
        """Return ``True`` when every runner finished before the deadline."""
        return not self.timed_out


class Orchestrator:
    """Launch one :class:`ProcessRunner` per command and wait for all of them."""

    def __init__(
        self,
        config: FlymuxConfig,
        sink: LineSink,
        *,
        logger: DebugLogger | None = None,
        env: Mapping[str, str] | None = None,
        runner_factory: RunnerFactory = ProcessRunner,
    ) -> None:
        self._config = config
        self._sink = sink
        self._logger = logger if logger is not None else DebugLogger(enabled=config.debug)
        self._env = env
        self._runner_factory = runner_factory

    def build_runners(self, commands: Sequence[FlymakeCommand]) -> list[ProcessRunner]:
        """Return one runner per command, all sharing the orchestrator's sink."""

        return [
            self._runner_factory(command, self._sink, logger=self._logger, env=self._env) for command in commands
        ]

    def run(self, commands: Sequence[FlymakeCommand]) -> RunSummary:
        """Run ``commands`` in parallel and block until every runner has finished.

        Args:
            commands: Ready-to-run commands; completion order is irrelevant.

        Returns:
            RunSummary: Exit statuses and any commands cut off by the deadline.

        Raises:
            SpawnError: If any tool cannot be started. The remaining runners are
                terminated before the error propagates.
        """

        summary = RunSummary()
        runners = self.build_runners(commands)
        if not runners:
            return summary

        timeout = self._config.timeout
        executor = ThreadPoolExecutor(max_workers=len(runners), thread_name_prefix="flymux-runner")
        futures: dict[Future[int | None], ProcessRunner] = {executor.submit(runner.run): runner for runner in runners}
        try:
            for future in as_completed(futures, timeout=timeout):
                runner = futures[future]
                summary.returncodes[runner.name] = future.result()
        except FuturesTimeoutError:
            finished = [future for future in futures if future.done()]
            pending = tuple(runner.name for future, runner in futures.items() if future not in finished)
            summary.timed_out = pending
            if pending:
                self._logger.warn(f"Deadline of {timeout:g}s expired; terminating {', '.join(pending)}")
            self._terminate(runners)
            # runners that finished while the deadline fired are not timed out
            for future in finished:
                runner = futures[future]
                if runner.name not in summary.returncodes:
                    summary.returncodes[runner.name] = future.result()
        except BaseException:
            self._terminate(runners)
            raise
        finally:
            executor.shutdown(wait=True, cancel_futures=True)
        return summary

    @staticmethod
    def _terminate(runners: Sequence[ProcessRunner]) -> None:
        for runner in runners:
            runner.terminate()


__all__ = ["Orchestrator", "RunSummary", "RunnerFactory"]
