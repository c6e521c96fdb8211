"""In-memory fake PipelineRunner for testing.

FakePipelineRunner records every run without spawning processes and returns
results configured at construction time.
"""

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass, replace

from cmdflow.core.command import Command, render_command_string
from cmdflow.core.result import ExecutionResult
from cmdflow.core.runner.abc import PipelineRunner
from cmdflow.errors import CommandCancelledError, CommandError


@dataclass(frozen=True)
class RunCall:
    """One recorded invocation of the fake runner."""

    stages: tuple[Command, ...]
    interactive: bool
    capture_stdout: bool

    @property
    def command(self) -> str:
        return render_command_string(self.stages)


class FakePipelineRunner(PipelineRunner):
    """In-memory fake implementation for testing.

    All state is provided via constructor using keyword arguments.
    This class has NO public setup methods.
    """

    def __init__(
        self,
        *,
        results: dict[str, ExecutionResult] | None = None,
        default_result: ExecutionResult | None = None,
        error: CommandError | None = None,
    ) -> None:
        """Create FakePipelineRunner with pre-configured results.

        Args:
            results: Mapping of rendered command string -> result to return
            default_result: Result for commands not in results (default: exit 0, no output)
            error: If given, raised by every run instead of returning a result
        """
        self._results = results or {}
        self._default_result = default_result or ExecutionResult(exit_code=0)
        self._error = error
        self._run_calls: list[RunCall] = []

    @property
    def run_calls(self) -> list[RunCall]:
        """Read-only access to recorded runs for test assertions."""
        return self._run_calls.copy()

    async def run(
        self,
        stages: Sequence[Command],
        cancel: asyncio.Event | None = None,
    ) -> ExecutionResult:
        return self._respond(stages, cancel, interactive=False, capture_stdout=True)

    async def run_interactive(
        self,
        stages: Sequence[Command],
        *,
        capture_stdout: bool,
        cancel: asyncio.Event | None = None,
    ) -> ExecutionResult:
        result = self._respond(stages, cancel, interactive=True, capture_stdout=capture_stdout)
        if capture_stdout:
            return replace(result, stderr="")
        return replace(result, stdout="", stderr="")

    def _respond(
        self,
        stages: Sequence[Command],
        cancel: asyncio.Event | None,
        *,
        interactive: bool,
        capture_stdout: bool,
    ) -> ExecutionResult:
        call = RunCall(stages=tuple(stages), interactive=interactive, capture_stdout=capture_stdout)
        self._run_calls.append(call)

        if cancel is not None and cancel.is_set():
            raise CommandCancelledError(call.command)
        if self._error is not None:
            raise self._error
        return self._results.get(call.command, self._default_result)
