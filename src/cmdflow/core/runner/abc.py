"""Abstract interface for spawning pipeline stages."""

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Sequence

from cmdflow.core.command import Command
from cmdflow.core.result import ExecutionResult


class PipelineRunner(ABC):
    """Spawns the stages of a pipeline and reports the terminal stage's outcome.

    Runners never apply the validation policy: a non-zero exit code is returned
    inside the ExecutionResult and the Pipeline decides whether to raise.
    """

    @abstractmethod
    async def run(
        self,
        stages: Sequence[Command],
        cancel: asyncio.Event | None = None,
    ) -> ExecutionResult:
        """Run stages connected stdout→stdin and capture the terminal stage's output.

        Args:
            stages: One or more commands, executed left to right
            cancel: Event that aborts execution when set

        Returns:
            ExecutionResult of the terminal stage

        Raises:
            CommandCancelledError: If cancel was set before or during execution
            CommandResolutionError: If a stage could not be started
        """
        ...

    @abstractmethod
    async def run_interactive(
        self,
        stages: Sequence[Command],
        *,
        capture_stdout: bool,
        cancel: asyncio.Event | None = None,
    ) -> ExecutionResult:
        """Run stages attached to the parent's console.

        The terminal stage inherits stdin (unless given standard input) and stderr.
        Its stdout is captured when capture_stdout is True, otherwise inherited.
        """
        ...
