"""Pipelines of commands connected stdout→stdin.

Architecture:
- Pipeline: abstract interface shared by both variants
- CommandPipeline: one or more runnable stages
- InvalidPipeline: sentinel produced by malformed construction input; every
  operation is a harmless no-op and execution reports a failed result
- build_pipeline()/run(): construct a single-stage pipeline, never raising
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence

from cmdflow.core.command import Command, render_command_string
from cmdflow.core.options import CommandOptions
from cmdflow.core.paths import resolve_command_path
from cmdflow.core.result import INVALID_PIPELINE_EXIT_CODE, ExecutionResult
from cmdflow.core.runner import AsyncioPipelineRunner, PipelineRunner
from cmdflow.core.script_hooks import get_script_hook_registry
from cmdflow.errors import CommandFailedError

logger = logging.getLogger(__name__)

_DEFAULT_OPTIONS = CommandOptions()


class Pipeline(ABC):
    """Ordered chain of commands, executed left to right."""

    @property
    @abstractmethod
    def is_valid(self) -> bool: ...

    @property
    @abstractmethod
    def stages(self) -> tuple[Command, ...]: ...

    @abstractmethod
    def pipe(
        self,
        executable: str,
        *arguments: str,
        options: CommandOptions | None = None,
    ) -> "Pipeline":
        """Append a stage fed by this pipeline's output.

        The executable is resolved through the command path registry now, so
        later overrides do not affect the returned pipeline.
        """
        ...

    @abstractmethod
    def pipe_to(self, other: "Pipeline") -> "Pipeline":
        """Append every stage of other. Its first stage's standard input is ignored."""
        ...

    @abstractmethod
    def cached(self) -> "Pipeline":
        """Return a pipeline that runs at most once and replays its first result."""
        ...

    @abstractmethod
    def to_command_string(self) -> str:
        """Render the pipeline for diagnostics. Never used for execution."""
        ...

    @abstractmethod
    async def execute(self, cancel: asyncio.Event | None = None) -> ExecutionResult:
        """Run the pipeline and return the terminal stage's result.

        Raises:
            CommandFailedError: If the terminal stage exits non-zero with validation on
            CommandCancelledError: If cancel is set before or during execution
            CommandResolutionError: If a stage could not be started
        """
        ...

    @abstractmethod
    async def execute_interactive(self, cancel: asyncio.Event | None = None) -> ExecutionResult:
        """Run attached to the console. The result carries no captured output."""
        ...

    @abstractmethod
    async def get_string_interactive(self, cancel: asyncio.Event | None = None) -> str:
        """Run with stdin/stderr on the console and return captured stdout.

        Suited to selectors like fzf that draw their UI on stderr.
        """
        ...

    async def get_string(self, cancel: asyncio.Event | None = None) -> str:
        """Run the pipeline and return stdout without trailing line breaks."""
        result = await self.execute(cancel)
        return result.stdout.rstrip("\r\n")

    async def get_lines(self, cancel: asyncio.Event | None = None) -> list[str]:
        """Run the pipeline and return stdout split into lines."""
        result = await self.execute(cancel)
        return split_lines(result.stdout)


class CommandPipeline(Pipeline):
    """Pipeline with one or more runnable stages."""

    def __init__(
        self,
        stages: Sequence[Command],
        *,
        runner: PipelineRunner | None = None,
        caching: bool = False,
    ) -> None:
        if not stages:
            raise ValueError("A pipeline needs at least one stage")
        self._stages = tuple(stages)
        self._runner = runner if runner is not None else AsyncioPipelineRunner()
        self._caching = caching
        self._cached_result: ExecutionResult | None = None
        self._cache_lock = asyncio.Lock()

    def __repr__(self) -> str:
        return f"CommandPipeline({self.to_command_string()!r})"

    @property
    def is_valid(self) -> bool:
        return True

    @property
    def stages(self) -> tuple[Command, ...]:
        return self._stages

    @property
    def runner(self) -> PipelineRunner:
        return self._runner

    def pipe(
        self,
        executable: str,
        *arguments: str,
        options: CommandOptions | None = None,
    ) -> Pipeline:
        if options is None:
            options = _DEFAULT_OPTIONS
        if not executable or not executable.strip():
            return InvalidPipeline("Cannot pipe into an empty executable name")

        next_stage = _create_command(executable, arguments, options, None)
        return CommandPipeline(
            [*self._stages, next_stage], runner=self._runner, caching=self._caching
        )

    def pipe_to(self, other: Pipeline) -> Pipeline:
        if not other.is_valid:
            return other
        return CommandPipeline(
            [*self._stages, *other.stages], runner=self._runner, caching=self._caching
        )

    def cached(self) -> Pipeline:
        return CommandPipeline(self._stages, runner=self._runner, caching=True)

    def to_command_string(self) -> str:
        return render_command_string(self._stages)

    async def execute(self, cancel: asyncio.Event | None = None) -> ExecutionResult:
        result = await self._run(cancel)
        self._validate(result)
        return result

    async def execute_interactive(self, cancel: asyncio.Event | None = None) -> ExecutionResult:
        result = await self._runner.run_interactive(self._stages, capture_stdout=False, cancel=cancel)
        self._validate(result)
        return result

    async def get_string_interactive(self, cancel: asyncio.Event | None = None) -> str:
        result = await self._runner.run_interactive(self._stages, capture_stdout=True, cancel=cancel)
        self._validate(result)
        return result.stdout.rstrip("\r\n")

    async def _run(self, cancel: asyncio.Event | None) -> ExecutionResult:
        if not self._caching:
            return await self._runner.run(self._stages, cancel)

        async with self._cache_lock:
            if self._cached_result is None:
                self._cached_result = await self._runner.run(self._stages, cancel)
            else:
                logger.debug("Reusing cached result: %s", self.to_command_string())
            return self._cached_result

    def _validate(self, result: ExecutionResult) -> None:
        if result.exit_code == 0 or not self._stages[-1].options.validation:
            return
        raise CommandFailedError(
            command=self.to_command_string(),
            exit_code=result.exit_code,
            stdout=result.stdout,
            stderr=result.stderr,
        )


class InvalidPipeline(Pipeline):
    """Sentinel for malformed construction input.

    Attributes:
        reason: Why construction failed (for logs and debugging)
    """

    def __init__(self, reason: str) -> None:
        self.reason = reason

    def __repr__(self) -> str:
        return f"InvalidPipeline({self.reason!r})"

    @property
    def is_valid(self) -> bool:
        return False

    @property
    def stages(self) -> tuple[Command, ...]:
        return ()

    def pipe(
        self,
        executable: str,
        *arguments: str,
        options: CommandOptions | None = None,
    ) -> Pipeline:
        return self

    def pipe_to(self, other: Pipeline) -> Pipeline:
        return self

    def cached(self) -> Pipeline:
        return self

    def to_command_string(self) -> str:
        return ""

    async def execute(self, cancel: asyncio.Event | None = None) -> ExecutionResult:
        logger.debug("Skipping execution of invalid pipeline: %s", self.reason)
        return ExecutionResult(exit_code=INVALID_PIPELINE_EXIT_CODE)

    async def execute_interactive(self, cancel: asyncio.Event | None = None) -> ExecutionResult:
        return await self.execute(cancel)

    async def get_string_interactive(self, cancel: asyncio.Event | None = None) -> str:
        return ""


def build_pipeline(
    executable: str,
    arguments: Sequence[str] | None = None,
    options: CommandOptions | None = _DEFAULT_OPTIONS,
    standard_input: str | None = None,
    *,
    runner: PipelineRunner | None = None,
) -> Pipeline:
    """Build a single-stage pipeline.

    Never raises: an empty executable or missing options yields an InvalidPipeline.

    Args:
        executable: Command name (resolved through the path registry) or path
        arguments: Arguments passed verbatim, no shell parsing
        options: Working directory, environment and validation settings
        standard_input: Text fed to the process's stdin
        runner: Runner used for execution (defaults to AsyncioPipelineRunner)
    """
    if not executable or not executable.strip():
        return InvalidPipeline("Executable name is empty")
    if options is None:
        return InvalidPipeline(f"No options given for '{executable}'")

    command = _create_command(executable, arguments or (), options, standard_input)
    return CommandPipeline([command], runner=runner)


def run(executable: str, *arguments: str, options: CommandOptions | None = _DEFAULT_OPTIONS) -> Pipeline:
    """Shorthand for build_pipeline(executable, arguments, options).

    Example:
        >>> lines = await run("git", "branch", "--list").pipe("grep", "feature").get_lines()
    """
    return build_pipeline(executable, arguments, options)


def split_lines(text: str) -> list[str]:
    """Split on \\n or \\r\\n, dropping only the empty segment after a trailing newline."""
    lines = [line.removesuffix("\r") for line in text.split("\n")]
    if lines[-1] == "":
        lines.pop()
    return lines


def _create_command(
    executable: str,
    arguments: Sequence[str],
    options: CommandOptions,
    standard_input: str | None,
) -> Command:
    resolved = resolve_command_path(executable)
    if resolved != executable:
        logger.debug("Resolved command '%s' to '%s'", executable, resolved)

    hooked_arguments = get_script_hook_registry().apply(resolved, [str(arg) for arg in arguments])
    return Command(
        executable=resolved,
        arguments=tuple(hooked_arguments),
        options=options,
        standard_input=standard_input,
    )
