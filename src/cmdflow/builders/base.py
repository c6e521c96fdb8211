"""Shared fluent-builder contract.

Builders are mutable and owned by a single caller. Every configuration method
returns the same instance so calls can be chained. build() produces a Pipeline.
"""

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Self

from cmdflow.core.options import CommandOptions
from cmdflow.core.pipeline import Pipeline, build_pipeline
from cmdflow.core.result import ExecutionResult
from cmdflow.core.runner import PipelineRunner


class CommandBuilder(ABC):
    """Base class for fluent builders.

    Subclasses translate their configuration into an argument list and call
    _build_command() from build().
    """

    def __init__(self, *, runner: PipelineRunner | None = None) -> None:
        self._options = CommandOptions()
        self._runner = runner

    @abstractmethod
    def build(self) -> Pipeline:
        """Assemble the configured command into a Pipeline."""
        ...

    def with_working_directory(self, directory: str | Path) -> Self:
        self._options = self._options.with_working_directory(directory)
        return self

    def with_environment_variable(self, key: str, value: str | None) -> Self:
        """Set one environment variable. None removes it from the child's environment."""
        self._options = self._options.with_environment_variable(key, value)
        return self

    def with_environment_variables(self, variables: Mapping[str, str | None]) -> Self:
        for key, value in variables.items():
            self._options = self._options.with_environment_variable(key, value)
        return self

    def with_no_validation(self) -> Self:
        """Report non-zero exit codes in the result instead of raising."""
        self._options = self._options.with_no_validation()
        return self

    def pipe(self, executable: str, *arguments: str) -> Pipeline:
        return self.build().pipe(executable, *arguments)

    async def execute(self, cancel: asyncio.Event | None = None) -> ExecutionResult:
        return await self.build().execute(cancel)

    async def get_string(self, cancel: asyncio.Event | None = None) -> str:
        return await self.build().get_string(cancel)

    async def get_lines(self, cancel: asyncio.Event | None = None) -> list[str]:
        return await self.build().get_lines(cancel)

    async def execute_interactive(self, cancel: asyncio.Event | None = None) -> ExecutionResult:
        return await self.build().execute_interactive(cancel)

    async def get_string_interactive(self, cancel: asyncio.Event | None = None) -> str:
        return await self.build().get_string_interactive(cancel)

    def _build_command(
        self,
        executable: str,
        arguments: Sequence[str],
        standard_input: str | None = None,
    ) -> Pipeline:
        return build_pipeline(
            executable,
            arguments,
            self._options,
            standard_input,
            runner=self._runner,
        )
