"""Generic raw-arguments builder."""

from typing import Self

from cmdflow.builders.base import CommandBuilder
from cmdflow.core.pipeline import Pipeline
from cmdflow.core.runner import PipelineRunner


class RunBuilder(CommandBuilder):
    """Fluent builder for any executable.

    Example:
        >>> await command("git").with_arguments("status", "--short").get_lines()
    """

    def __init__(self, executable: str, *, runner: PipelineRunner | None = None) -> None:
        super().__init__(runner=runner)
        self._executable = executable
        self._arguments: list[str] = []
        self._standard_input: str | None = None

    def with_arguments(self, *arguments: str) -> Self:
        """Append arguments. Repeated calls accumulate."""
        self._arguments.extend(arguments)
        return self

    def with_standard_input(self, text: str) -> Self:
        self._standard_input = text
        return self

    def build(self) -> Pipeline:
        return self._build_command(self._executable, self._arguments, self._standard_input)


def command(executable: str, *, runner: PipelineRunner | None = None) -> RunBuilder:
    """Start a fluent builder for executable."""
    return RunBuilder(executable, runner=runner)
