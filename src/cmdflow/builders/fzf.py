"""Fluent builder for fzf (fuzzy finder).

fzf reads candidates on stdin. The builder can supply them as literal items
(fed as standard input), as a glob (`find . -name <glob>` piped in) or as an
input command piped in.
"""

import shlex
from collections.abc import Iterable
from typing import Self

from cmdflow.builders.base import CommandBuilder
from cmdflow.core.pipeline import InvalidPipeline, Pipeline
from cmdflow.core.runner import PipelineRunner

FZF_EXECUTABLE = "fzf"


class FzfBuilder(CommandBuilder):
    """Builder for `fzf` invocations.

    Example:
        >>> selected = await fzf().from_items(["a", "b"]).with_filter("a").get_string()
    """

    def __init__(self, *, runner: PipelineRunner | None = None) -> None:
        super().__init__(runner=runner)
        self._arguments: list[str] = []
        self._input_items: list[str] = []
        self._input_glob: str | None = None
        self._input_command: str | None = None

    def build(self) -> Pipeline:
        if self._input_items:
            return self._build_command(
                FZF_EXECUTABLE, self._arguments, standard_input="\n".join(self._input_items)
            )

        source: Pipeline | None = None
        if self._input_glob:
            source = self._build_command("find", [".", "-name", self._input_glob])
        elif self._input_command:
            parts = shlex.split(self._input_command)
            if not parts:
                return InvalidPipeline("fzf input command is empty")
            source = self._build_command(parts[0], parts[1:])

        if source is None:
            return self._build_command(FZF_EXECUTABLE, self._arguments)
        return source.pipe(FZF_EXECUTABLE, *self._arguments, options=self._options)

    # input sources

    def from_items(self, items: Iterable[str]) -> Self:
        """Offer items as candidates (one per line)."""
        self._input_items.extend(items)
        return self

    def from_glob(self, pattern: str) -> Self:
        self._input_glob = pattern
        return self

    def from_command(self, command_line: str) -> Self:
        """Pipe the output of command_line (split with shell quoting rules) into fzf."""
        self._input_command = command_line
        return self

    def with_arguments(self, *arguments: str) -> Self:
        self._arguments.extend(arguments)
        return self

    # search

    def with_exact(self) -> Self:
        self._arguments.append("--exact")
        return self

    def with_case_insensitive(self) -> Self:
        self._arguments.append("-i")
        return self

    def with_case_sensitive(self) -> Self:
        self._arguments.append("+i")
        return self

    def with_no_sort(self) -> Self:
        self._arguments.append("--no-sort")
        return self

    def with_tac(self) -> Self:
        self._arguments.append("--tac")
        return self

    def with_delimiter(self, delimiter: str) -> Self:
        self._arguments.append(f"--delimiter={delimiter}")
        return self

    def with_nth(self, nth: str) -> Self:
        self._arguments.append(f"--nth={nth}")
        return self

    def with_with_nth(self, with_nth: str) -> Self:
        self._arguments.append(f"--with-nth={with_nth}")
        return self

    # interface

    def with_multi(self, max_items: int | None = None) -> Self:
        self._arguments.append("--multi" if max_items is None else f"--multi={max_items}")
        return self

    def with_cycle(self) -> Self:
        self._arguments.append("--cycle")
        return self

    def with_bind(self, bindings: str) -> Self:
        self._arguments.append(f"--bind={bindings}")
        return self

    # layout

    def with_height(self, height: int) -> Self:
        self._arguments.append(f"--height={height}")
        return self

    def with_height_percent(self, percent: int) -> Self:
        self._arguments.append(f"--height={percent}%")
        return self

    def with_layout(self, layout: str) -> Self:
        self._arguments.append(f"--layout={layout}")
        return self

    def with_border(self, style: str | None = None) -> Self:
        self._arguments.append("--border" if style is None else f"--border={style}")
        return self

    def with_prompt(self, prompt: str) -> Self:
        self._arguments.append(f"--prompt={prompt}")
        return self

    def with_header(self, header: str) -> Self:
        self._arguments.append(f"--header={header}")
        return self

    def with_ansi(self) -> Self:
        self._arguments.append("--ansi")
        return self

    # preview

    def with_preview(self, preview_command: str) -> Self:
        self._arguments.append(f"--preview={preview_command}")
        return self

    def with_preview_window(self, options: str) -> Self:
        self._arguments.append(f"--preview-window={options}")
        return self

    # scripting

    def with_query(self, query: str) -> Self:
        self._arguments.append(f"--query={query}")
        return self

    def with_filter(self, query: str) -> Self:
        """Filter non-interactively and print matches (no UI)."""
        self._arguments.append(f"--filter={query}")
        return self

    def with_select_1(self) -> Self:
        self._arguments.append("--select-1")
        return self

    def with_exit_0(self) -> Self:
        self._arguments.append("--exit-0")
        return self

    def with_print_query(self) -> Self:
        self._arguments.append("--print-query")
        return self


def fzf(*, runner: PipelineRunner | None = None) -> FzfBuilder:
    return FzfBuilder(runner=runner)
