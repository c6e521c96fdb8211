"""Fluent builder for ghq (remote repository manager).

Translates ghq verbs into an argument list:
    ghq <sub-command> <sub-command flags...> <repository> <global flags...>
"""

from collections.abc import Callable
from typing import Self

from cmdflow.builders.base import CommandBuilder
from cmdflow.builders.fzf import FzfBuilder
from cmdflow.core.pipeline import Pipeline
from cmdflow.core.runner import PipelineRunner

GHQ_EXECUTABLE = "ghq"


class GhqBuilder(CommandBuilder):
    """Builder for `ghq` sub-commands.

    Example:
        >>> await ghq().list().with_full_path().get_lines()
    """

    def __init__(self, *, runner: PipelineRunner | None = None) -> None:
        super().__init__(runner=runner)
        self._sub_command: str | None = None
        self._sub_command_arguments: list[str] = []
        self._repository: str | None = None
        self._arguments: list[str] = []

    def build(self) -> Pipeline:
        arguments: list[str] = []
        if self._sub_command:
            arguments.append(self._sub_command)
        arguments.extend(self._sub_command_arguments)
        if self._repository:
            arguments.append(self._repository)
        arguments.extend(self._arguments)
        return self._build_command(GHQ_EXECUTABLE, arguments)

    def with_arguments(self, *arguments: str) -> Self:
        """Append raw global arguments after the sub-command and repository."""
        self._arguments.extend(arguments)
        return self

    # list

    def list(self) -> Self:
        """List local repositories."""
        self._sub_command = "list"
        return self

    def with_exact(self) -> Self:
        self._sub_command_arguments.append("--exact")
        return self

    def filter_by_vcs(self, vcs: str) -> Self:
        self._sub_command_arguments.extend(["--vcs", vcs])
        return self

    def with_full_path(self) -> Self:
        self._sub_command_arguments.append("--full-path")
        return self

    def with_unique(self) -> Self:
        self._sub_command_arguments.append("--unique")
        return self

    # get / clone

    def get(self, repository: str) -> Self:
        """Clone or sync a remote repository (e.g. 'github.com/user/repo')."""
        self._sub_command = "get"
        self._repository = repository
        return self

    def clone(self, repository: str) -> Self:
        return self.get(repository)

    def with_look(self) -> Self:
        self._sub_command_arguments.append("--look")
        return self

    def with_update(self) -> Self:
        self._sub_command_arguments.append("--update")
        return self

    def with_shallow(self) -> Self:
        self._sub_command_arguments.append("--shallow")
        return self

    def with_branch(self, branch: str) -> Self:
        self._sub_command_arguments.extend(["--branch", branch])
        return self

    def with_bare(self) -> Self:
        self._sub_command_arguments.append("--bare")
        return self

    def with_no_recursive(self) -> Self:
        self._sub_command_arguments.append("--no-recursive")
        return self

    def with_silent(self) -> Self:
        self._sub_command_arguments.append("--silent")
        return self

    def with_parallel(self) -> Self:
        self._sub_command_arguments.append("--parallel")
        return self

    def with_vcs(self, vcs: str) -> Self:
        self._sub_command_arguments.extend(["--vcs", vcs])
        return self

    # root

    def root(self) -> Self:
        """Show the repositories root."""
        self._sub_command = "root"
        return self

    def with_all(self) -> Self:
        self._sub_command_arguments.append("--all")
        return self

    # create

    def create(self, repository: str) -> Self:
        """Create a new local repository."""
        self._sub_command = "create"
        self._repository = repository
        return self

    # rm

    def remove(self, repository: str) -> Self:
        self._sub_command = "rm"
        self._repository = repository
        return self

    def rm(self, repository: str) -> Self:
        return self.remove(repository)

    def with_dry_run(self) -> Self:
        self._sub_command_arguments.append("--dry-run")
        return self

    # composition

    def pipe_to(self, executable: str, *arguments: str) -> Pipeline:
        """Pipe this ghq command's output into another command."""
        return self.build().pipe(executable, *arguments)

    def select_with_fzf(self, configure_fzf: Callable[[FzfBuilder], object] | None = None) -> Pipeline:
        """Pipe repository output into fzf, optionally configured by configure_fzf."""
        fzf_builder = FzfBuilder(runner=self._runner)
        if configure_fzf is not None:
            configure_fzf(fzf_builder)
        return self.build().pipe_to(fzf_builder.build())


def ghq(*, runner: PipelineRunner | None = None) -> GhqBuilder:
    return GhqBuilder(runner=runner)
