"""Fluent construction and execution of external commands and pipelines."""

from cmdflow.builders import FzfBuilder, GhqBuilder, RunBuilder, command, fzf, ghq
from cmdflow.core.command import Command
from cmdflow.core.options import CommandOptions
from cmdflow.core.paths import (
    all_command_paths,
    clear_command_path,
    has_command_path,
    reset_command_paths,
    resolve_command_path,
    set_command_path,
)
from cmdflow.core.pipeline import CommandPipeline, InvalidPipeline, Pipeline, build_pipeline, run
from cmdflow.core.result import ExecutionResult
from cmdflow.core.script_hooks import register_script_hook, unregister_script_hook
from cmdflow.errors import (
    CommandCancelledError,
    CommandError,
    CommandFailedError,
    CommandResolutionError,
)

__all__ = [
    "Command",
    "CommandCancelledError",
    "CommandError",
    "CommandFailedError",
    "CommandOptions",
    "CommandPipeline",
    "CommandResolutionError",
    "ExecutionResult",
    "FzfBuilder",
    "GhqBuilder",
    "InvalidPipeline",
    "Pipeline",
    "RunBuilder",
    "all_command_paths",
    "build_pipeline",
    "clear_command_path",
    "command",
    "fzf",
    "ghq",
    "has_command_path",
    "register_script_hook",
    "reset_command_paths",
    "resolve_command_path",
    "run",
    "set_command_path",
    "unregister_script_hook",
]
