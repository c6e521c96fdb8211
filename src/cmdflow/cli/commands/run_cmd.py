"""`cmdflow run`: build and execute a pipeline from the command line."""

import asyncio
import logging
import shlex
from pathlib import Path
from typing import NoReturn

import click
from rich.console import Console

from cmdflow.cli.context import CmdflowContext
from cmdflow.cli.json_output import ExecutionResultResponse, emit_json, emit_json_error
from cmdflow.core.options import CommandOptions
from cmdflow.core.pipeline import InvalidPipeline, Pipeline, build_pipeline, split_lines
from cmdflow.core.result import ExecutionResult
from cmdflow.errors import CommandCancelledError, CommandFailedError, CommandResolutionError

logger = logging.getLogger(__name__)

CANCELLED_EXIT_CODE = 130
RESOLUTION_FAILURE_EXIT_CODE = 127


@click.command(
    "run",
    context_settings={"ignore_unknown_options": True, "allow_interspersed_args": False},
)
@click.option("--pipe", "pipe_stages", multiple=True, help="Append a stage, e.g. --pipe 'grep foo'.")
@click.option(
    "--cwd",
    type=click.Path(file_okay=False, path_type=Path),
    help="Working directory for every stage.",
)
@click.option("--env", "env_pairs", multiple=True, help="Environment override KEY=VALUE.")
@click.option("--stdin", "standard_input", help="Text fed to the first stage's stdin.")
@click.option("--no-validation", is_flag=True, help="Report non-zero exit codes instead of failing.")
@click.option("--lines", is_flag=True, help="Print stdout line by line.")
@click.option("--timeout", type=float, help="Cancel the pipeline after this many seconds.")
@click.option("--dry-run", is_flag=True, help="Print the command string without running it.")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json", "rich"]),
    default="text",
    help="Output format.",
)
@click.argument("executable")
@click.argument("arguments", nargs=-1, type=click.UNPROCESSED)
@click.pass_obj
def run_cmd(
    ctx: CmdflowContext,
    pipe_stages: tuple[str, ...],
    cwd: Path | None,
    env_pairs: tuple[str, ...],
    standard_input: str | None,
    no_validation: bool,
    lines: bool,
    timeout: float | None,
    dry_run: bool,
    output_format: str,
    executable: str,
    arguments: tuple[str, ...],
) -> None:
    """Run EXECUTABLE with ARGUMENTS, optionally piped through more stages.

    Options must come before EXECUTABLE; everything after it is passed through.
    """
    options = _build_options(cwd, env_pairs, no_validation)
    pipeline = build_pipeline(executable, arguments, options, standard_input, runner=ctx.runner)
    for stage in pipe_stages:
        pipeline = _append_stage(pipeline, stage, options)

    if isinstance(pipeline, InvalidPipeline):
        _fail(f"Invalid command: {pipeline.reason}", "InvalidPipeline", 2, output_format)

    command_string = pipeline.to_command_string()
    if dry_run:
        click.echo(command_string)
        return

    try:
        result = asyncio.run(_execute(pipeline, timeout))
    except CommandFailedError as e:
        _fail(str(e), type(e).__name__, _clamp_exit_code(e.exit_code), output_format)
    except CommandCancelledError as e:
        _fail(str(e), type(e).__name__, CANCELLED_EXIT_CODE, output_format)
    except CommandResolutionError as e:
        _fail(str(e), type(e).__name__, RESOLUTION_FAILURE_EXIT_CODE, output_format)

    _emit_result(command_string, result, output_format, lines)
    if result.exit_code != 0:
        raise SystemExit(_clamp_exit_code(result.exit_code))


async def _execute(pipeline: Pipeline, timeout: float | None) -> ExecutionResult:
    cancel = asyncio.Event()
    handle: asyncio.TimerHandle | None = None
    if timeout is not None:
        handle = asyncio.get_running_loop().call_later(timeout, cancel.set)
    try:
        return await pipeline.execute(cancel)
    finally:
        if handle is not None:
            handle.cancel()


def _build_options(
    cwd: Path | None,
    env_pairs: tuple[str, ...],
    no_validation: bool,
) -> CommandOptions:
    options = CommandOptions()
    if cwd is not None:
        options = options.with_working_directory(cwd)
    for pair in env_pairs:
        key, separator, value = pair.partition("=")
        if not separator or not key:
            raise click.BadParameter(f"Expected KEY=VALUE, got '{pair}'", param_hint="--env")
        options = options.with_environment_variable(key, value)
    if no_validation:
        options = options.with_no_validation()
    return options


def _append_stage(pipeline: Pipeline, stage: str, options: CommandOptions) -> Pipeline:
    try:
        parts = shlex.split(stage)
    except ValueError as e:
        raise click.BadParameter(f"Cannot parse stage '{stage}': {e}", param_hint="--pipe") from e
    if not parts:
        return InvalidPipeline("Pipe stage is empty")
    return pipeline.pipe(parts[0], *parts[1:], options=options)


def _emit_result(command: str, result: ExecutionResult, output_format: str, lines: bool) -> None:
    if output_format == "json":
        emit_json(ExecutionResultResponse.from_result(command, result).model_dump(mode="json"))
        return

    if output_format == "rich":
        result.write_to_console(Console())
        return

    if lines:
        for line in split_lines(result.stdout):
            click.echo(line)
    elif result.stdout:
        click.echo(result.stdout, nl=False)
    if result.stderr:
        click.echo(result.stderr, err=True, nl=False)


def _fail(message: str, error_type: str, exit_code: int, output_format: str) -> NoReturn:
    logger.debug("run failed with %s (exit %d)", error_type, exit_code)
    if output_format == "json":
        emit_json_error(message, error_type, exit_code)
    click.echo(f"Error: {message}", err=True)
    raise SystemExit(exit_code)


def _clamp_exit_code(exit_code: int) -> int:
    # Negative codes mean "killed by signal"; shells report those as 128 + signal
    if exit_code < 0:
        return min(128 - exit_code, 255)
    return min(exit_code, 255) or 1
