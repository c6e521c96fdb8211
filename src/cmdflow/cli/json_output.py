"""JSON output for `--format json`.

Data goes to stdout, human-facing messages to stderr.
"""

import json
from typing import Any

import click
from pydantic import BaseModel, ConfigDict, Field

from cmdflow.core.pipeline import split_lines
from cmdflow.core.result import ExecutionResult


class ExecutionResultResponse(BaseModel):
    """Pydantic model for a finished pipeline.

    Attributes:
        command: Rendered command string
        exit_code: Exit code of the terminal stage
        success: True when exit_code is 0
        stdout: Captured standard output
        stderr: Captured standard error
        lines: stdout split into lines
        run_time_seconds: Wall-clock duration
    """

    model_config = ConfigDict(strict=True)

    command: str
    exit_code: int
    success: bool
    stdout: str
    stderr: str
    lines: list[str]
    run_time_seconds: float = Field(ge=0)

    @classmethod
    def from_result(cls, command: str, result: ExecutionResult) -> "ExecutionResultResponse":
        return cls(
            command=command,
            exit_code=result.exit_code,
            success=result.success,
            stdout=result.stdout,
            stderr=result.stderr,
            lines=split_lines(result.stdout),
            run_time_seconds=max(result.run_time.total_seconds(), 0.0),
        )


class ErrorResponse(BaseModel):
    """Pydantic model for error JSON responses.

    Attributes:
        error: Error message
        error_type: Error class name (e.g., "CommandFailedError")
        exit_code: Exit code for the process
    """

    model_config = ConfigDict(strict=True)

    error: str
    error_type: str
    exit_code: int = Field(default=1, ge=0, le=255)


def emit_json(data: dict[str, Any]) -> None:
    click.echo(json.dumps(data, indent=2))


def emit_json_error(error: str, error_type: str, exit_code: int = 1) -> None:
    """Output error as JSON and exit.

    Raises:
        SystemExit: Always raises to terminate with specified exit code
    """
    error_response = ErrorResponse(error=error, error_type=error_type, exit_code=exit_code)
    emit_json(error_response.model_dump(mode="json"))
    raise SystemExit(exit_code)
