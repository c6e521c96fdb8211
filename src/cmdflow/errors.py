"""Exceptions raised by pipeline execution.

Construction never raises: malformed input produces an InvalidPipeline instead.
These exceptions only surface once a pipeline is executed.
"""


class CommandError(Exception):
    """Base class for every error raised while executing a pipeline."""


class CommandFailedError(CommandError):
    """Terminal stage exited non-zero while validation was enabled.

    Attributes:
        command: Rendered command string of the pipeline (diagnostic only)
        exit_code: Exit code of the terminal stage
        stdout: Captured standard output of the terminal stage
        stderr: Captured standard error of the terminal stage
    """

    def __init__(self, command: str, exit_code: int, stdout: str, stderr: str) -> None:
        self.command = command
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(_format_failure(command, exit_code, stdout, stderr))


class CommandCancelledError(CommandError):
    """Execution was aborted through the cancel event.

    Every process of the pipeline has been killed and reaped before this is raised.
    """

    def __init__(self, command: str) -> None:
        self.command = command
        super().__init__(f"Cancelled while running pipeline\nCommand: {command}")


class CommandResolutionError(CommandError):
    """An executable could not be started (not found, permission denied, bad cwd)."""

    def __init__(self, executable: str, command: str, reason: str) -> None:
        self.executable = executable
        self.command = command
        self.reason = reason
        super().__init__(
            f"Command not found or not executable: {executable}\n"
            f"Full command: {command}\n"
            f"Reason: {reason}"
        )


def _format_failure(command: str, exit_code: int, stdout: str, stderr: str) -> str:
    error_msg = "Failed to run pipeline"
    error_msg += f"\nCommand: {command}"
    error_msg += f"\nExit code: {exit_code}"

    stdout_stripped = stdout.strip()
    if stdout_stripped:
        error_msg += f"\nstdout: {stdout_stripped}"

    stderr_stripped = stderr.strip()
    if stderr_stripped:
        error_msg += f"\nstderr: {stderr_stripped}"

    return error_msg
