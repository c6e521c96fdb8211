"""Outcome of running a pipeline."""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

from rich.console import Console
from rich.text import Text

# Shell convention for "command not found"; reported by invalid pipelines.
INVALID_PIPELINE_EXIT_CODE = 127


@dataclass(frozen=True)
class ExecutionResult:
    """Exit code and captured output of a pipeline's terminal stage.

    Attributes:
        exit_code: Exit code of the terminal stage (negative = killed by signal)
        stdout: Captured standard output (empty for interactive runs)
        stderr: Captured standard error (empty for interactive runs)
        start_time: When the first stage was spawned
        exit_time: When the last stage exited
    """

    exit_code: int
    stdout: str = ""
    stderr: str = ""
    start_time: datetime = field(default_factory=lambda: datetime.now(UTC))
    exit_time: datetime | None = None

    @property
    def success(self) -> bool:
        return self.exit_code == 0

    @property
    def run_time(self) -> timedelta:
        if self.exit_time is None:
            return timedelta(0)
        return self.exit_time - self.start_time

    def __str__(self) -> str:
        status = "Success" if self.success else "Failed"
        return f"[{status}] Exit: {self.exit_code}, Runtime: {self.run_time.total_seconds():.2f}s"

    def to_summary(self) -> str:
        """One-line summary: exit code, runtime and output size."""
        return (
            f"Exit: {self.exit_code} | Runtime: {self.run_time.total_seconds():.2f}s"
            f" | Output: {len(self.stdout)} chars"
        )

    def to_detailed_string(self) -> str:
        lines = [
            "=== Execution Result ===",
            f"Status: {'SUCCESS' if self.success else 'FAILED'}",
            f"Exit Code: {self.exit_code}",
            f"Runtime: {self.run_time}",
        ]
        if self.stdout:
            lines.extend(["", "Standard Output:", self.stdout])
        if self.stderr:
            lines.extend(["", "Standard Error:", self.stderr])
        return "\n".join(lines) + "\n"

    def write_to_console(self, console: Console | None = None) -> None:
        """Print status, stdout and stderr with colors."""
        if console is None:
            console = Console()

        status = "SUCCESS" if self.success else "FAILED"
        console.print(
            Text(f"[{status}] Exit Code: {self.exit_code}", style="green" if self.success else "red")
        )
        if self.stdout:
            console.print(Text(self.stdout))
        if self.stderr:
            console.print(Text(self.stderr, style="yellow"))
