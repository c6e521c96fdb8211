"""Tests for ExecutionResult rendering."""

from datetime import UTC, datetime, timedelta
from io import StringIO

from rich.console import Console

from cmdflow.core.result import ExecutionResult

START = datetime(2024, 1, 1, 12, 0, 0, tzinfo=UTC)


def _result(exit_code: int, stdout: str = "", stderr: str = "") -> ExecutionResult:
    return ExecutionResult(
        exit_code=exit_code,
        stdout=stdout,
        stderr=stderr,
        start_time=START,
        exit_time=START + timedelta(milliseconds=1500),
    )


def test_success_and_run_time() -> None:
    result = _result(0)

    assert result.success is True
    assert result.run_time == timedelta(milliseconds=1500)


def test_run_time_is_zero_without_exit_time() -> None:
    assert ExecutionResult(exit_code=1).run_time == timedelta(0)


def test_str_shows_status_exit_code_and_runtime() -> None:
    assert str(_result(0)) == "[Success] Exit: 0, Runtime: 1.50s"
    assert str(_result(2)) == "[Failed] Exit: 2, Runtime: 1.50s"


def test_to_summary_reports_output_size() -> None:
    assert _result(0, stdout="abcd").to_summary() == "Exit: 0 | Runtime: 1.50s | Output: 4 chars"


def test_to_detailed_string_includes_sections() -> None:
    detailed = _result(1, stdout="out", stderr="err").to_detailed_string()

    assert detailed.startswith("=== Execution Result ===\nStatus: FAILED\nExit Code: 1\n")
    assert "Standard Output:\nout" in detailed
    assert "Standard Error:\nerr" in detailed
    assert detailed.endswith("\n")


def test_to_detailed_string_omits_empty_sections() -> None:
    detailed = _result(0).to_detailed_string()

    assert "Standard Output" not in detailed
    assert "Standard Error" not in detailed


def test_write_to_console_prints_status_and_output() -> None:
    buffer = StringIO()
    console = Console(file=buffer, force_terminal=False, width=120)

    _result(0, stdout="hello", stderr="warning").write_to_console(console)

    output = buffer.getvalue()
    assert "[SUCCESS] Exit Code: 0" in output
    assert "hello" in output
    assert "warning" in output
