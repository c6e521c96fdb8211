"""Tests for `cmdflow run`."""

import json

from click.testing import CliRunner

from cmdflow.cli.cli import cli
from cmdflow.cli.context import CmdflowContext
from cmdflow.core.config import CmdflowConfig
from cmdflow.core.result import ExecutionResult
from cmdflow.core.runner import FakePipelineRunner
from cmdflow.errors import CommandResolutionError


def test_run_prints_stdout() -> None:
    ctx = CmdflowContext.for_test(
        results={"echo hello": ExecutionResult(exit_code=0, stdout="hello\n")}
    )

    result = CliRunner().invoke(cli, ["run", "echo", "hello"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert result.output == "hello\n"


def test_run_passes_dashed_arguments_through() -> None:
    runner = FakePipelineRunner()
    ctx = CmdflowContext.for_test(runner=runner)

    result = CliRunner().invoke(cli, ["run", "git", "log", "--oneline", "-n", "3"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert runner.run_calls[0].command == "git log --oneline -n 3"


def test_run_with_pipe_stages() -> None:
    runner = FakePipelineRunner()
    ctx = CmdflowContext.for_test(runner=runner)

    result = CliRunner().invoke(
        cli, ["run", "--pipe", "grep 'a b'", "--pipe", "wc -l", "ls", "-la"], obj=ctx
    )

    assert result.exit_code == 0, result.output
    assert runner.run_calls[0].command == "ls -la | grep 'a b' | wc -l"


def test_dry_run_prints_command_without_running() -> None:
    runner = FakePipelineRunner()
    ctx = CmdflowContext.for_test(runner=runner)

    result = CliRunner().invoke(cli, ["run", "--dry-run", "--pipe", "sort", "cat", "my file"], obj=ctx)

    assert result.exit_code == 0
    assert result.output == "cat 'my file' | sort\n"
    assert runner.run_calls == []


def test_options_reach_the_command() -> None:
    runner = FakePipelineRunner()
    ctx = CmdflowContext.for_test(runner=runner)

    result = CliRunner().invoke(
        cli,
        ["run", "--cwd", "/tmp", "--env", "A=1", "--stdin", "data", "--no-validation", "cat"],
        obj=ctx,
    )

    assert result.exit_code == 0, result.output
    stage = runner.run_calls[0].stages[0]
    assert str(stage.options.working_directory) == "/tmp"
    assert stage.options.environment == {"A": "1"}
    assert stage.options.validation is False
    assert stage.standard_input == "data"


def test_env_without_equals_is_rejected() -> None:
    ctx = CmdflowContext.for_test()

    result = CliRunner().invoke(cli, ["run", "--env", "NOVALUE", "env"], obj=ctx)

    assert result.exit_code == 2
    assert "KEY=VALUE" in result.output


def test_empty_pipe_stage_is_invalid() -> None:
    ctx = CmdflowContext.for_test()

    result = CliRunner().invoke(cli, ["run", "--pipe", "  ", "ls"], obj=ctx)

    assert result.exit_code == 2
    assert "Invalid command" in result.output


def test_failed_command_exits_with_its_code() -> None:
    ctx = CmdflowContext.for_test(
        results={"false": ExecutionResult(exit_code=3, stderr="nope")}
    )

    result = CliRunner().invoke(cli, ["run", "false"], obj=ctx)

    assert result.exit_code == 3
    assert "Exit code: 3" in result.output
    assert "stderr: nope" in result.output


def test_failed_command_without_validation_prints_output() -> None:
    ctx = CmdflowContext.for_test(
        results={"grep x": ExecutionResult(exit_code=1, stdout="partial\n")}
    )

    result = CliRunner().invoke(cli, ["run", "--no-validation", "grep", "x"], obj=ctx)

    assert result.exit_code == 1
    assert "partial" in result.output


def test_resolution_failure_exits_127() -> None:
    runner = FakePipelineRunner(error=CommandResolutionError("nope", "nope", "not found"))
    ctx = CmdflowContext.for_test(runner=runner)

    result = CliRunner().invoke(cli, ["run", "nope"], obj=ctx)

    assert result.exit_code == 127
    assert "Command not found" in result.output


def test_lines_output() -> None:
    ctx = CmdflowContext.for_test(
        results={"ls": ExecutionResult(exit_code=0, stdout="a\r\nb\r\n")}
    )

    result = CliRunner().invoke(cli, ["run", "--lines", "ls"], obj=ctx)

    assert result.output == "a\nb\n"


def test_json_output() -> None:
    ctx = CmdflowContext.for_test(
        results={"ls": ExecutionResult(exit_code=0, stdout="a\nb\n")}
    )

    result = CliRunner().invoke(cli, ["run", "--format", "json", "ls"], obj=ctx)

    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["command"] == "ls"
    assert data["success"] is True
    assert data["lines"] == ["a", "b"]


def test_json_error_output() -> None:
    ctx = CmdflowContext.for_test(results={"false": ExecutionResult(exit_code=4)})

    result = CliRunner().invoke(cli, ["run", "--format", "json", "false"], obj=ctx)

    assert result.exit_code == 4
    data = json.loads(result.output)
    assert data["error_type"] == "CommandFailedError"
    assert data["exit_code"] == 4


def test_rich_output() -> None:
    ctx = CmdflowContext.for_test(results={"ls": ExecutionResult(exit_code=0, stdout="file\n")})

    result = CliRunner().invoke(cli, ["run", "--format", "rich", "ls"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "[SUCCESS] Exit Code: 0" in result.output
    assert "file" in result.output


def test_config_overrides_are_applied_before_running() -> None:
    runner = FakePipelineRunner()
    ctx = CmdflowContext.for_test(
        runner=runner,
        config=CmdflowConfig(command_paths={"fzf": "/tmp/mock-bin/fzf"}),
    )

    result = CliRunner().invoke(cli, ["run", "fzf", "--filter", "a"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert runner.run_calls[0].stages[0].executable == "/tmp/mock-bin/fzf"
