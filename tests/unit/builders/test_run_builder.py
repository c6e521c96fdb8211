"""Tests for the generic RunBuilder."""

from pathlib import Path

from cmdflow.builders import RunBuilder, command
from cmdflow.core.pipeline import InvalidPipeline
from cmdflow.core.result import ExecutionResult
from cmdflow.core.runner import FakePipelineRunner


def test_arguments_accumulate() -> None:
    pipeline = command("git").with_arguments("log").with_arguments("--oneline", "-5").build()

    assert pipeline.to_command_string() == "git log --oneline -5"


def test_options_flow_into_command() -> None:
    pipeline = (
        RunBuilder("make")
        .with_working_directory("/src")
        .with_environment_variable("CC", "clang")
        .with_environment_variables({"CFLAGS": "-O2", "LDFLAGS": None})
        .with_no_validation()
        .build()
    )

    options = pipeline.stages[0].options
    assert options.working_directory == Path("/src")
    assert options.environment == {"CC": "clang", "CFLAGS": "-O2", "LDFLAGS": None}
    assert options.validation is False


def test_standard_input_attached_to_stage() -> None:
    pipeline = command("cat").with_standard_input("hello").build()

    assert pipeline.stages[0].standard_input == "hello"


def test_empty_executable_builds_invalid_pipeline() -> None:
    assert isinstance(command("").with_arguments("x").build(), InvalidPipeline)


def test_pipe_shortcut() -> None:
    pipeline = command("ls").with_arguments("-1").pipe("wc", "-l")

    assert pipeline.to_command_string() == "ls -1 | wc -l"


async def test_get_lines_runs_through_runner() -> None:
    runner = FakePipelineRunner(
        results={"git branch": ExecutionResult(exit_code=0, stdout="main\nfeature\n")}
    )

    lines = await command("git", runner=runner).with_arguments("branch").get_lines()

    assert lines == ["main", "feature"]


async def test_execute_and_get_string_shortcuts(fake_runner: FakePipelineRunner) -> None:
    builder = command("true", runner=fake_runner)

    result = await builder.execute()
    text = await builder.get_string()

    assert result.exit_code == 0
    assert text == ""
    assert len(fake_runner.run_calls) == 2


async def test_interactive_shortcuts(fake_runner: FakePipelineRunner) -> None:
    builder = command("vim", runner=fake_runner)

    await builder.execute_interactive()
    await builder.get_string_interactive()

    assert [call.capture_stdout for call in fake_runner.run_calls] == [False, True]
