"""Tests for CommandOptions."""

from pathlib import Path

from cmdflow.core.options import CommandOptions


def test_defaults() -> None:
    options = CommandOptions()

    assert options.working_directory is None
    assert options.environment == {}
    assert options.validation is True


def test_with_methods_do_not_mutate_original() -> None:
    original = CommandOptions()

    changed = (
        original.with_working_directory("/tmp")
        .with_environment_variable("FOO", "bar")
        .with_no_validation()
    )

    assert original == CommandOptions()
    assert changed.working_directory == Path("/tmp")
    assert changed.environment == {"FOO": "bar"}
    assert changed.validation is False


def test_environment_last_write_wins() -> None:
    options = CommandOptions().with_environment_variable("A", "1").with_environment_variable("A", "2")

    assert options.environment == {"A": "2"}


def test_with_environment_variables_replaces_mapping() -> None:
    options = CommandOptions().with_environment_variable("OLD", "x")

    replaced = options.with_environment_variables({"NEW": "y"})

    assert replaced.environment == {"NEW": "y"}


def test_build_environment_without_overrides_inherits() -> None:
    assert CommandOptions().build_environment({"PATH": "/bin"}) is None


def test_build_environment_merges_and_removes() -> None:
    options = (
        CommandOptions()
        .with_environment_variable("ADDED", "1")
        .with_environment_variable("PATH", "/custom")
        .with_environment_variable("HOME", None)
    )

    env = options.build_environment({"PATH": "/bin", "HOME": "/root", "KEEP": "k"})

    assert env == {"PATH": "/custom", "KEEP": "k", "ADDED": "1"}
