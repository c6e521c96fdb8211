"""Tests for config loading, saving and applying."""

from pathlib import Path

import pytest

from cmdflow.core.config import (
    CONFIG_ENV_VAR,
    CmdflowConfig,
    FilesystemConfigOps,
    InMemoryConfigOps,
    apply_config,
)
from cmdflow.core.paths import CommandPathRegistry
from cmdflow.core.script_hooks import ScriptHookRegistry


def test_filesystem_round_trip(tmp_path: Path) -> None:
    ops = FilesystemConfigOps(tmp_path / "nested" / "config.toml")
    config = CmdflowConfig(
        command_paths={"fzf": "/tmp/mock bin/fzf", "git": 'C:\\Tools\\"git".exe'},
        separator_extensions=(".cs", ".ps1"),
    )

    ops.save(config)

    assert ops.exists()
    assert ops.load() == config


def test_load_missing_file_raises(tmp_path: Path) -> None:
    ops = FilesystemConfigOps(tmp_path / "config.toml")

    assert ops.exists() is False
    with pytest.raises(FileNotFoundError):
        ops.load()


def test_load_or_default_without_file(tmp_path: Path) -> None:
    ops = FilesystemConfigOps(tmp_path / "config.toml")

    assert ops.load_or_default() == CmdflowConfig()


def test_invalid_toml_raises_value_error(tmp_path: Path) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text("[paths\n", encoding="utf-8")

    with pytest.raises(ValueError, match="Invalid TOML"):
        FilesystemConfigOps(config_path).load()


def test_non_string_path_raises_value_error(tmp_path: Path) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text("[paths]\nfzf = 3\n", encoding="utf-8")

    with pytest.raises(ValueError, match="'paths'"):
        FilesystemConfigOps(config_path).load()


def test_non_list_extensions_raise_value_error(tmp_path: Path) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text('separator_extensions = ".cs"\n', encoding="utf-8")

    with pytest.raises(ValueError, match="separator_extensions"):
        FilesystemConfigOps(config_path).load()


def test_path_from_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config_path = tmp_path / "custom.toml"
    monkeypatch.setenv(CONFIG_ENV_VAR, str(config_path))

    assert FilesystemConfigOps().path() == config_path


def test_default_path_under_home(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)

    assert FilesystemConfigOps().path() == Path.home() / ".cmdflow" / "config.toml"


def test_in_memory_ops() -> None:
    ops = InMemoryConfigOps()
    assert ops.exists() is False
    with pytest.raises(FileNotFoundError):
        ops.load()

    config = CmdflowConfig(command_paths={"a": "/a"})
    ops.save(config)

    assert ops.load() is config


def test_apply_config_populates_registries() -> None:
    registry = CommandPathRegistry()
    hooks = ScriptHookRegistry()
    config = CmdflowConfig(command_paths={"fzf": "/tmp/fzf"}, separator_extensions=("ps1",))

    apply_config(config, registry, hooks)

    assert registry.resolve("fzf") == "/tmp/fzf"
    assert hooks.apply("deploy.ps1", ["-x"]) == ["--", "-x"]


def test_save_preserves_existing_comments_and_keys(tmp_path: Path) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text("# my settings\nunrelated = true\n", encoding="utf-8")
    ops = FilesystemConfigOps(config_path)

    ops.save(CmdflowConfig(command_paths={"fzf": "/tmp/fzf"}))

    text = config_path.read_text(encoding="utf-8")
    assert "# my settings" in text
    assert "unrelated = true" in text
    assert ops.load().command_paths == {"fzf": "/tmp/fzf"}
