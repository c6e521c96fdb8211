"""Configuration data structures and loading.

Provides immutable config data loaded from ~/.cmdflow/config.toml (or the path
in $CMDFLOW_CONFIG). The config persists command path overrides and the file
extensions that get an argument separator inserted.

Example file:

    separator_extensions = [".cs", ".ps1"]

    [paths]
    fzf = "/tmp/mock-bin/fzf"
"""

import os
import tomllib
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path

import tomlkit
import tomlkit.exceptions

from cmdflow.core.paths import CommandPathRegistry, get_command_path_registry
from cmdflow.core.script_hooks import (
    ScriptHookRegistry,
    get_script_hook_registry,
    insert_argument_separator,
)

CONFIG_ENV_VAR = "CMDFLOW_CONFIG"


@dataclass(frozen=True)
class CmdflowConfig:
    """Immutable cmdflow configuration.

    Loaded once at the CLI entry point and applied to the process-wide registries.
    """

    command_paths: dict[str, str] = field(default_factory=dict)
    separator_extensions: tuple[str, ...] = ()


class ConfigOps(ABC):
    """Abstract interface for config persistence.

    Enables in-memory implementations for tests without touching the filesystem.
    """

    @abstractmethod
    def exists(self) -> bool: ...

    @abstractmethod
    def load(self) -> CmdflowConfig:
        """Load config.

        Raises:
            FileNotFoundError: If config doesn't exist
            ValueError: If config is malformed
        """
        ...

    @abstractmethod
    def save(self, config: CmdflowConfig) -> None: ...

    @abstractmethod
    def path(self) -> Path:
        """Path of the config file (for messages and debugging)."""
        ...

    def load_or_default(self) -> CmdflowConfig:
        if not self.exists():
            return CmdflowConfig()
        return self.load()


class FilesystemConfigOps(ConfigOps):
    """Production implementation reading and writing a TOML file."""

    def __init__(self, config_path: Path | None = None) -> None:
        self._config_path = config_path

    def exists(self) -> bool:
        return self.path().exists()

    def load(self) -> CmdflowConfig:
        config_path = self.path()

        if not config_path.exists():
            raise FileNotFoundError(f"Config not found at {config_path}")

        try:
            data = tomllib.loads(config_path.read_text(encoding="utf-8"))
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Invalid TOML in {config_path}: {e}") from e

        paths = data.get("paths", {})
        if not isinstance(paths, dict) or not all(
            isinstance(key, str) and isinstance(value, str) for key, value in paths.items()
        ):
            raise ValueError(f"'paths' in {config_path} must be a table of strings")

        extensions = data.get("separator_extensions", [])
        if not isinstance(extensions, list) or not all(isinstance(ext, str) for ext in extensions):
            raise ValueError(f"'separator_extensions' in {config_path} must be a list of strings")

        return CmdflowConfig(command_paths=dict(paths), separator_extensions=tuple(extensions))

    def save(self, config: CmdflowConfig) -> None:
        """Write config as TOML, creating the parent directory if needed.

        Preserves existing formatting and comments using tomlkit.

        Raises:
            PermissionError: If the directory or file cannot be written
            ValueError: If the existing file is not valid TOML
        """
        config_path = self.path()
        parent = config_path.parent

        try:
            parent.mkdir(parents=True, exist_ok=True)
        except PermissionError:
            raise PermissionError(
                f"Cannot create directory: {parent}\n"
                f"Check permissions or set {CONFIG_ENV_VAR} to a writable location."
            ) from None

        # Load existing file or create new document
        if config_path.exists():
            try:
                doc = tomlkit.parse(config_path.read_text(encoding="utf-8"))
            except tomlkit.exceptions.ParseError as e:
                raise ValueError(f"Invalid TOML in {config_path}: {e}") from e
        else:
            doc = tomlkit.document()
            doc.add(tomlkit.comment("cmdflow configuration"))

        doc["separator_extensions"] = list(config.separator_extensions)

        paths = tomlkit.table()
        for name, path in sorted(config.command_paths.items()):
            paths[name] = path
        doc["paths"] = paths

        try:
            config_path.write_text(tomlkit.dumps(doc), encoding="utf-8")
        except PermissionError:
            raise PermissionError(
                f"Cannot write to file: {config_path}\n"
                f"Make it writable (chmod 644 {config_path}) or set {CONFIG_ENV_VAR}."
            ) from None

    def path(self) -> Path:
        if self._config_path is not None:
            return self._config_path
        override = os.environ.get(CONFIG_ENV_VAR)
        if override:
            return Path(override).expanduser()
        return Path.home() / ".cmdflow" / "config.toml"


class InMemoryConfigOps(ConfigOps):
    """Test implementation that stores config in memory."""

    def __init__(self, config: CmdflowConfig | None = None) -> None:
        """Initialize in-memory config ops.

        Args:
            config: Initial config state (None = config doesn't exist)
        """
        self._config = config

    def exists(self) -> bool:
        return self._config is not None

    def load(self) -> CmdflowConfig:
        if self._config is None:
            raise FileNotFoundError(f"Config not found at {self.path()}")
        return self._config

    def save(self, config: CmdflowConfig) -> None:
        self._config = config

    def path(self) -> Path:
        return Path("/test/cmdflow/config.toml")


def apply_config(
    config: CmdflowConfig,
    registry: CommandPathRegistry | None = None,
    hooks: ScriptHookRegistry | None = None,
) -> None:
    """Load config into the process-wide (or given) registries."""
    if registry is None:
        registry = get_command_path_registry()
    if hooks is None:
        hooks = get_script_hook_registry()

    for name, path in config.command_paths.items():
        registry.set_path(name, path)
    for extension in config.separator_extensions:
        hooks.register(extension, insert_argument_separator)
