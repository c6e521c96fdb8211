"""Process-wide command path overrides.

Maps a logical command name (e.g. "fzf", "git") to the executable path that
should be spawned instead. Used to point commands at mock executables in tests
or at non-PATH installations.

Architecture:
- CommandPathRegistry: lock-guarded registry, exposes only named operations
- Standalone functions: convenience wrappers delegating to the module singleton
"""

import threading


class CommandPathRegistry:
    """Thread-safe mapping from command name to override path.

    Every operation acquires the same lock, so concurrent writers never lose
    updates and readers never observe a half-applied change.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._paths: dict[str, str] = {}

    def set_path(self, name: str, path: str) -> None:
        """Register or replace the override for a command.

        Args:
            name: Command name as passed to run() (case-sensitive)
            path: Executable path to spawn instead

        Raises:
            ValueError: If name or path is empty or None
        """
        if not name:
            raise ValueError("Command name must be a non-empty string")
        if not path:
            raise ValueError(f"Path for command '{name}' must be a non-empty string")

        with self._lock:
            self._paths[name] = path

    def clear_path(self, name: str) -> None:
        """Remove the override for a command. No-op when none is set."""
        with self._lock:
            self._paths.pop(name, None)

    def reset(self) -> None:
        """Remove every override."""
        with self._lock:
            self._paths.clear()

    def has_override(self, name: str) -> bool:
        with self._lock:
            return name in self._paths

    def resolve(self, name: str) -> str:
        """Return the override for name, or name itself when none is set."""
        with self._lock:
            return self._paths.get(name, name)

    def all_overrides(self) -> dict[str, str]:
        """Return a snapshot of all overrides, sorted by command name."""
        with self._lock:
            return dict(sorted(self._paths.items()))


_registry: CommandPathRegistry | None = None
_registry_lock = threading.Lock()


def get_command_path_registry() -> CommandPathRegistry:
    """Return the process-wide registry, creating it on first use."""
    global _registry
    if _registry is None:
        with _registry_lock:
            if _registry is None:
                _registry = CommandPathRegistry()
    return _registry


def set_command_path(name: str, path: str) -> None:
    """Override the executable path used for a command name.

    Example:
        >>> set_command_path("fzf", "/tmp/mock-bin/fzf")
    """
    get_command_path_registry().set_path(name, path)


def clear_command_path(name: str) -> None:
    get_command_path_registry().clear_path(name)


def reset_command_paths() -> None:
    get_command_path_registry().reset()


def has_command_path(name: str) -> bool:
    return get_command_path_registry().has_override(name)


def resolve_command_path(name: str) -> str:
    return get_command_path_registry().resolve(name)


def all_command_paths() -> dict[str, str]:
    return get_command_path_registry().all_overrides()
