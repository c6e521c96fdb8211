"""Per-extension argument hooks for script-like executables.

Some executables are scripts run through an interpreter that parses its own
flags before the script's (e.g. `dotnet run app.cs --help` would show dotnet's
help). A hook rewrites the user's arguments for executables with a matching
extension, typically by inserting a literal "--" separator.
"""

import threading
from collections.abc import Callable, Sequence
from pathlib import PurePath

ArgumentHook = Callable[[Sequence[str]], list[str]]

ARGUMENT_SEPARATOR = "--"


def insert_argument_separator(arguments: Sequence[str]) -> list[str]:
    """Prefix arguments with "--" so the interpreter leaves them alone."""
    return [ARGUMENT_SEPARATOR, *arguments]


DEFAULT_HOOKS: dict[str, ArgumentHook] = {
    ".cs": insert_argument_separator,
}


class ScriptHookRegistry:
    """Thread-safe mapping from lower-cased file extension to argument hook."""

    def __init__(self, hooks: dict[str, ArgumentHook] | None = None) -> None:
        self._lock = threading.Lock()
        self._hooks: dict[str, ArgumentHook] = {}
        for extension, hook in (hooks or {}).items():
            self._hooks[_normalize_extension(extension)] = hook

    def register(self, extension: str, hook: ArgumentHook) -> None:
        """Register a hook for an extension such as ".ps1" (case-insensitive)."""
        key = _normalize_extension(extension)
        with self._lock:
            self._hooks[key] = hook

    def unregister(self, extension: str) -> None:
        key = _normalize_extension(extension)
        with self._lock:
            self._hooks.pop(key, None)

    def reset(self) -> None:
        """Restore the default hooks."""
        with self._lock:
            self._hooks = dict(DEFAULT_HOOKS)

    def extensions(self) -> list[str]:
        with self._lock:
            return sorted(self._hooks)

    def apply(self, executable: str, arguments: Sequence[str]) -> list[str]:
        """Return arguments rewritten by the hook matching executable's extension."""
        suffix = PurePath(executable).suffix.lower()
        if not suffix:
            return list(arguments)

        with self._lock:
            hook = self._hooks.get(suffix)

        if hook is None:
            return list(arguments)
        return hook(arguments)


def _normalize_extension(extension: str) -> str:
    if not extension or extension == ".":
        raise ValueError("Extension must be a non-empty string such as '.cs'")
    extension = extension.lower()
    if not extension.startswith("."):
        extension = f".{extension}"
    return extension


_hooks = ScriptHookRegistry(DEFAULT_HOOKS)


def get_script_hook_registry() -> ScriptHookRegistry:
    return _hooks


def register_script_hook(extension: str, hook: ArgumentHook = insert_argument_separator) -> None:
    _hooks.register(extension, hook)


def unregister_script_hook(extension: str) -> None:
    _hooks.unregister(extension)


def reset_script_hooks() -> None:
    _hooks.reset()
