"""Single process invocation descriptor."""

import shlex
from collections.abc import Sequence
from dataclasses import dataclass, field

from cmdflow.core.options import CommandOptions


@dataclass(frozen=True)
class Command:
    """One stage of a pipeline.

    The executable is stored already resolved through the command path registry,
    and arguments already rewritten by any script hook. Instances are never
    mutated after construction.
    """

    executable: str
    arguments: tuple[str, ...] = ()
    options: CommandOptions = field(default_factory=CommandOptions)
    standard_input: str | None = None

    @property
    def argv(self) -> list[str]:
        return [self.executable, *self.arguments]

    def to_command_string(self) -> str:
        """Render as a shell-quoted string (diagnostics only, never executed)."""
        return " ".join(shlex.quote(token) for token in self.argv)


PIPE_SEPARATOR = " | "


def render_command_string(stages: Sequence[Command]) -> str:
    """Render stages as `stage | stage | ...` for logs and error messages."""
    return PIPE_SEPARATOR.join(stage.to_command_string() for stage in stages)
