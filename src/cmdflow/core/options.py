"""Per-command execution options."""

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path


@dataclass(frozen=True)
class CommandOptions:
    """Immutable execution settings for a single command.

    Attributes:
        working_directory: Directory to start the process in (None = inherit)
        environment: Overrides applied on top of the inherited environment.
            A None value removes the variable from the child's environment.
        validation: Raise CommandFailedError on non-zero exit when True
    """

    working_directory: Path | None = None
    environment: dict[str, str | None] = field(default_factory=dict)
    validation: bool = True

    def with_working_directory(self, directory: str | Path) -> "CommandOptions":
        return replace(self, working_directory=Path(directory))

    def with_environment_variable(self, key: str, value: str | None) -> "CommandOptions":
        """Return options with one variable added or replaced (last write wins)."""
        environment = dict(self.environment)
        environment[key] = value
        return replace(self, environment=environment)

    def with_environment_variables(self, variables: Mapping[str, str | None]) -> "CommandOptions":
        """Return options whose overrides are replaced by variables."""
        return replace(self, environment=dict(variables))

    def with_no_validation(self) -> "CommandOptions":
        return replace(self, validation=False)

    def build_environment(self, base: Mapping[str, str]) -> dict[str, str] | None:
        """Merge the overrides onto base.

        Returns None when there are no overrides so the child simply inherits.
        """
        if not self.environment:
            return None

        merged = dict(base)
        for key, value in self.environment.items():
            if value is None:
                merged.pop(key, None)
            else:
                merged[key] = value
        return merged
