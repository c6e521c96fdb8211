"""CLI context for dependency injection."""

from dataclasses import dataclass

from cmdflow.core.config import CmdflowConfig, ConfigOps, FilesystemConfigOps, InMemoryConfigOps
from cmdflow.core.result import ExecutionResult
from cmdflow.core.runner import AsyncioPipelineRunner, FakePipelineRunner, PipelineRunner


@dataclass(frozen=True)
class CmdflowContext:
    """Context containing all dependencies of the CLI.

    Use for_test() for testing scenarios.
    """

    runner: PipelineRunner
    config_ops: ConfigOps

    @classmethod
    def for_test(
        cls,
        *,
        config: CmdflowConfig | None = None,
        results: dict[str, ExecutionResult] | None = None,
        runner: PipelineRunner | None = None,
    ) -> "CmdflowContext":
        """Create a test context with fake implementations.

        Args:
            config: Initial in-memory config (None = no config file)
            results: Pre-configured results for FakePipelineRunner
            runner: Runner to use instead of a FakePipelineRunner
        """
        return cls(
            runner=runner if runner is not None else FakePipelineRunner(results=results),
            config_ops=InMemoryConfigOps(config),
        )


def create_context() -> CmdflowContext:
    """Create the production context."""
    return CmdflowContext(runner=AsyncioPipelineRunner(), config_ops=FilesystemConfigOps())
