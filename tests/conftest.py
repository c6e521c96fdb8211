"""Pytest configuration and fixtures."""

from collections.abc import Iterator

import pytest

from cmdflow.core.paths import reset_command_paths
from cmdflow.core.runner import FakePipelineRunner
from cmdflow.core.script_hooks import reset_script_hooks


@pytest.fixture(autouse=True)
def clean_registries() -> Iterator[None]:
    """Reset process-wide path overrides and script hooks around every test."""
    reset_command_paths()
    reset_script_hooks()
    yield
    reset_command_paths()
    reset_script_hooks()


@pytest.fixture
def fake_runner() -> FakePipelineRunner:
    """Create a fresh FakePipelineRunner returning exit 0 for everything."""
    return FakePipelineRunner()
