"""
Pytest configuration og shared fixtures.
"""

from unittest.mock import AsyncMock

import pytest

from bunker.config import Settings
from bunker.dependencies import reset_singletons
from bunker.models import CommandOutcome


@pytest.fixture(autouse=True)
def clean_singletons():
    """Automatically reset singletons before hver test."""
    reset_singletons()
    yield
    reset_singletons()


@pytest.fixture
def vault_settings():
    """Settings for a vault at /home/u/vault with Vault/Secret as mount directory."""
    return Settings(
        _env_file=None,
        base_directory="/home/u/vault",
        container_file="container.vc",
        mount_directory="Vault/Secret",
    )


@pytest.fixture
def outcome():
    """Factory for CommandOutcome instances."""

    def _make(exit_code: int = 0, stdout: str = "", stderr: str = "") -> CommandOutcome:
        return CommandOutcome(exit_code=exit_code, stdout=stdout, stderr=stderr)

    return _make


@pytest.fixture
def mock_runner():
    runner = AsyncMock()
    runner.run = AsyncMock()
    return runner
