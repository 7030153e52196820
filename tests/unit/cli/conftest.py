"""Shared fixtures for CLI unit tests."""

from unittest.mock import MagicMock

import pytest
from typer.testing import CliRunner


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture(autouse=True)
def mock_configure_logging(monkeypatch: pytest.MonkeyPatch) -> MagicMock:
    """Keep the commands from replacing the loguru handlers of the test session."""
    mock = MagicMock()
    monkeypatch.setattr("orca.cli.samples.configure_logging", mock)
    return mock
