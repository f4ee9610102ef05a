"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from main import create_app
from services.config_manager import ConfigManager


@pytest.fixture
def config_manager(tmp_path) -> ConfigManager:
    """ConfigManager backed by a temporary directory."""
    return ConfigManager(tmp_path / "config")


@pytest.fixture
def client(config_manager) -> TestClient:
    """Test client for an app wired to the temporary config."""
    return TestClient(create_app(config_manager))
