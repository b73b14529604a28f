"""Pytest configuration and shared fixtures."""

import pytest
from smack.config import setup_logging
from smack.models import RemoteServerRecord


@pytest.fixture(scope="session", autouse=True)
def configure_logging():
    """Configure logging for all tests with consistent format."""
    setup_logging("INFO")


@pytest.fixture
def remote_server():
    """A fully configured remote server record."""
    return RemoteServerRecord(
        id="0f8fad5bd9cb469fa16570867728950e",
        name="Living Room",
        server_url="https://example.com",
        api_key="test-key",
        remote_user_id="user-1",
    )
