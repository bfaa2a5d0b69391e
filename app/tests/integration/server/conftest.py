"""Fixtures for server integration tests."""

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def server_client():
    """Test client for the fully assembled application, lifespan included."""
    from server.server import handler

    with TestClient(handler) as client:
        yield client
