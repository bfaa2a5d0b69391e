"""Fixtures for identity tests."""

from unittest.mock import MagicMock

import pytest

from infrastructure.identity import SessionIdentityResolver

@pytest.fixture
def identity_resolver():
    return SessionIdentityResolver("test-secret-key")


@pytest.fixture
def make_request():
    """Factory for requests carrying headers and cookies."""

    def _factory(headers=None, cookies=None):
        request = MagicMock()
        request.headers = headers or {}
        request.cookies = cookies or {}
        return request

    return _factory
