"""Fixtures for persistence tests."""

from unittest.mock import MagicMock

import pytest

from infrastructure.persistence import DynamoDBProfileRepository, InMemoryProfileRepository


@pytest.fixture
def memory_repository():
    return InMemoryProfileRepository()


@pytest.fixture
def mock_dynamodb_client():
    client = MagicMock()
    client.get_item.return_value = {}
    client.update_item.return_value = {}
    return client


@pytest.fixture
def dynamodb_repository(mock_dynamodb_client):
    return DynamoDBProfileRepository("user_profiles", client=mock_dynamodb_client)
