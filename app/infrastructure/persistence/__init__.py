"""Persistence layer for signed-in users' locale profiles.

Usage:
    from infrastructure.services import ProfileRepositoryDep

    result = repository.get_profile("user-123")
    if result.is_success:
        country = result.data.get("country_code")
"""

from infrastructure.persistence.dynamodb import DynamoDBProfileRepository
from infrastructure.persistence.factory import create_profile_repository
from infrastructure.persistence.memory import InMemoryProfileRepository
from infrastructure.persistence.repository import ProfileRepository

__all__ = [
    "ProfileRepository",
    "InMemoryProfileRepository",
    "DynamoDBProfileRepository",
    "create_profile_repository",
]
