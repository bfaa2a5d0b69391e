"""Profile repository factory."""

from typing import TYPE_CHECKING

from infrastructure.persistence.dynamodb import DynamoDBProfileRepository
from infrastructure.persistence.memory import InMemoryProfileRepository
from infrastructure.persistence.repository import ProfileRepository

if TYPE_CHECKING:
    from infrastructure.configuration import Settings


def create_profile_repository(settings: "Settings") -> ProfileRepository:
    """Build the profile repository selected by ``PREFERENCES_PROFILE_BACKEND``.

    Args:
        settings: Application settings.

    Returns:
        ProfileRepository implementation.
    """
    if settings.preferences.PROFILE_BACKEND == "dynamodb":
        return DynamoDBProfileRepository(
            table_name=settings.preferences.PROFILE_TABLE,
            region=settings.aws.AWS_REGION,
            endpoint_url=settings.aws.ENDPOINT_URL,
        )
    return InMemoryProfileRepository()
