"""User profile repository abstract base class."""

from abc import ABC, abstractmethod
from typing import Any, Dict

from infrastructure.operations import OperationResult


class ProfileRepository(ABC):
    """Abstract base class for user profile storage.

    Stores the locale fields of a signed-in user's profile
    (``country_code``, ``language_code``, ``updated_at``). Implementations
    never raise for backend failures; they return an error OperationResult.
    """

    @abstractmethod
    def get_profile(self, user_id: str) -> OperationResult:
        """Load a user's profile.

        Args:
            user_id: Authenticated user identifier.

        Returns:
            SUCCESS with the profile fields as a dict, NOT_FOUND when the user
            has no profile, or an error result.
        """
        pass

    @abstractmethod
    def update_profile(self, user_id: str, fields: Dict[str, Any]) -> OperationResult:
        """Create or update the given fields on a user's profile.

        Args:
            user_id: Authenticated user identifier.
            fields: Attribute name to string value.

        Returns:
            SUCCESS with the written fields, or an error result.
        """
        pass
