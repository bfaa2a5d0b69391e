"""In-memory profile repository for development and tests."""

from threading import Lock
from typing import Any, Dict

import structlog

from infrastructure.operations import OperationResult, OperationStatus
from infrastructure.persistence.repository import ProfileRepository

logger = structlog.get_logger()


class InMemoryProfileRepository(ProfileRepository):
    """Thread-safe dict-backed profile store.

    Profiles live for the lifetime of the process and are not shared between
    instances, so this backend is only suitable for a single worker.
    """

    def __init__(self) -> None:
        self._profiles: Dict[str, Dict[str, Any]] = {}
        self._lock = Lock()
        logger.info("initialized_profile_repository", backend="memory")

    def get_profile(self, user_id: str) -> OperationResult:
        with self._lock:
            profile = self._profiles.get(user_id)
            profile = dict(profile) if profile is not None else None

        if profile is None:
            return OperationResult.error(
                OperationStatus.NOT_FOUND,
                f"No profile for user {user_id}",
                error_code="PROFILE_NOT_FOUND",
            )
        return OperationResult.success(data=profile, message="Profile loaded")

    def update_profile(self, user_id: str, fields: Dict[str, Any]) -> OperationResult:
        with self._lock:
            profile = self._profiles.setdefault(user_id, {"user_id": user_id})
            profile.update(fields)
        return OperationResult.success(data=dict(fields), message="Profile updated")

    def clear(self) -> None:
        """Remove every stored profile (for testing)."""
        with self._lock:
            self._profiles.clear()
