"""Preference persistence for both visitor tiers.

Anonymous visitors keep their pair in two cookies. Signed-in visitors keep it
on their profile, written in the background so the new pair takes effect
before the write lands.
"""

import itertools
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from datetime import datetime, timezone
from threading import Lock
from typing import Dict, Mapping, Optional

import structlog
from fastapi import Response

from infrastructure.configuration import PreferencesFeatureSettings
from infrastructure.i18n import (
    DEFAULT_COUNTRY,
    DEFAULT_LANGUAGE,
    LanguageCode,
    LocalePair,
    is_supported_language,
    parse_country_code,
)
from infrastructure.operations import OperationResult, OperationStatus
from infrastructure.persistence import ProfileRepository
from packages.preferences.events import publish_persist_failure

logger = structlog.get_logger()

_CLEARED = object()


class CookiePreferences:
    """Cookie tier bound to one request/response cycle.

    Reads come from the request cookies. Writes go to the outgoing response
    and are also kept as an overlay, so a ``read()`` later in the same
    request sees the complete new pair (or, after ``clear()``, nothing).

    Args:
        cookies: Incoming request cookies
        response: Outgoing response receiving Set-Cookie headers
        settings: Preferences feature settings (cookie names and lifetime)
    """

    def __init__(
        self,
        cookies: Mapping[str, str],
        response: Optional[Response],
        settings: PreferencesFeatureSettings,
    ) -> None:
        self._cookies = cookies
        self._response = response
        self._settings = settings
        self._overlay = None

    def read(self) -> Optional[LocalePair]:
        """Stored pair, or None unless both cookies are present and valid."""
        if self._overlay is _CLEARED:
            return None
        if self._overlay is not None:
            return self._overlay

        country = parse_country_code(self._cookies.get(self._settings.COUNTRY_COOKIE))
        language = self._cookies.get(self._settings.LANGUAGE_COOKIE)
        if country is None or not is_supported_language(language):
            return None
        return LocalePair(country=country, language=LanguageCode(language))

    def stored_country(self) -> Optional[str]:
        """The country cookie on its own, if valid."""
        if self._overlay is _CLEARED:
            return None
        if self._overlay is not None:
            return self._overlay.country
        return parse_country_code(self._cookies.get(self._settings.COUNTRY_COOKIE))

    def write(self, pair: LocalePair) -> None:
        """Set both cookies together (root path, configured lifetime)."""
        self._overlay = pair
        if self._response is None:
            return

        max_age = self._settings.cookie_max_age_seconds
        for name, value in (
            (self._settings.COUNTRY_COOKIE, pair.country),
            (self._settings.LANGUAGE_COOKIE, pair.language.value),
        ):
            self._response.set_cookie(
                name,
                value,
                max_age=max_age,
                expires=max_age,
                path="/",
                samesite="lax",
            )

    def clear(self) -> None:
        """Delete both cookies so the next resolution starts fresh."""
        self._overlay = _CLEARED
        if self._response is None:
            return
        clear_preference_cookies(self._response, self._settings)


def clear_preference_cookies(
    response: Response, settings: PreferencesFeatureSettings
) -> None:
    for name in (settings.COUNTRY_COOKIE, settings.LANGUAGE_COOKIE):
        response.delete_cookie(name, path="/")


class ProfilePreferences:
    """Profile tier for signed-in visitors.

    Writes run on a worker pool and are stamped with a per-user sequence
    number; a write that has been superseded by a newer one for the same user
    before it runs is skipped. Failed writes are logged and published as
    ``preferences.persist_failed`` events. The in-memory pair is never rolled
    back.

    Args:
        repository: Profile repository backend
        executor: Optional executor for background writes
        max_workers: Worker count when no executor is given
    """

    def __init__(
        self,
        repository: ProfileRepository,
        executor: Optional[Executor] = None,
        max_workers: int = 4,
    ) -> None:
        self.repository = repository
        self._executor = executor or ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="profile-writes"
        )
        self._sequence = itertools.count(1)
        self._latest: Dict[str, int] = {}
        self._lock = Lock()
        self._logger = logger.bind(component="profile_preferences")

    def read(self, user_id: str) -> Optional[LocalePair]:
        """The profile's pair, None only if there is no usable profile.

        Missing or invalid fields fall back to the default country/language.
        """
        result = self.repository.get_profile(user_id)
        if not result.is_success:
            if result.status != OperationStatus.NOT_FOUND:
                self._logger.warning(
                    "profile_read_failed",
                    user_id=user_id,
                    status=result.status.value,
                    error=result.message,
                )
            return None

        profile = result.data or {}
        country = parse_country_code(profile.get("country_code")) or DEFAULT_COUNTRY
        language = LanguageCode.parse(profile.get("language_code")) or DEFAULT_LANGUAGE
        return LocalePair(country=country, language=language)

    def write(self, user_id: str, pair: LocalePair) -> "Future[OperationResult]":
        """Schedule a profile update and return immediately."""
        with self._lock:
            sequence = next(self._sequence)
            self._latest[user_id] = sequence

        self._logger.debug(
            "profile_write_scheduled",
            user_id=user_id,
            sequence=sequence,
            **pair.to_dict(),
        )
        return self._executor.submit(self._persist, user_id, pair, sequence)

    def latest_sequence(self, user_id: str) -> Optional[int]:
        with self._lock:
            return self._latest.get(user_id)

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def _release(self, user_id: str, sequence: int) -> None:
        # A newer write scheduled meanwhile keeps its entry
        with self._lock:
            if self._latest.get(user_id) == sequence:
                del self._latest[user_id]

    def _persist(self, user_id: str, pair: LocalePair, sequence: int) -> OperationResult:
        log = self._logger.bind(user_id=user_id, sequence=sequence)

        if self.latest_sequence(user_id) != sequence:
            log.debug("profile_write_superseded")
            return OperationResult.success(
                data={"skipped": True, "sequence": sequence},
                message="Superseded by a newer write",
            )

        fields = {
            **pair.to_dict(),
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }
        try:
            result = self.repository.update_profile(user_id, fields)
        except Exception as e:
            log.exception("profile_write_crashed", error=str(e))
            result = OperationResult.transient_error(
                f"Profile write raised {type(e).__name__}: {e}",
                error_code="PROFILE_WRITE_ERROR",
            )
        finally:
            self._release(user_id, sequence)

        if not result.is_success:
            log.error(
                "profile_write_failed",
                status=result.status.value,
                error=result.message,
            )
            publish_persist_failure(user_id, pair, result)
            return result

        log.info("profile_write_completed", **pair.to_dict())
        return result
