"""Explicit preference changes and their propagation.

The controller is the only writer back into the URL, the preference tiers and
the change notification once a session has resolved its pair.
"""

from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlsplit

import structlog

from infrastructure.i18n import (
    DEFAULT_LANGUAGE,
    LanguageCode,
    LocalePair,
    country_for_language,
    is_supported_language,
    language_for_country,
    normalize_country_code,
)
from infrastructure.identity import SessionIdentity
from packages.preferences.events import PreferencesChange, publish_change
from packages.preferences.resolver import KEEP_STORED
from packages.preferences.routing import language_from_path, switch_language_in_url
from packages.preferences.store import CookiePreferences, ProfilePreferences

logger = structlog.get_logger()


@dataclass(frozen=True)
class Navigation:
    """A URL the client should move to.

    ``replace`` means replace the current history entry instead of pushing a
    new one.
    """

    url: str
    replace: bool = True


class LocaleSyncController:
    """Apply country/language changes for one session.

    Args:
        pair: Resolved pair the session starts from
        identity: Visitor identity, selects the persistence tier
        cookies: Cookie tier
        profiles: Profile tier
        url_sync: Whether the current URL carries the language segment
        current_url: Current page URL (path, query and fragment)
        url_country_policy: Country handling when the URL changes language
    """

    def __init__(
        self,
        pair: LocalePair,
        identity: SessionIdentity,
        cookies: CookiePreferences,
        profiles: ProfilePreferences,
        url_sync: bool = False,
        current_url: Optional[str] = None,
        url_country_policy: str = KEEP_STORED,
    ) -> None:
        self.pair = pair
        self.identity = identity
        self.cookies = cookies
        self.profiles = profiles
        self.url_sync = url_sync
        self.current_url = current_url
        self.url_country_policy = url_country_policy
        self.navigation: Optional[Navigation] = None
        self.closed = False
        self._logger = logger.bind(
            component="locale_sync_controller",
            identity=identity.kind.value,
            user_id=identity.user_id,
        )

    def close(self) -> None:
        self.closed = True

    def set_country(self, code: str) -> PreferencesChange:
        """Switch country; language follows the country.

        Raises:
            ValueError: If ``code`` is not a two-letter country code.
        """
        country = normalize_country_code(code)
        if self._ignored("set_country"):
            return self._unchanged()

        after = LocalePair(country=country, language=language_for_country(country))
        return self._apply(after, persist_always=True)

    def set_language(
        self, code: str, current_url: Optional[str] = None
    ) -> PreferencesChange:
        """Switch language; unsupported codes become the default language.

        When URL sync is active the language segment of the current URL is
        rewritten and a replace navigation is recorded.
        """
        if self._ignored("set_language"):
            return self._unchanged()

        if current_url is not None:
            self.observe_url(current_url)

        if is_supported_language(code):
            language = LanguageCode(code)
        else:
            self._logger.warning(
                "unsupported_language_replaced",
                requested=code,
                language=DEFAULT_LANGUAGE.value,
            )
            language = DEFAULT_LANGUAGE

        after = LocalePair(country=country_for_language(language), language=language)
        return self._apply(after)

    def observe_path(self, path: str) -> PreferencesChange:
        """React to navigation onto ``path``.

        A supported language segment different from the active language
        switches the language without producing a navigation.
        """
        if self._ignored("observe_path"):
            return self._unchanged()

        self.current_url = path
        language = language_from_path(urlsplit(path).path)
        if language is None:
            return self._unchanged()

        self.url_sync = True
        if language == self.pair.language:
            return self._unchanged()

        if self.url_country_policy == KEEP_STORED:
            country = self.pair.country
        else:
            country = country_for_language(language)

        self._logger.info("url_language_observed", path=path, language=language.value)
        return self._apply(
            LocalePair(country=country, language=language), navigate=False
        )

    def observe_url(self, url: str) -> None:
        """Record the current URL without changing the pair."""
        self.current_url = url
        if language_from_path(urlsplit(url).path) is not None:
            self.url_sync = True

    def _apply(
        self, after: LocalePair, persist_always: bool = False, navigate: bool = True
    ) -> PreferencesChange:
        before = self.pair
        change = PreferencesChange.between(before, after)
        self.pair = after

        if navigate:
            self._sync_url(after.language)

        if change.changed or persist_always:
            self._persist(after)

        if change.changed:
            publish_change(change, user_id=self.identity.user_id)
            self._logger.info(
                "preferences_changed",
                **change.to_dict(),
            )
        return change

    def _sync_url(self, language: LanguageCode) -> None:
        if not self.url_sync or not self.current_url:
            return
        target = switch_language_in_url(self.current_url, language)
        if target == self.current_url:
            return
        self.navigation = Navigation(url=target, replace=True)
        self.current_url = target
        self._logger.debug("url_language_rewritten", url=target)

    def _persist(self, pair: LocalePair) -> None:
        if self.identity.is_authenticated:
            self.profiles.write(self.identity.user_id, pair)
        else:
            self.cookies.write(pair)

    def _unchanged(self) -> PreferencesChange:
        return PreferencesChange.between(self.pair, self.pair)

    def _ignored(self, operation: str) -> bool:
        if self.closed:
            self._logger.warning("locale_session_closed", operation=operation)
        return self.closed
