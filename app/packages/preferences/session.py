"""Per-request locale session.

A ``LocaleSession`` is created at the start of a request, resolves the active
pair once, hands out the sync controller for explicit changes and is closed
when the request ends. Calls made on a closed session are ignored.
"""

from typing import Optional

import structlog

from infrastructure.clients.geolocation import GeoLookupChain
from infrastructure.configuration import PreferencesFeatureSettings
from infrastructure.i18n import LocalePair
from infrastructure.identity import SessionIdentity
from packages.preferences.resolver import LocaleResolver, Resolution
from packages.preferences.store import CookiePreferences, ProfilePreferences
from packages.preferences.sync import LocaleSyncController

logger = structlog.get_logger()


class LocaleSession:
    """Locale state for one visitor request.

    Args:
        identity: Visitor identity
        cookies: Cookie tier bound to this request
        profiles: Shared profile tier
        geo: Geolocation chain
        settings: Preferences feature settings
        client_ip: Visitor address, if known
        accept_language: Visitor's Accept-Language header
    """

    def __init__(
        self,
        identity: SessionIdentity,
        cookies: CookiePreferences,
        profiles: ProfilePreferences,
        geo: GeoLookupChain,
        settings: PreferencesFeatureSettings,
        client_ip: Optional[str] = None,
        accept_language: Optional[str] = None,
    ) -> None:
        self.identity = identity
        self.cookies = cookies
        self.profiles = profiles
        self.settings = settings
        self.client_ip = client_ip
        self.accept_language = accept_language
        self.resolver = LocaleResolver(
            cookies=cookies,
            profiles=profiles,
            geo=geo,
            url_country_policy=settings.URL_COUNTRY_POLICY,
        )
        self.path: Optional[str] = None
        self._controller: Optional[LocaleSyncController] = None
        self.closed = False

    def open(self, path: Optional[str] = None) -> Resolution:
        """Resolve the active pair for the page at ``path``.

        Only the first call resolves; later calls return the same resolution.
        """
        if self.resolver.resolution is not None:
            return self.resolver.resolution
        self.path = path
        return self._resolve()

    def switch_identity(self, identity: SessionIdentity) -> Resolution:
        """Re-run resolution after the visitor signs in or out."""
        if identity == self.identity and self.resolver.resolution is not None:
            return self.resolver.resolution

        logger.info(
            "locale_identity_switched",
            previous=self.identity.kind.value,
            current=identity.kind.value,
            user_id=identity.user_id,
        )
        self.identity = identity
        if self._controller is not None:
            self._controller.close()
            self._controller = None
        return self._resolve()

    @property
    def resolution(self) -> Resolution:
        return self.open(self.path)

    @property
    def pair(self) -> LocalePair:
        """Active pair, including changes made through the controller."""
        if self._controller is not None:
            return self._controller.pair
        return self.resolution.pair

    @property
    def controller(self) -> LocaleSyncController:
        if self._controller is None:
            resolution = self.resolution
            self._controller = LocaleSyncController(
                pair=resolution.pair,
                identity=self.identity,
                cookies=self.cookies,
                profiles=self.profiles,
                url_sync=resolution.url_sync,
                current_url=self.path,
                url_country_policy=self.settings.URL_COUNTRY_POLICY,
            )
            if self.closed:
                self._controller.close()
        return self._controller

    def close(self) -> None:
        self.closed = True
        if self._controller is not None:
            self._controller.close()

    def _resolve(self) -> Resolution:
        return self.resolver.resolve(
            self.identity,
            path=self.path,
            client_ip=self.client_ip,
            accept_language=self.accept_language,
        )
