"""Session-start locale resolution.

Reconciles the profile, the URL, the cookies and geolocation into one
(country, language) pair. Sources are tried in priority order and the
first hit wins:

1. Authenticated visitor with a profile: the profile pair, mirrored to cookies.
2. URL with a supported language segment: that language, with the country
   chosen by the URL country policy.
3. Complete cookie pair.
4. Geolocated country and its language, saved to cookies.

Resolution never fails; geolocation always ends in a default country.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

import structlog

from infrastructure.clients.geolocation import GeoLookupChain
from infrastructure.i18n import LocalePair, country_for_language, language_for_country
from infrastructure.identity import SessionIdentity
from packages.preferences.routing import language_from_path
from packages.preferences.store import CookiePreferences, ProfilePreferences

logger = structlog.get_logger()

KEEP_STORED = "keep_stored"
DERIVE = "derive"


class ResolverState(str, Enum):
    UNINITIALIZED = "uninitialized"
    RESOLVING = "resolving"
    RESOLVED = "resolved"


class ResolutionSource(str, Enum):
    PROFILE = "profile"
    URL = "url"
    COOKIES = "cookies"
    GEOLOCATION = "geolocation"


@dataclass(frozen=True)
class Resolution:
    """Outcome of a resolution pass.

    Attributes:
        pair: The active pair
        source: Which source supplied it
        url_sync: True when the current URL carries a language segment, so
            later language changes rewrite the URL
    """

    pair: LocalePair
    source: ResolutionSource
    url_sync: bool


class LocaleResolver:
    """Resolve the active pair for one session.

    Args:
        cookies: Cookie tier for this request
        profiles: Profile tier
        geo: Geolocation chain used when nothing is stored
        url_country_policy: ``keep_stored`` keeps a valid stored country when
            the URL supplies the language; ``derive`` always derives it
    """

    def __init__(
        self,
        cookies: CookiePreferences,
        profiles: ProfilePreferences,
        geo: GeoLookupChain,
        url_country_policy: str = KEEP_STORED,
    ) -> None:
        self.cookies = cookies
        self.profiles = profiles
        self.geo = geo
        self.url_country_policy = url_country_policy
        self.state = ResolverState.UNINITIALIZED
        self.resolution: Optional[Resolution] = None

    def resolve(
        self,
        identity: SessionIdentity,
        path: Optional[str] = None,
        client_ip: Optional[str] = None,
        accept_language: Optional[str] = None,
    ) -> Resolution:
        """Run a resolution pass; may be called again when identity changes."""
        self.state = ResolverState.RESOLVING
        log = logger.bind(
            component="locale_resolver",
            identity=identity.kind.value,
            user_id=identity.user_id,
            path=path,
        )

        url_language = language_from_path(path)
        url_sync = url_language is not None

        pair = None
        if identity.is_authenticated:
            pair = self.profiles.read(identity.user_id)
            if pair is not None:
                self.cookies.write(pair)
                return self._finish(log, pair, ResolutionSource.PROFILE, url_sync)

        if url_language is not None:
            stored_country = self.cookies.stored_country()
            if self.url_country_policy == KEEP_STORED and stored_country:
                country = stored_country
            else:
                country = country_for_language(url_language)
            pair = LocalePair(country=country, language=url_language)
            if self.cookies.read() != pair:
                self.cookies.write(pair)
            return self._finish(log, pair, ResolutionSource.URL, url_sync)

        pair = self.cookies.read()
        if pair is not None:
            return self._finish(log, pair, ResolutionSource.COOKIES, url_sync)

        country = self.geo.detect_country(
            client_ip=client_ip, accept_language=accept_language
        )
        pair = LocalePair(country=country, language=language_for_country(country))
        self.cookies.write(pair)
        return self._finish(log, pair, ResolutionSource.GEOLOCATION, url_sync)

    def _finish(
        self, log, pair: LocalePair, source: ResolutionSource, url_sync: bool
    ) -> Resolution:
        self.resolution = Resolution(pair=pair, source=source, url_sync=url_sync)
        self.state = ResolverState.RESOLVED
        log.info(
            "locale_resolved",
            source=source.value,
            url_sync=url_sync,
            **pair.to_dict(),
        )
        return self.resolution
