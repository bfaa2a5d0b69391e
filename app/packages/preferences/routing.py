"""Language segment handling for page URLs.

Every in-scope page URL starts with a supported language code
(``/fr/search``). ``RouteLanguageGate`` redirects bare paths to their
language-prefixed form.
"""

from typing import Callable, Iterable, Optional
from urllib.parse import urlsplit, urlunsplit

import structlog
from fastapi import Request
from starlette.concurrency import run_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import RedirectResponse

from infrastructure.clients.geolocation import DetectionSource, GeoLookupChain
from infrastructure.configuration import Settings
from infrastructure.i18n import (
    LanguageCode,
    is_supported_language,
    language_for_country,
)
from infrastructure.i18n.tables import COUNTRY_LANGUAGE
from packages.preferences.store import clear_preference_cookies

logger = structlog.get_logger()

GATED_METHODS = ("GET", "HEAD")


def language_from_path(path: Optional[str]) -> Optional[LanguageCode]:
    """The supported language in the first path segment, if any."""
    if not path:
        return None
    segment = path.lstrip("/").split("/", 1)[0]
    if not is_supported_language(segment):
        return None
    return LanguageCode(segment)


def switch_language_in_path(path: str, language: LanguageCode) -> str:
    """Replace (or insert) the language segment of ``path``.

    ``/fr/search`` -> ``/de/search``; ``/search`` -> ``/de/search``.
    """
    code = LanguageCode(language).value
    stripped = path.lstrip("/")
    head, sep, rest = stripped.partition("/")
    if is_supported_language(head):
        return f"/{code}{sep}{rest}"
    return f"/{code}/{stripped}" if stripped else f"/{code}/"


def insert_language_in_url(url: str, language: LanguageCode) -> str:
    """Prefix the path of ``url`` with ``language``, keeping query and fragment."""
    parts = urlsplit(url)
    path = parts.path or "/"
    return urlunsplit(
        (parts.scheme, parts.netloc, f"/{LanguageCode(language).value}{path}", parts.query, parts.fragment)
    )


def switch_language_in_url(url: str, language: LanguageCode) -> str:
    """``switch_language_in_path`` applied to a URL, keeping query and fragment."""
    parts = urlsplit(url)
    return urlunsplit(
        (
            parts.scheme,
            parts.netloc,
            switch_language_in_path(parts.path or "/", language),
            parts.query,
            parts.fragment,
        )
    )


def _matches_prefix(path: str, prefix: str) -> bool:
    prefix = prefix.rstrip("/") or "/"
    return path == prefix or path.startswith(prefix + "/")


def is_exempt_path(path: str, exempt_paths: Iterable[str]) -> bool:
    """True for routes that are never language-prefixed."""
    return any(_matches_prefix(path, exempt) for exempt in exempt_paths)


def client_ip_from_request(request: Request) -> Optional[str]:
    """Visitor address, preferring the first X-Forwarded-For hop."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    return request.client.host if request.client else None


class RouteLanguageGate(BaseHTTPMiddleware):
    """Redirect page requests that lack a language prefix.

    Paths already carrying a supported language, exempt paths and service
    prefixes pass through. Any other GET/HEAD is redirected to the same path
    and query with a detected language inserted; the preference cookies are
    cleared on that redirect when ``PREFERENCES_GATE_RESET_COOKIES`` is set.

    Args:
        app: ASGI application
        settings_provider: Callable returning Settings
        geo_provider: Callable returning the GeoLookupChain
    """

    def __init__(
        self,
        app,
        settings_provider: Callable[[], Settings],
        geo_provider: Callable[[], GeoLookupChain],
    ):
        super().__init__(app)
        self.settings_provider = settings_provider
        self.geo_provider = geo_provider

    async def dispatch(self, request, call_next):
        path = request.url.path
        preferences = self.settings_provider().preferences

        if (
            request.method not in GATED_METHODS
            or language_from_path(path) is not None
            or is_exempt_path(path, preferences.EXEMPT_PATHS)
            or is_exempt_path(path, preferences.BYPASS_PREFIXES)
        ):
            return await call_next(request)

        language = await run_in_threadpool(
            self.detect_language,
            client_ip_from_request(request),
            request.headers.get("Accept-Language"),
        )
        target = insert_language_in_url(
            urlunsplit(("", "", path, request.url.query, "")), language
        )
        logger.info(
            "language_gate_redirect",
            path=path,
            target=target,
            language=language.value,
        )

        response = RedirectResponse(target, status_code=307)
        if preferences.GATE_RESET_COOKIES:
            clear_preference_cookies(response, preferences)
        return response

    def detect_language(
        self, client_ip: Optional[str], accept_language: Optional[str]
    ) -> LanguageCode:
        """Language of a geolocated, mapped country, else the browser's best match."""
        chain = self.geo_provider()
        detection = chain.detect(client_ip=client_ip, accept_language=accept_language)
        if (
            detection.source == DetectionSource.PROVIDER
            and detection.country_code in COUNTRY_LANGUAGE
        ):
            return language_for_country(detection.country_code)
        return chain.negotiator.negotiate_language(accept_language)
