"""IP geolocation client with an ordered provider fallback chain.

Queries external JSON geolocation APIs one at a time, each bounded by a
timeout, and falls back to the browser-reported language and finally to a
fixed default. Detection never raises.
"""

import ipaddress
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Iterable, Optional, Sequence

import requests
import structlog

from infrastructure.i18n import (
    DEFAULT_COUNTRY,
    LanguageNegotiator,
    parse_country_code,
)
from infrastructure.operations import OperationResult, classify_http_error

if TYPE_CHECKING:
    from infrastructure.configuration import Settings

logger = structlog.get_logger()

DEFAULT_TIMEOUT_SECONDS = 3.0


@dataclass(frozen=True)
class GeoProvider:
    """One external lookup source.

    Attributes:
        endpoint: URL answering for the caller's own address
        country_field: JSON field holding the two-letter country code
        ip_endpoint: Optional URL template with an ``{ip}`` placeholder used
            to look up a specific visitor address
    """

    endpoint: str
    country_field: str
    ip_endpoint: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GeoProvider":
        return cls(
            endpoint=data["endpoint"],
            country_field=data["country_field"],
            ip_endpoint=data.get("ip_endpoint"),
        )

    def url_for(self, client_ip: Optional[str] = None) -> str:
        """URL to query; the visitor IP is only sent when it is public."""
        if client_ip and self.ip_endpoint and _is_public_ip(client_ip):
            return self.ip_endpoint.format(ip=client_ip)
        return self.endpoint


class DetectionSource(str, Enum):
    """Where a detected country came from."""

    PROVIDER = "provider"
    BROWSER_REGION = "browser_region"
    BROWSER_LANGUAGE = "browser_language"
    DEFAULT = "default"


@dataclass(frozen=True)
class CountryDetection:
    """Outcome of a detection run."""

    country_code: str
    source: DetectionSource
    provider: Optional[str] = None


def _is_public_ip(value: str) -> bool:
    try:
        return ipaddress.ip_address(value).is_global
    except ValueError:
        return False


class GeoLookupChain:
    """Best-effort visitor country detection.

    Providers are called sequentially in priority order. The first one that
    returns a well-formed two-letter code wins and later providers are not
    called. Every failure (network error, timeout, non-2xx, malformed body)
    moves on to the next provider.

    Args:
        providers: Ordered providers to query
        timeout: Per-provider timeout in seconds
        session: Optional requests session (for connection reuse and tests)
        negotiator: Accept-Language parser used for the browser fallback
    """

    def __init__(
        self,
        providers: Iterable[GeoProvider],
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
        negotiator: Optional[LanguageNegotiator] = None,
    ) -> None:
        self.providers: Sequence[GeoProvider] = tuple(providers)
        self.timeout = timeout
        self.negotiator = negotiator or LanguageNegotiator()
        self._session = session or requests.Session()
        self._session.headers.update({"Accept": "application/json"})
        self._logger = logger.bind(component="geo_lookup_chain")

    @classmethod
    def from_settings(
        cls, settings: "Settings", session: Optional[requests.Session] = None
    ) -> "GeoLookupChain":
        """Build a chain from the geolocation settings."""
        return cls(
            providers=[
                GeoProvider.from_dict(p) for p in settings.geolocation.GEO_PROVIDERS
            ],
            timeout=settings.geolocation.GEO_TIMEOUT_SECONDS,
            session=session,
        )

    def lookup(
        self, provider: GeoProvider, client_ip: Optional[str] = None
    ) -> OperationResult:
        """Query a single provider.

        Args:
            provider: Provider to query
            client_ip: Visitor address, if known

        Returns:
            OperationResult with ``{"country_code": "XX"}`` or an error
        """
        url = provider.url_for(client_ip)
        log = self._logger.bind(provider=url)

        try:
            response = self._session.get(
                url,
                timeout=self.timeout,
                headers={"Cache-Control": "no-cache"},
            )
            response.raise_for_status()
        except requests.RequestException as e:
            result = classify_http_error(e)
            log.warning(
                "geolocation_provider_failed",
                status=result.status.value,
                error=result.message,
            )
            return result

        try:
            payload = response.json()
        except ValueError:
            log.warning("geolocation_provider_invalid_json")
            return OperationResult.permanent_error(
                message=f"Provider returned a non-JSON body: {url}",
                error_code="MALFORMED_RESPONSE",
            )

        country = payload.get(provider.country_field) if isinstance(payload, dict) else None
        # Exactly two ASCII letters; "--" or "1A" falls through like a failure
        country_code = (
            parse_country_code(country)
            if isinstance(country, str) and len(country) == 2
            else None
        )
        if country_code is None:
            log.warning(
                "geolocation_provider_malformed_field",
                field=provider.country_field,
                value=repr(country),
            )
            return OperationResult.permanent_error(
                message=f"Provider field '{provider.country_field}' is not a country code",
                error_code="MALFORMED_RESPONSE",
            )

        return OperationResult.success(
            data={"country_code": country_code},
            message="Country detected",
        )

    def detect(
        self,
        client_ip: Optional[str] = None,
        accept_language: Optional[str] = None,
    ) -> CountryDetection:
        """Detect the visitor country, reporting which source answered.

        Args:
            client_ip: Visitor address, if known
            accept_language: Visitor's Accept-Language header, if any

        Returns:
            CountryDetection; never raises
        """
        log = self._logger.bind(client_ip=client_ip)

        for provider in self.providers:
            try:
                result = self.lookup(provider, client_ip=client_ip)
            except Exception as e:  # a provider must never break detection
                log.exception("geolocation_provider_crashed", error=str(e))
                continue
            if result.is_success:
                country = result.data["country_code"]
                log.info(
                    "country_detected", country=country, source="provider",
                    provider=provider.endpoint,
                )
                return CountryDetection(
                    country_code=country,
                    source=DetectionSource.PROVIDER,
                    provider=provider.endpoint,
                )

        return self._detect_from_browser(accept_language)

    def detect_country(
        self,
        client_ip: Optional[str] = None,
        accept_language: Optional[str] = None,
    ) -> str:
        """Detect the visitor country code; never raises."""
        return self.detect(client_ip=client_ip, accept_language=accept_language).country_code

    def _detect_from_browser(self, accept_language: Optional[str]) -> CountryDetection:
        tag = self.negotiator.primary_tag(accept_language)
        if tag:
            parts = tag.replace("_", "-").split("-")
            region = parts[1] if len(parts) > 1 else ""
            if len(region) == 2 and region.isalpha():
                source = DetectionSource.BROWSER_REGION
            else:
                source = DetectionSource.BROWSER_LANGUAGE
            country = self.negotiator.country_from_tag(tag)
            if country:
                self._logger.info(
                    "country_detected", country=country, source=source.value, tag=tag
                )
                return CountryDetection(country, source)

        self._logger.info(
            "country_detected", country=DEFAULT_COUNTRY, source="default"
        )
        return CountryDetection(DEFAULT_COUNTRY, DetectionSource.DEFAULT)
