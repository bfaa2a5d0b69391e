"""IP geolocation provider settings."""

from typing import Any, Dict, List

from pydantic import Field, field_validator

from infrastructure.configuration.base import IntegrationSettings


DEFAULT_GEO_PROVIDERS: List[Dict[str, Any]] = [
    {
        "endpoint": "https://ipapi.co/json/",
        "ip_endpoint": "https://ipapi.co/{ip}/json/",
        "country_field": "country_code",
    },
    {
        "endpoint": "https://ip-api.com/json/",
        "ip_endpoint": "https://ip-api.com/json/{ip}",
        "country_field": "countryCode",
    },
    {
        "endpoint": "https://geolocation-db.com/json/",
        "ip_endpoint": "https://geolocation-db.com/json/{ip}",
        "country_field": "country_code",
    },
]


class GeolocationSettings(IntegrationSettings):
    """External IP geolocation providers.

    Providers are queried in list order; the first well-formed answer wins.

    Environment Variables:
        GEO_PROVIDERS: JSON list of provider objects with ``endpoint``,
            ``country_field`` and optional ``ip_endpoint`` (``{ip}`` template)
        GEO_TIMEOUT_SECONDS: Per-provider request timeout (default: 3.0)

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        for provider in settings.geolocation.GEO_PROVIDERS:
            print(provider["endpoint"])
        ```
    """

    GEO_PROVIDERS: List[Dict[str, Any]] = Field(
        default_factory=lambda: [dict(p) for p in DEFAULT_GEO_PROVIDERS],
        alias="GEO_PROVIDERS",
    )
    GEO_TIMEOUT_SECONDS: float = Field(default=3.0, alias="GEO_TIMEOUT_SECONDS")

    @field_validator("GEO_PROVIDERS")
    @classmethod
    def validate_providers(cls, v: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Every provider needs an endpoint and a country field name."""
        for provider in v:
            if not provider.get("endpoint") or not provider.get("country_field"):
                raise ValueError(
                    f"Geolocation provider requires 'endpoint' and 'country_field': {provider}"
                )
        return v
