"""Locale preferences feature settings."""

from typing import List

from pydantic import Field, field_validator

from infrastructure.configuration.base import FeatureSettings


class PreferencesFeatureSettings(FeatureSettings):
    """Locale resolution and synchronization configuration.

    Environment Variables:
        PREFERENCES_COUNTRY_COOKIE: Cookie holding the country (default: user_country)
        PREFERENCES_LANGUAGE_COOKIE: Cookie holding the language (default: user_language)
        PREFERENCES_COOKIE_MAX_AGE_DAYS: Cookie lifetime in days (default: 365)
        PREFERENCES_URL_COUNTRY_POLICY: How a URL language affects a stored
            country, ``keep_stored`` or ``derive`` (default: keep_stored)
        PREFERENCES_EXEMPT_PATHS: JSON list of paths never language-prefixed
        PREFERENCES_BYPASS_PREFIXES: JSON list of service path prefixes the
            language gate ignores
        PREFERENCES_GATE_RESET_COOKIES: Clear preference cookies when the gate
            redirects a bare path (default: true)
        PREFERENCES_PROFILE_BACKEND: ``memory`` or ``dynamodb`` (default: memory)
        PREFERENCES_PROFILE_TABLE: DynamoDB table for user profiles
        PREFERENCES_PERSISTENCE_WORKERS: Worker threads for profile writes

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        cookie_name = settings.preferences.COUNTRY_COOKIE
        if settings.preferences.URL_COUNTRY_POLICY == "derive":
            ...
        ```
    """

    COUNTRY_COOKIE: str = Field(
        default="user_country", alias="PREFERENCES_COUNTRY_COOKIE"
    )
    LANGUAGE_COOKIE: str = Field(
        default="user_language", alias="PREFERENCES_LANGUAGE_COOKIE"
    )
    COOKIE_MAX_AGE_DAYS: int = Field(
        default=365, alias="PREFERENCES_COOKIE_MAX_AGE_DAYS"
    )
    URL_COUNTRY_POLICY: str = Field(
        default="keep_stored", alias="PREFERENCES_URL_COUNTRY_POLICY"
    )
    EXEMPT_PATHS: List[str] = Field(
        default=["/reset-password", "/auth/callback"],
        alias="PREFERENCES_EXEMPT_PATHS",
    )
    BYPASS_PREFIXES: List[str] = Field(
        default=[
            "/api",
            "/auth",
            "/docs",
            "/redoc",
            "/openapi.json",
            "/health",
            "/version",
            "/static",
            "/favicon.ico",
        ],
        alias="PREFERENCES_BYPASS_PREFIXES",
    )
    GATE_RESET_COOKIES: bool = Field(
        default=True, alias="PREFERENCES_GATE_RESET_COOKIES"
    )
    PROFILE_BACKEND: str = Field(default="memory", alias="PREFERENCES_PROFILE_BACKEND")
    PROFILE_TABLE: str = Field(
        default="user_profiles", alias="PREFERENCES_PROFILE_TABLE"
    )
    PERSISTENCE_WORKERS: int = Field(
        default=4, alias="PREFERENCES_PERSISTENCE_WORKERS"
    )

    @field_validator("URL_COUNTRY_POLICY")
    @classmethod
    def validate_url_country_policy(cls, v: str) -> str:
        """Validate the URL country policy value."""
        value = v.strip().lower()
        if value not in ("keep_stored", "derive"):
            raise ValueError(
                f"URL_COUNTRY_POLICY must be 'keep_stored' or 'derive', got: {v}"
            )
        return value

    @field_validator("PROFILE_BACKEND")
    @classmethod
    def validate_profile_backend(cls, v: str) -> str:
        """Validate the profile backend value."""
        value = v.strip().lower()
        if value not in ("memory", "dynamodb"):
            raise ValueError(f"PROFILE_BACKEND must be 'memory' or 'dynamodb', got: {v}")
        return value

    @property
    def cookie_max_age_seconds(self) -> int:
        """Cookie lifetime in seconds."""
        return self.COOKIE_MAX_AGE_DAYS * 24 * 60 * 60
