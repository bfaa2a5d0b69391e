"""Shared base classes for the settings sections.

Every section reads from the environment and an optional ``.env`` file with
case-sensitive keys and silently ignores variables it does not declare.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


_SECTION_CONFIG = SettingsConfigDict(
    env_file=".env",
    case_sensitive=True,
    extra="ignore",
)


class IntegrationSettings(BaseSettings):
    """Base class for external integrations (geolocation providers, AWS)."""

    model_config = _SECTION_CONFIG


class FeatureSettings(BaseSettings):
    """Base class for feature settings (locale preferences)."""

    model_config = _SECTION_CONFIG


class InfrastructureSettings(BaseSettings):
    """Base class for core runtime settings (server)."""

    model_config = _SECTION_CONFIG
