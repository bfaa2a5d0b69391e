"""Top-level settings object for the locale service."""

from typing import Any, ClassVar

from pydantic_settings import BaseSettings, SettingsConfigDict

from infrastructure.configuration.features import PreferencesFeatureSettings
from infrastructure.configuration.infrastructure import ServerSettings
from infrastructure.configuration.integrations import (
    AwsSettings,
    GeolocationSettings,
)


class Settings(BaseSettings):
    """Every configuration section of the service, read from the environment.

    Sections load their own prefixed variables (``PREFERENCES_*``, ``GEO_*``,
    ``AWS_*``); only ``PREFIX``, ``LOG_LEVEL`` and ``GIT_SHA`` live here.
    An empty ``PREFIX`` marks the production deployment.

    Use ``infrastructure.services.get_settings()`` rather than instantiating
    this directly, so the environment is read once per process:

        settings = get_settings()
        settings.preferences.URL_COUNTRY_POLICY
        settings.geolocation.GEO_TIMEOUT_SECONDS
    """

    PREFIX: str = ""
    LOG_LEVEL: str = "INFO"
    GIT_SHA: str = "Unknown"

    preferences: PreferencesFeatureSettings
    geolocation: GeolocationSettings
    aws: AwsSettings
    server: ServerSettings

    _sections: ClassVar[dict[str, type[BaseSettings]]] = {
        "preferences": PreferencesFeatureSettings,
        "geolocation": GeolocationSettings,
        "aws": AwsSettings,
        "server": ServerSettings,
    }

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    def __init__(self, **overrides: Any):
        # Sections not passed explicitly are loaded from the environment
        for name, section in self._sections.items():
            overrides.setdefault(name, section())
        super().__init__(**overrides)

    @property
    def is_production(self) -> bool:
        return not self.PREFIX
