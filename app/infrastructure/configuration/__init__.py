"""Infrastructure configuration module - public API.

Centralized configuration for the locale service using Pydantic BaseSettings
with domain-based organization.

Exports:
    Settings: Main settings class (for testing/overrides)
    PreferencesFeatureSettings: Locale preferences section (for testing)
    GeolocationSettings: Geolocation providers section (for testing)

Example:
    ```python
    from infrastructure.services import get_settings

    settings = get_settings()

    url_policy = settings.preferences.URL_COUNTRY_POLICY
    providers = settings.geolocation.GEO_PROVIDERS
    ```
"""

from infrastructure.configuration.settings import Settings
from infrastructure.configuration.features import PreferencesFeatureSettings
from infrastructure.configuration.integrations import GeolocationSettings

__all__ = ["Settings", "PreferencesFeatureSettings", "GeolocationSettings"]
