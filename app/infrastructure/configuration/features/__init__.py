"""Feature settings __init__ - exports all feature settings."""

from infrastructure.configuration.features.preferences import (
    PreferencesFeatureSettings,
)

__all__ = [
    "PreferencesFeatureSettings",
]
