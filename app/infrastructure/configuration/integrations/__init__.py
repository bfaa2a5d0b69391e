"""Integration settings __init__ - exports all integration settings."""

from infrastructure.configuration.integrations.aws import AwsSettings
from infrastructure.configuration.integrations.geolocation import (
    GeolocationSettings,
)

__all__ = [
    "AwsSettings",
    "GeolocationSettings",
]
