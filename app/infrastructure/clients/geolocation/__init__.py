"""IP geolocation client.

Exports:
    GeoLookupChain: Ordered provider fallback chain for visitor country detection
    GeoProvider: Description of one external lookup API
    CountryDetection / DetectionSource: Detection outcome
"""

from infrastructure.clients.geolocation.client import (
    CountryDetection,
    DetectionSource,
    GeoLookupChain,
    GeoProvider,
)

__all__ = [
    "CountryDetection",
    "DetectionSource",
    "GeoLookupChain",
    "GeoProvider",
]
