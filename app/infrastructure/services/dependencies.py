"""
Type aliases for FastAPI dependency injection.

Provides annotated type hints for common infrastructure dependencies.
"""

from typing import Annotated
from fastapi import Depends
from infrastructure.clients.geolocation import GeoLookupChain
from infrastructure.configuration import Settings
from infrastructure.identity import SessionIdentityResolver
from infrastructure.persistence import ProfileRepository
from infrastructure.services.providers import (
    get_settings,
    get_geo_lookup_chain,
    get_profile_repository,
    get_session_identity_resolver,
)

# Settings dependency
SettingsDep = Annotated[Settings, Depends(get_settings)]

# Geolocation provider chain dependency
GeoLookupChainDep = Annotated[GeoLookupChain, Depends(get_geo_lookup_chain)]

# Profile repository dependency
ProfileRepositoryDep = Annotated[ProfileRepository, Depends(get_profile_repository)]

# Identity resolver dependency
SessionIdentityResolverDep = Annotated[
    SessionIdentityResolver, Depends(get_session_identity_resolver)
]

__all__ = [
    "SettingsDep",
    "GeoLookupChainDep",
    "ProfileRepositoryDep",
    "SessionIdentityResolverDep",
]
