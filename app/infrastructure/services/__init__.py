"""
Dependency injection services.

Provides type aliases and provider functions for FastAPI dependency injection.
"""

from infrastructure.services.dependencies import (
    SettingsDep,
    GeoLookupChainDep,
    ProfileRepositoryDep,
    SessionIdentityResolverDep,
)
from infrastructure.services.providers import (
    get_settings,
    get_geo_lookup_chain,
    get_profile_repository,
    get_session_identity_resolver,
)

__all__ = [
    "SettingsDep",
    "GeoLookupChainDep",
    "ProfileRepositoryDep",
    "SessionIdentityResolverDep",
    "get_settings",
    "get_geo_lookup_chain",
    "get_profile_repository",
    "get_session_identity_resolver",
]
