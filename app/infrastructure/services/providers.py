"""
Process-wide providers for the locale service.

Each provider is cached with ``lru_cache`` so the environment is read once and
the geolocation session and DynamoDB client are shared by every request.
Tests reset them with ``cache_clear()``.
"""

from functools import lru_cache

from infrastructure.clients.geolocation import GeoLookupChain
from infrastructure.configuration import Settings
from infrastructure.identity import SessionIdentityResolver
from infrastructure.persistence import ProfileRepository, create_profile_repository


@lru_cache
def get_settings() -> Settings:
    """
    Settings loaded from the environment and ``.env``, once per process.

    Modules outside a request call this directly; route handlers take the
    ``SettingsDep`` alias instead so tests can override it:

        @router.get("/policy")
        def url_policy(settings: SettingsDep):
            return settings.preferences.URL_COUNTRY_POLICY
    """
    return Settings()


@lru_cache
def get_geo_lookup_chain() -> GeoLookupChain:
    """
    Provider chain built from ``settings.geolocation``.

    The chain holds a requests session, so caching it reuses connections to
    the providers across requests.
    """
    return GeoLookupChain.from_settings(get_settings())


@lru_cache
def get_profile_repository() -> ProfileRepository:
    """Profile store chosen by ``PREFERENCES_PROFILE_BACKEND``."""
    return create_profile_repository(get_settings())


@lru_cache
def get_session_identity_resolver() -> SessionIdentityResolver:
    """JWT verifier built from the server secret and algorithm."""
    settings = get_settings()
    return SessionIdentityResolver(
        secret_key=settings.server.SECRET_KEY,
        algorithm=settings.server.JWT_ALGORITHM,
    )
