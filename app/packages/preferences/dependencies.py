"""FastAPI dependencies for locale preferences."""

from functools import lru_cache
from typing import Annotated, Iterator

from fastapi import Depends, Request, Response

from infrastructure.services import (
    GeoLookupChainDep,
    SessionIdentityResolverDep,
    SettingsDep,
    get_profile_repository,
    get_settings,
)
from packages.preferences.routing import client_ip_from_request
from packages.preferences.session import LocaleSession
from packages.preferences.store import CookiePreferences, ProfilePreferences


@lru_cache
def get_profile_preferences() -> ProfilePreferences:
    """Application-scoped profile tier with its background write pool."""
    settings = get_settings()
    return ProfilePreferences(
        repository=get_profile_repository(),
        max_workers=settings.preferences.PERSISTENCE_WORKERS,
    )


ProfilePreferencesDep = Annotated[ProfilePreferences, Depends(get_profile_preferences)]


def get_locale_session(
    request: Request,
    response: Response,
    settings: SettingsDep,
    geo: GeoLookupChainDep,
    profiles: ProfilePreferencesDep,
    identity_resolver: SessionIdentityResolverDep,
) -> Iterator[LocaleSession]:
    """Open a LocaleSession for the request and close it when the request ends.

    Cookie changes are written to the injected ``response``.
    """
    session = LocaleSession(
        identity=identity_resolver.resolve(request),
        cookies=CookiePreferences(request.cookies, response, settings.preferences),
        profiles=profiles,
        geo=geo,
        settings=settings.preferences,
        client_ip=client_ip_from_request(request),
        accept_language=request.headers.get("Accept-Language"),
    )
    try:
        yield session
    finally:
        session.close()


LocaleSessionDep = Annotated[LocaleSession, Depends(get_locale_session)]
