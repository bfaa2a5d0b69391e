"""Fixtures for preferences integration tests.

The application is assembled from the real routers, dependencies and the
language gate. Only the HTTP session of the geolocation chain is mocked.
"""

from unittest.mock import MagicMock

import pytest
import requests
from fastapi import FastAPI
from fastapi.testclient import TestClient

from infrastructure.clients.geolocation import GeoLookupChain, GeoProvider
from infrastructure.events import register_event_handler
from infrastructure.identity import SessionIdentityResolver
from infrastructure.persistence import InMemoryProfileRepository
from infrastructure.services import (
    get_geo_lookup_chain,
    get_session_identity_resolver,
    get_settings,
)
from packages.preferences import pages_router, preferences_router
from packages.preferences.dependencies import get_profile_preferences
from packages.preferences.events import PERSIST_FAILED, PREFERENCES_CHANGED
from packages.preferences.routing import RouteLanguageGate
from packages.preferences.store import ProfilePreferences

TOKEN_SECRET = "integration-secret"


@pytest.fixture
def geo_session():
    """HTTP session behind the geolocation chain; answers TR by default."""
    session = MagicMock(spec=requests.Session)
    session.headers = {}
    response = MagicMock()
    response.json.return_value = {"country_code": "TR"}
    session.get.return_value = response
    return session


@pytest.fixture
def geo_chain(geo_session):
    return GeoLookupChain(
        [
            GeoProvider("https://ipapi.co/json/", "country_code"),
            GeoProvider("https://ip-api.com/json/", "countryCode"),
        ],
        session=geo_session,
    )


@pytest.fixture
def repository():
    return InMemoryProfileRepository()


@pytest.fixture
def identity_resolver():
    return SessionIdentityResolver(TOKEN_SECRET)


@pytest.fixture
def app(geo_chain, repository, identity_resolver, immediate_executor):
    """FastAPI app with the preferences routers and the language gate."""
    app = FastAPI()
    app.add_middleware(
        RouteLanguageGate,
        settings_provider=get_settings,
        geo_provider=lambda: geo_chain,
    )
    app.include_router(preferences_router, prefix="/api/v1")
    app.include_router(pages_router)

    profiles = ProfilePreferences(repository, executor=immediate_executor)
    app.dependency_overrides[get_geo_lookup_chain] = lambda: geo_chain
    app.dependency_overrides[get_profile_preferences] = lambda: profiles
    app.dependency_overrides[get_session_identity_resolver] = lambda: identity_resolver
    return app


@pytest.fixture
def client(app):
    """Create test client."""
    with TestClient(app) as client:
        yield client


@pytest.fixture
def auth_headers(identity_resolver):
    """Authorization header for a signed-in visitor."""

    def _factory(user_id="user-1"):
        return {"Authorization": f"Bearer {identity_resolver.issue(user_id)}"}

    return _factory


@pytest.fixture
def captured_events():
    """Preference events published while handling requests."""
    captured = {PREFERENCES_CHANGED: [], PERSIST_FAILED: []}
    register_event_handler(PREFERENCES_CHANGED)(captured[PREFERENCES_CHANGED].append)
    register_event_handler(PERSIST_FAILED)(captured[PERSIST_FAILED].append)
    return captured
