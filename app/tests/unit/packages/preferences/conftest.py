"""Fixtures for the preferences package unit tests."""

from concurrent.futures import Future
from unittest.mock import MagicMock

import pytest

from infrastructure.configuration import PreferencesFeatureSettings
from infrastructure.events import clear_handlers, register_event_handler
from infrastructure.i18n import LanguageCode, LocalePair
from infrastructure.identity import SessionIdentity
from infrastructure.persistence import InMemoryProfileRepository
from packages.preferences.events import PERSIST_FAILED, PREFERENCES_CHANGED
from packages.preferences.store import CookiePreferences, ProfilePreferences


class DeferredExecutor:
    """Queues submitted work until run_all() is called."""

    def __init__(self):
        self.submitted = 0
        self.pending = []

    def submit(self, fn, *args, **kwargs):
        self.submitted += 1
        future = Future()
        self.pending.append((future, fn, args, kwargs))
        return future

    def run_all(self):
        pending, self.pending = self.pending, []
        for future, fn, args, kwargs in pending:
            future.set_result(fn(*args, **kwargs))

    def shutdown(self, wait=True):
        pass


@pytest.fixture
def preferences_settings():
    return PreferencesFeatureSettings()


@pytest.fixture
def mock_response():
    """Stand-in for the outgoing FastAPI response."""
    return MagicMock()


@pytest.fixture
def make_cookies(preferences_settings, mock_response):
    """Factory for a cookie tier over the given request cookies."""

    def _factory(country=None, language=None, response=mock_response):
        cookies = {}
        if country is not None:
            cookies[preferences_settings.COUNTRY_COOKIE] = country
        if language is not None:
            cookies[preferences_settings.LANGUAGE_COOKIE] = language
        return CookiePreferences(cookies, response, preferences_settings)

    return _factory


@pytest.fixture
def repository():
    return InMemoryProfileRepository()


@pytest.fixture
def profiles(repository, immediate_executor):
    """Profile tier that writes inline."""
    return ProfilePreferences(repository, executor=immediate_executor)


@pytest.fixture
def deferred_executor():
    return DeferredExecutor()


@pytest.fixture
def mock_geo():
    """Geolocation chain answering TR unless told otherwise."""
    geo = MagicMock()
    geo.detect_country.return_value = "TR"
    return geo


@pytest.fixture
def anonymous():
    return SessionIdentity.anonymous()


@pytest.fixture
def signed_in():
    return SessionIdentity.authenticated("user-1")


@pytest.fixture
def pair():
    """Factory for LocalePair values."""

    def _factory(country, language):
        return LocalePair(country=country, language=LanguageCode(language))

    return _factory


@pytest.fixture
def captured_events():
    """Collect preference events published during a test."""
    captured = {PREFERENCES_CHANGED: [], PERSIST_FAILED: []}
    clear_handlers()
    register_event_handler(PREFERENCES_CHANGED)(captured[PREFERENCES_CHANGED].append)
    register_event_handler(PERSIST_FAILED)(captured[PERSIST_FAILED].append)
    yield captured
    clear_handlers()
