"""Shared fixtures for the whole test suite.

Keeps cached application singletons and the event registry from leaking
between tests, and provides the executors used to run profile writes inline.
"""

from concurrent.futures import Future

import pytest

from infrastructure.events import clear_handlers
from infrastructure.services import (
    get_geo_lookup_chain,
    get_profile_repository,
    get_session_identity_resolver,
    get_settings,
)
from packages.preferences.dependencies import get_profile_preferences

CACHED_PROVIDERS = (
    get_settings,
    get_geo_lookup_chain,
    get_profile_repository,
    get_session_identity_resolver,
)


class ImmediateExecutor:
    """Executor that runs submitted work inline, in submission order."""

    def __init__(self):
        self.submitted = 0

    def submit(self, fn, *args, **kwargs):
        self.submitted += 1
        future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as e:
            future.set_exception(e)
        return future

    def shutdown(self, wait=True):
        pass


@pytest.fixture(autouse=True)
def reset_application_state():
    """Start every test with fresh settings, providers and event handlers."""
    for provider in CACHED_PROVIDERS:
        provider.cache_clear()
    get_profile_preferences.cache_clear()
    clear_handlers()
    yield
    for provider in CACHED_PROVIDERS:
        provider.cache_clear()
    get_profile_preferences.cache_clear()
    clear_handlers()


@pytest.fixture
def immediate_executor():
    return ImmediateExecutor()
