"""Fixtures for geolocation client tests."""

from unittest.mock import MagicMock

import pytest
import requests

from infrastructure.clients.geolocation import GeoLookupChain, GeoProvider


@pytest.fixture
def make_response():
    """Factory for fake requests responses."""

    def _factory(payload=None, status_code=200, json_error=False):
        response = MagicMock()
        response.status_code = status_code
        if status_code >= 400:
            response.raise_for_status.side_effect = requests.HTTPError(
                f"{status_code}", response=response
            )
        if json_error:
            response.json.side_effect = ValueError("not json")
        else:
            response.json.return_value = payload
        return response

    return _factory


@pytest.fixture
def providers():
    return [
        GeoProvider("https://ipapi.co/json/", "country_code", "https://ipapi.co/{ip}/json/"),
        GeoProvider("http://ip-api.com/json/", "countryCode"),
        GeoProvider("https://geolocation-db.com/json/", "country_code"),
    ]


@pytest.fixture
def mock_session():
    session = MagicMock(spec=requests.Session)
    session.headers = {}
    return session


@pytest.fixture
def chain(providers, mock_session):
    return GeoLookupChain(providers, timeout=3.0, session=mock_session)
