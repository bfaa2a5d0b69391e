"""Integration tests for RouteLanguageGate."""

import pytest
import requests


def _deleted_cookies(response):
    return sorted(
        header.split("=", 1)[0]
        for header in response.headers.get_list("set-cookie")
        if "Max-Age=0" in header
    )


@pytest.mark.integration
class TestRedirects:
    """Bare page paths are redirected to a language-prefixed URL."""

    def test_redirects_to_geolocated_language(self, client):
        response = client.get("/search?q=drama", follow_redirects=False)

        assert response.status_code == 307
        assert response.headers["location"] == "/tr/search?q=drama"

    def test_root_path(self, client):
        response = client.get("/", follow_redirects=False)

        assert response.headers["location"] == "/tr/"

    def test_head_requests_are_redirected(self, client):
        response = client.head("/title/42", follow_redirects=False)

        assert response.status_code == 307
        assert response.headers["location"] == "/tr/title/42"

    def test_clears_preference_cookies(self, client):
        client.cookies.set("user_country", "DE")
        client.cookies.set("user_language", "de")

        response = client.get("/search", follow_redirects=False)

        assert _deleted_cookies(response) == ["user_country", "user_language"]

    def test_cookie_reset_can_be_disabled(self, client, monkeypatch):
        monkeypatch.setenv("PREFERENCES_GATE_RESET_COOKIES", "false")

        response = client.get("/search", follow_redirects=False)

        assert response.status_code == 307
        assert "set-cookie" not in response.headers

    def test_browser_language_when_geolocation_fails(self, client, geo_session):
        geo_session.get.side_effect = requests.ConnectionError("offline")

        response = client.get(
            "/search", headers={"Accept-Language": "de-CH,de;q=0.9"}, follow_redirects=False
        )

        assert response.headers["location"] == "/de/search"

    def test_unmapped_country_uses_browser_language(self, client, geo_session):
        geo_session.get.return_value.json.return_value = {"country_code": "AQ"}

        response = client.get(
            "/search", headers={"Accept-Language": "it"}, follow_redirects=False
        )

        assert response.headers["location"] == "/it/search"

    def test_redirect_lands_on_page_route(self, client):
        response = client.get("/search")

        assert response.status_code == 200
        assert response.json()["path"] == "/tr/search"


@pytest.mark.integration
class TestPassThrough:
    """Requests the gate leaves alone."""

    @pytest.mark.parametrize("path", ["/fr/search", "/en", "/el/title/7?x=1"])
    def test_language_prefixed_paths(self, client, path):
        response = client.get(path, follow_redirects=False)

        assert response.status_code == 200

    @pytest.mark.parametrize("path", ["/reset-password", "/auth/callback", "/auth/callback/x"])
    def test_exempt_paths_are_not_redirected(self, client, geo_session, path):
        response = client.get(path, follow_redirects=False)

        assert response.status_code != 307
        assert "location" not in response.headers
        geo_session.get.assert_not_called()

    def test_service_prefixes(self, client):
        response = client.get("/api/v1/preferences/languages", follow_redirects=False)

        assert response.status_code == 200

    def test_other_methods(self, client):
        response = client.post("/search", follow_redirects=False)

        assert response.status_code != 307
