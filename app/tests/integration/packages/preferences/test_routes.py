"""Integration tests for the preferences routes."""

from unittest.mock import MagicMock

import pytest
import requests

from packages.preferences.events import PREFERENCES_CHANGED


def _set_cookies(client, country, language):
    client.cookies.set("user_country", country)
    client.cookies.set("user_language", language)


@pytest.mark.integration
class TestGetPreferences:
    """GET /api/v1/preferences."""

    def test_first_visit_uses_geolocation_and_sets_cookies(self, client):
        response = client.get("/api/v1/preferences")

        assert response.status_code == 200
        assert response.json() == {
            "country_code": "TR",
            "language_code": "tr",
            "direction": "ltr",
            "country_name": "Turkey",
            "source": "geolocation",
            "url_sync": False,
        }
        assert response.cookies["user_country"] == "TR"
        assert response.cookies["user_language"] == "tr"

    def test_url_language_needs_no_geolocation(self, client, geo_session):
        response = client.get("/api/v1/preferences", params={"path": "/fr/search"})

        body = response.json()
        assert body["language_code"] == "fr"
        assert body["country_code"] == "FR"
        assert body["source"] == "url"
        assert body["url_sync"] is True
        geo_session.get.assert_not_called()

    def test_all_providers_failing_gives_us_english(self, client, geo_session):
        geo_session.get.side_effect = requests.ConnectionError("offline")

        body = client.get("/api/v1/preferences").json()

        assert (body["country_code"], body["language_code"]) == ("US", "en")
        assert geo_session.get.call_count == 2

    def test_non_letter_provider_answer_falls_through(self, client, geo_session):
        malformed = MagicMock()
        malformed.json.return_value = {"country_code": "--"}
        answered = MagicMock()
        answered.json.return_value = {"countryCode": "de"}
        geo_session.get.side_effect = [malformed, answered]

        response = client.get("/api/v1/preferences")

        assert response.status_code == 200
        body = response.json()
        assert (body["country_code"], body["language_code"]) == ("DE", "de")
        assert geo_session.get.call_count == 2

    def test_browser_region_when_providers_fail(self, client, geo_session):
        geo_session.get.side_effect = requests.Timeout("slow")

        body = client.get(
            "/api/v1/preferences", headers={"Accept-Language": "pt-BR,pt;q=0.9"}
        ).json()

        assert (body["country_code"], body["language_code"]) == ("BR", "pt")

    def test_cookie_pair_is_reused(self, client, geo_session):
        _set_cookies(client, "SA", "ar")

        body = client.get("/api/v1/preferences").json()

        assert body["source"] == "cookies"
        assert body["direction"] == "rtl"
        assert body["country_name"] == "Saudi Arabia"
        geo_session.get.assert_not_called()

    def test_profile_overrides_cookies(self, client, repository, auth_headers):
        repository.update_profile("user-1", {"country_code": "KR", "language_code": "ko"})
        _set_cookies(client, "TR", "tr")

        response = client.get("/api/v1/preferences", headers=auth_headers())

        assert response.json()["source"] == "profile"
        assert response.json()["language_code"] == "ko"
        assert response.cookies["user_language"] == "ko"

    def test_invalid_token_is_anonymous(self, client):
        _set_cookies(client, "DE", "de")

        response = client.get(
            "/api/v1/preferences", headers={"Authorization": "Bearer forged"}
        )

        assert response.status_code == 200
        assert response.json()["source"] == "cookies"


@pytest.mark.integration
class TestSetCountry:
    """PUT /api/v1/preferences/country."""

    def test_language_follows_country_with_one_notification(self, client, captured_events):
        _set_cookies(client, "US", "en")

        response = client.put("/api/v1/preferences/country", json={"country_code": "TR"})

        assert response.status_code == 200
        assert response.json() == {
            "country_code": "TR",
            "language_code": "tr",
            "direction": "ltr",
            "country_changed": True,
            "language_changed": True,
            "navigation": None,
        }
        assert response.cookies["user_language"] == "tr"
        assert len(captured_events[PREFERENCES_CHANGED]) == 1

    def test_lowercase_code_is_normalized(self, client):
        _set_cookies(client, "US", "en")

        response = client.put("/api/v1/preferences/country", json={"country_code": "de"})

        assert response.json()["country_code"] == "DE"

    @pytest.mark.parametrize("code", ["TUR", "", "1A"])
    def test_malformed_code_is_rejected(self, client, captured_events, code):
        response = client.put("/api/v1/preferences/country", json={"country_code": code})

        assert response.status_code == 422
        assert captured_events[PREFERENCES_CHANGED] == []

    def test_keeps_url_in_sync(self, client):
        _set_cookies(client, "US", "en")

        response = client.put(
            "/api/v1/preferences/country",
            json={"country_code": "JP", "current_url": "/en/title/42?ref=home"},
        )

        assert response.json()["navigation"] == {"url": "/ja/title/42?ref=home", "replace": True}

    def test_signed_in_writes_profile(self, client, repository, auth_headers):
        response = client.put(
            "/api/v1/preferences/country",
            json={"country_code": "BR"},
            headers=auth_headers(),
        )

        assert response.status_code == 200
        profile = repository.get_profile("user-1").data
        assert profile["country_code"] == "BR"
        assert profile["language_code"] == "pt"
        assert "updated_at" in profile


@pytest.mark.integration
class TestSetLanguage:
    """PUT /api/v1/preferences/language."""

    def test_unsupported_language_falls_back_to_english(self, client):
        _set_cookies(client, "DE", "de")

        response = client.put("/api/v1/preferences/language", json={"language_code": "xx"})

        assert response.status_code == 200
        assert response.json()["language_code"] == "en"
        assert response.json()["country_code"] == "US"

    def test_rewrites_url_keeping_query_and_fragment(self, client):
        response = client.put(
            "/api/v1/preferences/language",
            json={"language_code": "de", "current_url": "/fr/search?q=drama#results"},
        )

        assert response.json()["navigation"] == {
            "url": "/de/search?q=drama#results",
            "replace": True,
        }
        assert response.json()["language_code"] == "de"

    def test_same_language_is_idempotent(self, client, captured_events):
        _set_cookies(client, "FR", "fr")

        first = client.put("/api/v1/preferences/language", json={"language_code": "fr"})
        second = client.put("/api/v1/preferences/language", json={"language_code": "fr"})

        for response in (first, second):
            assert response.json()["language_changed"] is False
            assert response.json()["country_changed"] is False
            assert "set-cookie" not in response.headers
        assert captured_events[PREFERENCES_CHANGED] == []


@pytest.mark.integration
class TestCatalogs:
    """Country and language listings."""

    def test_countries_sorted_by_name(self, client):
        countries = client.get("/api/v1/preferences/countries").json()["countries"]

        names = list(countries.values())
        assert countries["TR"] == "Turkey"
        assert names.index("Germany") < names.index("Turkey")

    def test_languages(self, client):
        languages = client.get("/api/v1/preferences/languages").json()["languages"]

        assert len(languages) == 20
        assert {"code": "ar", "direction": "rtl", "country_code": "SA"} in languages


@pytest.mark.integration
class TestPageContext:
    """Language-prefixed page routes."""

    def test_page_context(self, client):
        response = client.get("/fr/search")

        assert response.status_code == 200
        assert response.json() == {
            "lang": "fr",
            "dir": "ltr",
            "country_code": "FR",
            "path": "/fr/search",
        }

    def test_language_root(self, client):
        body = client.get("/ar").json()

        assert body["dir"] == "rtl"
        assert body["path"] == "/ar"

    def test_url_language_switch_updates_signed_in_profile(
        self, client, repository, auth_headers, captured_events
    ):
        repository.update_profile("user-1", {"country_code": "TR", "language_code": "tr"})

        body = client.get("/de/movies", headers=auth_headers()).json()

        assert body["lang"] == "de"
        assert repository.get_profile("user-1").data["language_code"] == "de"
        assert len(captured_events[PREFERENCES_CHANGED]) == 1
