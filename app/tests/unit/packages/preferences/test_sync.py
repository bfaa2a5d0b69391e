"""Unit tests for LocaleSyncController."""

import pytest

from packages.preferences.events import PREFERENCES_CHANGED
from packages.preferences.resolver import DERIVE
from packages.preferences.sync import LocaleSyncController, Navigation


@pytest.fixture
def make_controller(make_cookies, profiles, anonymous, pair):
    def _factory(start=("US", "en"), identity=anonymous, cookies=None, **kwargs):
        return LocaleSyncController(
            pair=pair(*start),
            identity=identity,
            cookies=cookies if cookies is not None else make_cookies(),
            profiles=profiles,
            **kwargs,
        )

    return _factory


@pytest.mark.unit
class TestSetCountry:
    """Tests for set_country."""

    def test_language_follows_country(self, make_controller, captured_events, pair):
        controller = make_controller()

        change = controller.set_country("TR")

        assert controller.pair == pair("TR", "tr")
        assert change.country_changed and change.language_changed
        (event,) = captured_events[PREFERENCES_CHANGED]
        assert event.metadata == {
            "country_changed": True,
            "language_changed": True,
            "new_country": "TR",
            "new_language": "tr",
        }

    def test_lowercase_input(self, make_controller, pair):
        controller = make_controller()

        controller.set_country("de")

        assert controller.pair == pair("DE", "de")

    def test_unmapped_country_gets_english(self, make_controller, pair):
        controller = make_controller(start=("FR", "fr"))

        controller.set_country("AQ")

        assert controller.pair == pair("AQ", "en")

    @pytest.mark.parametrize("code", ["", "TUR", "1A", "Türkiye"])
    def test_malformed_code_raises_before_any_change(
        self, make_controller, captured_events, code, pair
    ):
        controller = make_controller()

        with pytest.raises(ValueError):
            controller.set_country(code)

        assert controller.pair == pair("US", "en")
        assert captured_events[PREFERENCES_CHANGED] == []

    def test_same_country_persists_without_notifying(
        self, make_controller, make_cookies, mock_response, captured_events
    ):
        controller = make_controller(start=("TR", "tr"), cookies=make_cookies("TR", "tr"))

        change = controller.set_country("TR")

        assert not change.changed
        assert mock_response.set_cookie.call_count == 2
        assert captured_events[PREFERENCES_CHANGED] == []

    def test_anonymous_persists_to_cookies(self, make_controller, make_cookies, repository, pair):
        cookies = make_cookies()
        controller = make_controller(cookies=cookies)

        controller.set_country("JP")

        assert cookies.read() == pair("JP", "ja")
        assert not repository.get_profile("user-1").is_success

    def test_signed_in_persists_to_profile(
        self, make_controller, signed_in, repository, mock_response, captured_events
    ):
        controller = make_controller(identity=signed_in)

        controller.set_country("BR")

        profile = repository.get_profile("user-1").data
        assert profile["country_code"] == "BR"
        assert profile["language_code"] == "pt"
        mock_response.set_cookie.assert_not_called()
        assert captured_events[PREFERENCES_CHANGED][0].user_id == "user-1"

    def test_rewrites_url_when_synced(self, make_controller):
        controller = make_controller(url_sync=True, current_url="/en/search?q=a")

        controller.set_country("FR")

        assert controller.navigation == Navigation(url="/fr/search?q=a", replace=True)


@pytest.mark.unit
class TestSetLanguage:
    """Tests for set_language."""

    def test_country_follows_language(self, make_controller, captured_events, pair):
        controller = make_controller()

        change = controller.set_language("pt")

        assert controller.pair == pair("PT", "pt")
        assert change.country_changed and change.language_changed
        assert len(captured_events[PREFERENCES_CHANGED]) == 1

    def test_unsupported_language_becomes_english(self, make_controller, pair):
        controller = make_controller(start=("DE", "de"))

        controller.set_language("xx")

        assert controller.pair == pair("US", "en")

    def test_same_language_is_idempotent(
        self, make_controller, make_cookies, mock_response, captured_events
    ):
        controller = make_controller(start=("FR", "fr"), cookies=make_cookies("FR", "fr"))

        first = controller.set_language("fr")
        second = controller.set_language("fr")

        assert not first.changed and not second.changed
        mock_response.set_cookie.assert_not_called()
        assert captured_events[PREFERENCES_CHANGED] == []

    def test_same_language_realigns_country(self, make_controller, pair):
        controller = make_controller(start=("CA", "fr"))

        change = controller.set_language("fr")

        assert controller.pair == pair("FR", "fr")
        assert change.country_changed and not change.language_changed

    def test_rewrites_url_keeping_query_and_fragment(self, make_controller):
        controller = make_controller(
            start=("FR", "fr"), url_sync=True, current_url="/fr/search?q=drama#results"
        )

        controller.set_language("de")

        assert controller.navigation == Navigation(url="/de/search?q=drama#results", replace=True)
        assert controller.current_url == "/de/search?q=drama#results"

    def test_url_given_with_call_enables_sync(self, make_controller):
        controller = make_controller(start=("FR", "fr"))

        controller.set_language("ar", current_url="/fr/title/7")

        assert controller.navigation.url == "/ar/title/7"

    def test_no_navigation_when_url_already_correct(self, make_controller):
        controller = make_controller(start=("CA", "fr"), url_sync=True, current_url="/fr/")

        controller.set_language("fr")

        assert controller.navigation is None

    def test_no_navigation_without_url_sync(self, make_controller):
        controller = make_controller(current_url="/search")

        controller.set_language("de")

        assert controller.navigation is None


@pytest.mark.unit
class TestObservePath:
    """Tests for URL navigation handling."""

    def test_switches_language_without_navigation(
        self, make_controller, make_cookies, captured_events, pair
    ):
        cookies = make_cookies()
        controller = make_controller(start=("TR", "tr"), cookies=cookies)

        change = controller.observe_path("/de/search")

        assert controller.pair == pair("TR", "de")
        assert change.language_changed and not change.country_changed
        assert controller.navigation is None
        assert controller.url_sync is True
        assert cookies.read() == pair("TR", "de")
        assert len(captured_events[PREFERENCES_CHANGED]) == 1

    def test_derive_policy(self, make_controller, pair):
        controller = make_controller(start=("TR", "tr"), url_country_policy=DERIVE)

        controller.observe_path("/de/")

        assert controller.pair == pair("DE", "de")

    @pytest.mark.parametrize("path", ["/tr/search", "/search", "/xx/"])
    def test_nothing_to_do(self, make_controller, captured_events, path, pair):
        controller = make_controller(start=("TR", "tr"))

        assert not controller.observe_path(path).changed
        assert controller.pair == pair("TR", "tr")
        assert captured_events[PREFERENCES_CHANGED] == []


@pytest.mark.unit
class TestClosedController:
    """Calls after the session ends are ignored."""

    def test_calls_are_ignored(self, make_controller, captured_events, mock_response, pair):
        controller = make_controller()
        controller.close()

        assert not controller.set_country("TR").changed
        assert not controller.set_language("de").changed
        assert not controller.observe_path("/fr/").changed
        assert controller.pair == pair("US", "en")
        mock_response.set_cookie.assert_not_called()
        assert captured_events[PREFERENCES_CHANGED] == []

    def test_malformed_country_still_raises(self, make_controller):
        controller = make_controller()
        controller.close()

        with pytest.raises(ValueError):
            controller.set_country("nope")
