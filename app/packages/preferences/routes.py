"""FastAPI routes for the preferences package."""

from typing import Optional
from urllib.parse import urlsplit

import structlog
from fastapi import APIRouter, Query

from infrastructure.i18n import (
    LanguageCode,
    country_for_language,
    country_name,
    supported_countries,
)
from packages.preferences.dependencies import LocaleSessionDep
from packages.preferences.events import PreferencesChange
from packages.preferences.schemas import (
    CountriesResponse,
    LanguageInfo,
    LanguagesResponse,
    NavigationResponse,
    PageContextResponse,
    PreferencesChangeResponse,
    PreferencesResponse,
    SetCountryRequest,
    SetLanguageRequest,
)
from packages.preferences.session import LocaleSession

logger = structlog.get_logger()
router = APIRouter(prefix="/preferences", tags=["preferences"])
pages_router = APIRouter(tags=["pages"])


def _page_path(url: Optional[str]) -> Optional[str]:
    return urlsplit(url).path if url else None


def _change_response(
    session: LocaleSession, change: PreferencesChange
) -> PreferencesChangeResponse:
    controller = session.controller
    navigation = None
    if controller.navigation is not None:
        navigation = NavigationResponse(
            url=controller.navigation.url, replace=controller.navigation.replace
        )
    pair = controller.pair
    return PreferencesChangeResponse(
        country_code=pair.country,
        language_code=pair.language.value,
        direction=pair.direction.value,
        country_changed=change.country_changed,
        language_changed=change.language_changed,
        navigation=navigation,
    )


@router.get(
    "",
    response_model=PreferencesResponse,
    summary="Get Locale Preferences",
    description="Resolve the visitor's active country and language",
)
def get_preferences(
    session: LocaleSessionDep,
    path: Optional[str] = Query(None, description="Current page path"),
) -> PreferencesResponse:
    resolution = session.open(path=_page_path(path))
    pair = resolution.pair
    return PreferencesResponse(
        country_code=pair.country,
        language_code=pair.language.value,
        direction=pair.direction.value,
        country_name=country_name(pair.country),
        source=resolution.source.value,
        url_sync=resolution.url_sync,
    )


@router.put(
    "/country",
    response_model=PreferencesChangeResponse,
    summary="Set Country",
    description="Select a country; the language follows the country",
)
def put_country(
    request: SetCountryRequest, session: LocaleSessionDep
) -> PreferencesChangeResponse:
    log = logger.bind(endpoint="/preferences/country", country=request.country_code)
    session.open(path=_page_path(request.current_url))
    controller = session.controller
    if request.current_url:
        controller.observe_url(request.current_url)

    change = controller.set_country(request.country_code)
    log.info("country_set", changed=change.changed)
    return _change_response(session, change)


@router.put(
    "/language",
    response_model=PreferencesChangeResponse,
    summary="Set Language",
    description="Select a language; unsupported codes fall back to English",
)
def put_language(
    request: SetLanguageRequest, session: LocaleSessionDep
) -> PreferencesChangeResponse:
    log = logger.bind(endpoint="/preferences/language", language=request.language_code)
    session.open(path=_page_path(request.current_url))

    change = session.controller.set_language(
        request.language_code, current_url=request.current_url
    )
    log.info("language_set", changed=change.changed)
    return _change_response(session, change)


@router.get(
    "/countries",
    response_model=CountriesResponse,
    summary="List Countries",
    description="Supported countries with English names, sorted by name",
)
def get_countries() -> CountriesResponse:
    return CountriesResponse(countries=supported_countries())


@router.get(
    "/languages",
    response_model=LanguagesResponse,
    summary="List Languages",
)
def get_languages() -> LanguagesResponse:
    return LanguagesResponse(
        languages=[
            LanguageInfo(
                code=language.value,
                direction=language.direction.value,
                country_code=country_for_language(language),
            )
            for language in LanguageCode
        ]
    )


@pages_router.get(
    "/{language}",
    response_model=PageContextResponse,
    include_in_schema=False,
)
@pages_router.get(
    "/{language}/{page_path:path}",
    response_model=PageContextResponse,
    summary="Page Context",
    description="Document language and direction for a language-prefixed page",
)
def get_page_context(
    language: LanguageCode,
    session: LocaleSessionDep,
    page_path: str = "",
) -> PageContextResponse:
    """Resolve the visitor's locale for a page and follow its URL language."""
    path = f"/{language.value}/{page_path}" if page_path else f"/{language.value}"
    session.open(path=path)
    session.controller.observe_path(path)
    pair = session.pair
    return PageContextResponse(
        lang=language.value,
        dir=language.direction.value,
        country_code=pair.country,
        path=path,
    )
