"""Application startup and shutdown."""

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, AsyncIterator

from fastapi import FastAPI
from structlog.stdlib import BoundLogger

from infrastructure.logging.setup import configure_logging
from infrastructure.services import (
    get_geo_lookup_chain,
    get_profile_repository,
    get_settings,
)
from packages.preferences.dependencies import get_profile_preferences

if TYPE_CHECKING:
    from infrastructure.configuration import Settings


def _log_configuration(settings: "Settings", logger: BoundLogger) -> None:
    """Log top-level values and the key names of each section, never section values."""
    top_level = {}
    for name, value in settings.model_dump().items():
        if isinstance(value, dict):
            logger.info("configuration_section_loaded", section=name, keys=sorted(value))
        else:
            top_level[name] = value
    logger.info("configuration_initialized", **top_level)


def _start_locale_services(app: FastAPI, settings: "Settings", logger: BoundLogger) -> None:
    chain = get_geo_lookup_chain()
    app.state.geo_lookup_chain = chain
    app.state.profile_preferences = get_profile_preferences()
    logger.info(
        "locale_services_started",
        providers=[provider.endpoint for provider in chain.providers],
        profile_backend=settings.preferences.PROFILE_BACKEND,
        url_country_policy=settings.preferences.URL_COUNTRY_POLICY,
    )


def _stop_locale_services(logger: BoundLogger) -> None:
    # Queued profile writes must land before the process exits
    get_profile_preferences().shutdown(wait=True)
    get_profile_preferences.cache_clear()
    get_profile_repository.cache_clear()
    logger.info("profile_writes_drained")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    logger = configure_logging(settings=settings)
    app.state.settings = settings
    app.state.logger = logger

    logger.info("application_startup", git_sha=settings.GIT_SHA)
    _log_configuration(settings, logger)
    _start_locale_services(app, settings, logger)
    try:
        yield
    finally:
        logger.info("application_shutdown")
        _stop_locale_services(logger)
