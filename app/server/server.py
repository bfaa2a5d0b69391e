from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.dependencies.rate_limits import setup_rate_limiter
from api.router import api_router
from infrastructure.services import get_geo_lookup_chain, get_settings
from packages.preferences.routing import RouteLanguageGate
from server.lifespan import lifespan
from server.middleware import RequestContextMiddleware

settings = get_settings()

handler = FastAPI(title="Locale Preferences", lifespan=lifespan)
setup_rate_limiter(handler)

# Starlette runs the last-added middleware outermost: CORS, then request
# context, then the language gate.
handler.add_middleware(
    RouteLanguageGate,
    settings_provider=get_settings,
    geo_provider=get_geo_lookup_chain,
)
handler.add_middleware(RequestContextMiddleware)
handler.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.is_production else settings.server.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

handler.include_router(api_router)
