from fastapi import APIRouter, Request

from api.dependencies.rate_limits import get_limiter
from infrastructure.services import SettingsDep

router = APIRouter(tags=["System"])
limiter = get_limiter()

# Polled by the load balancer and uptime checks
PROBE_LIMIT = "50/minute"


@router.get("/version")
@limiter.limit(PROBE_LIMIT)
def get_version(request: Request, settings: SettingsDep):  # pylint: disable=unused-argument
    """Deployed git SHA."""
    return {"version": settings.GIT_SHA}


@router.get("/health")
@limiter.limit(PROBE_LIMIT)
def get_health(request: Request):  # pylint: disable=unused-argument
    """Liveness probe; does not call geolocation providers or the profile table."""
    return {"status": "ok"}
