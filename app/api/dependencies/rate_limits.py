from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from packages.preferences.routing import client_ip_from_request


def client_address_key(request: Request) -> str:
    """Limit per visitor, using the first X-Forwarded-For hop behind the load balancer."""
    return client_ip_from_request(request) or get_remote_address(request)


limiter = Limiter(key_func=client_address_key)


async def rate_limit_handler(_request: Request, _exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=429, content={"message": "Rate limit exceeded"})


def setup_rate_limiter(app: FastAPI) -> None:
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_handler)


def get_limiter() -> Limiter:
    return limiter
