"""Request-scoped logging context.

Values bound here ride along on every entry logged while a request is
handled, including entries from the geolocation client and the profile
store. ``RequestContextMiddleware`` opens the block for each request.
"""

import uuid
from contextlib import contextmanager
from typing import Any, Iterator, Optional

import structlog

CORRELATION_HEADER = "X-Correlation-ID"


@contextmanager
def bind_request_context(
    correlation_id: Optional[str] = None,
    user_id: Optional[str] = None,
    request_path: Optional[str] = None,
    request_method: Optional[str] = None,
    **extra_context: Any,
) -> Iterator[None]:
    """Bind request fields for the duration of the block.

    A correlation id is generated when none is given. Fields passed as
    ``None`` are left out, and whatever an enclosing block bound is put back
    on exit, even when the block raises.

        with bind_request_context(request_path="/fr/search", request_method="GET"):
            logger.info("locale_resolved")
    """
    fields = {
        "correlation_id": correlation_id or str(uuid.uuid4()),
        "user_id": user_id,
        "request_path": request_path,
        "request_method": request_method,
        **extra_context,
    }
    tokens = structlog.contextvars.bind_contextvars(
        **{key: value for key, value in fields.items() if value is not None}
    )
    try:
        yield
    finally:
        structlog.contextvars.reset_contextvars(**tokens)


def get_correlation_id() -> Optional[str]:
    return structlog.contextvars.get_contextvars().get("correlation_id")


def set_correlation_id(correlation_id: str) -> None:
    structlog.contextvars.bind_contextvars(correlation_id=correlation_id)


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()
