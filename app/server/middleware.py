from starlette.middleware.base import BaseHTTPMiddleware

from infrastructure.logging import (
    CORRELATION_HEADER,
    bind_request_context,
    get_correlation_id,
)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Bind correlation id, path and method to every log entry of a request.

    The correlation id is taken from the incoming ``X-Correlation-ID`` header
    when present and echoed on the response.
    """

    async def dispatch(self, request, call_next):
        with bind_request_context(
            correlation_id=request.headers.get(CORRELATION_HEADER),
            request_path=request.url.path,
            request_method=request.method,
        ):
            correlation_id = get_correlation_id()
            response = await call_next(request)
        response.headers[CORRELATION_HEADER] = correlation_id
        return response
