"""structlog wiring for the locale service.

Modules log through ``get_module_logger()`` (or ``structlog.get_logger()``
with a bound ``component``), the request middleware binds the correlation id
with ``bind_request_context``, and the lifespan calls ``configure_logging()``
once at startup.
"""

from infrastructure.logging.context import (
    CORRELATION_HEADER,
    bind_request_context,
    clear_request_context,
    get_correlation_id,
    set_correlation_id,
)
from infrastructure.logging.formatters import (
    SENSITIVE_PATTERNS,
    add_app_info,
    anonymize_client_ip,
    mask_sensitive_data,
    truncate_large_values,
)
from infrastructure.logging.setup import (
    configure_logging,
    get_logger,
    get_module_logger,
)

__all__ = [
    "CORRELATION_HEADER",
    "SENSITIVE_PATTERNS",
    "add_app_info",
    "anonymize_client_ip",
    "bind_request_context",
    "clear_request_context",
    "configure_logging",
    "get_correlation_id",
    "get_logger",
    "get_module_logger",
    "mask_sensitive_data",
    "set_correlation_id",
    "truncate_large_values",
]
