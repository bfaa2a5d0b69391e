"""structlog processors shared by every environment.

Each factory returns a processor with the ``(logger, method_name,
event_dict)`` signature so it can be dropped into the chain built by
``configure_logging``.
"""

import ipaddress
from typing import Any

EventDict = dict[str, Any]


def add_app_info(app_name: str, app_version: str = "unknown"):
    """Stamp ``app_name`` and ``app_version`` (the deployed git SHA) on entries."""

    def processor(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        event_dict["app_name"] = app_name
        event_dict["app_version"] = app_version
        return event_dict

    return processor


# Key fragments whose values never reach the logs. Session cookies and the
# bearer token carry the visitor identity.
SENSITIVE_PATTERNS = frozenset(
    {
        "password",
        "secret",
        "token",
        "api_key",
        "apikey",
        "authorization",
        "credential",
        "private_key",
        "cookie",
        "jwt",
        "bearer",
    }
)


def mask_sensitive_data(
    mask_value: str = "***REDACTED***",
    additional_patterns: frozenset[str] | None = None,
):
    """Replace values whose key contains a sensitive fragment.

    Keys are compared lowercased; ``None`` values are left alone so an
    absent token still reads as absent.
    """
    patterns = SENSITIVE_PATTERNS | (additional_patterns or frozenset())

    def processor(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        return {
            key: (
                mask_value
                if value is not None
                and any(fragment in key.lower() for fragment in patterns)
                else value
            )
            for key, value in event_dict.items()
        }

    return processor


def _truncate_address(value: str) -> str:
    try:
        address = ipaddress.ip_address(value)
    except ValueError:
        return value
    prefix = 24 if address.version == 4 else 48
    network = ipaddress.ip_network(f"{address}/{prefix}", strict=False)
    return str(network.network_address)


def anonymize_client_ip(suffix: str = "_ip"):
    """Zero the host part of visitor addresses logged under ``*_ip`` keys.

    IPv4 keeps its /24 and IPv6 its /48, which is still enough to debug a
    geolocation answer. Values that are not addresses pass through.
    """

    def processor(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        for key, value in event_dict.items():
            if key.endswith(suffix) and isinstance(value, str):
                event_dict[key] = _truncate_address(value)
        return event_dict

    return processor


def truncate_large_values(max_length: int = 500):
    """Cut string values longer than ``max_length`` and note the original size."""

    def processor(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        for key, value in event_dict.items():
            if isinstance(value, str) and len(value) > max_length:
                event_dict[key] = (
                    f"{value[:max_length]}...[truncated, {len(value)} chars total]"
                )
        return event_dict

    return processor
