"""Outcome categories for ``OperationResult``."""

from enum import Enum


class OperationStatus(Enum):
    SUCCESS = "success"
    # Worth another attempt later: network failures, timeouts, 429/5xx
    TRANSIENT_ERROR = "transient_error"
    # Retrying will not help: malformed payloads, rejected input
    PERMANENT_ERROR = "permanent_error"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
