"""Turn exceptions from ``requests`` and ``botocore`` into ``OperationResult``.

The geolocation client and the DynamoDB profile repository catch broadly at
their boundary and hand the exception here, so everything above them only
ever sees a status.
"""

from typing import Optional

import requests
from botocore.exceptions import BotoCoreError, ClientError

from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

DEFAULT_RETRY_AFTER = 60

_AWS_THROTTLING_CODES = frozenset(
    {
        "Throttling",
        "ThrottlingException",
        "RequestLimitExceeded",
        "ProvisionedThroughputExceededException",
    }
)

# DynamoDB error code -> (status, message, error_code)
_AWS_CODE_MAP = {
    "AccessDeniedException": (
        OperationStatus.UNAUTHORIZED,
        "Profile table access denied",
        "FORBIDDEN",
    ),
    "ResourceNotFoundException": (
        OperationStatus.NOT_FOUND,
        "Profile table not found",
        "NOT_FOUND",
    ),
    "ValidationException": (
        OperationStatus.PERMANENT_ERROR,
        "Profile request rejected by DynamoDB",
        "INVALID_REQUEST",
    ),
    "ConditionalCheckFailedException": (
        OperationStatus.PERMANENT_ERROR,
        "Profile update condition failed",
        "INVALID_REQUEST",
    ),
}


def _retry_after_seconds(response) -> int:
    raw = response.headers.get("Retry-After") if response is not None else None
    if raw and str(raw).isdigit():
        return int(raw)
    return DEFAULT_RETRY_AFTER


def classify_http_error(exc: Exception) -> OperationResult:
    """Map a ``requests`` failure to a result.

    Timeouts, connection failures, 429 and 5xx are transient; 401/403 are
    unauthorized; 404 is not found; any other 4xx is permanent. An
    ``HTTPError`` without a response, or any other exception, is treated as
    transient.
    """
    if isinstance(exc, requests.Timeout):
        return OperationResult.transient_error(f"Request timed out: {exc}", "TIMEOUT")
    if isinstance(exc, requests.ConnectionError):
        return OperationResult.transient_error(
            f"Connection error: {exc}", "CONNECTION_ERROR"
        )

    response = getattr(exc, "response", None)
    status_code: Optional[int] = getattr(response, "status_code", None)
    if not isinstance(exc, requests.HTTPError) or status_code is None:
        return OperationResult.transient_error(
            f"HTTP client error: {type(exc).__name__}: {exc}", "HTTP_CLIENT_ERROR"
        )

    if status_code == 429:
        return OperationResult.transient_error(
            "Provider rate limited the lookup",
            "RATE_LIMITED",
            retry_after=_retry_after_seconds(response),
        )
    if status_code in (401, 403):
        return OperationResult.error(
            OperationStatus.UNAUTHORIZED,
            f"Provider refused the lookup ({status_code})",
            "UNAUTHORIZED",
        )
    if status_code == 404:
        return OperationResult.error(
            OperationStatus.NOT_FOUND, "Provider endpoint not found", "NOT_FOUND"
        )
    if status_code >= 500:
        return OperationResult.transient_error(
            f"Provider server error ({status_code})", "SERVER_ERROR"
        )
    return OperationResult.permanent_error(
        f"Provider rejected the lookup ({status_code})", "HTTP_ERROR"
    )


def classify_aws_error(exc: Exception) -> OperationResult:
    """Map a boto3/botocore failure to a result.

    Throttling is transient with a retry hint; access, missing-table and
    validation codes come from ``_AWS_CODE_MAP``; any other service error
    or a transport-level ``BotoCoreError`` is transient.
    """
    if not isinstance(exc, ClientError):
        label = "AWS connection error" if isinstance(exc, BotoCoreError) else "AWS error"
        return OperationResult.transient_error(
            f"{label}: {type(exc).__name__}: {exc}", "CONNECTION_ERROR"
        )

    code = exc.response.get("Error", {}).get("Code", "Unknown")
    if code in _AWS_THROTTLING_CODES:
        return OperationResult.transient_error(
            f"DynamoDB throttled the request ({code})",
            "RATE_LIMITED",
            retry_after=DEFAULT_RETRY_AFTER,
        )
    if code in _AWS_CODE_MAP:
        status, message, error_code = _AWS_CODE_MAP[code]
        return OperationResult.error(status, message, error_code)
    return OperationResult.transient_error(f"AWS client error: {code}", "AWS_CLIENT_ERROR")
