"""Result record for calls that leave the process.

Geolocation providers and the profile repository never raise to their
callers; they hand back an ``OperationResult`` and the caller decides
whether to fall through to the next provider, fall back to defaults, or
publish the failure.
"""

from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

from infrastructure.operations.status import OperationStatus


@dataclass
class OperationResult:
    """Outcome of one outbound call.

    ``data`` carries the payload on success (a country code, a profile item)
    and may carry diagnostic context on failure. ``error_code`` is a short
    machine-readable tag such as ``TIMEOUT`` or ``PROFILE_NOT_FOUND``.
    """

    status: OperationStatus
    message: str
    data: Optional[Any] = None
    error_code: Optional[str] = None
    retry_after: Optional[int] = None

    @property
    def is_success(self) -> bool:
        return self.status is OperationStatus.SUCCESS

    def to_dict(self) -> Dict[str, Any]:
        payload = {field.name: getattr(self, field.name) for field in fields(self)}
        payload["status"] = self.status.value
        return payload

    @classmethod
    def success(cls, data: Optional[Any] = None, message: str = "ok") -> "OperationResult":
        return cls(OperationStatus.SUCCESS, message, data=data)

    @classmethod
    def error(
        cls,
        status: OperationStatus,
        message: str,
        error_code: Optional[str] = None,
        retry_after: Optional[int] = None,
        data: Optional[Any] = None,
    ) -> "OperationResult":
        """Failure with an explicit status, e.g. ``NOT_FOUND`` for a missing profile."""
        return cls(status, message, data=data, error_code=error_code, retry_after=retry_after)

    @classmethod
    def transient_error(
        cls,
        message: str,
        error_code: Optional[str] = None,
        retry_after: Optional[int] = None,
    ) -> "OperationResult":
        """Timeouts, unreachable hosts, 5xx answers and throttling."""
        return cls.error(OperationStatus.TRANSIENT_ERROR, message, error_code, retry_after)

    @classmethod
    def permanent_error(cls, message: str, error_code: Optional[str] = None) -> "OperationResult":
        """Answers that will not improve on retry, such as a malformed body."""
        return cls.error(OperationStatus.PERMANENT_ERROR, message, error_code)
