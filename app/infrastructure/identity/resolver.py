"""Optional access-token identity resolution.

Locale preferences work for everyone, so a missing, expired or forged token
resolves to an anonymous identity instead of a 401.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import structlog
from fastapi import Request
from jose import JWTError, jwt  # type: ignore

from infrastructure.identity.models import SessionIdentity

logger = structlog.get_logger()

ACCESS_COOKIE = "access_token"


class SessionIdentityResolver:
    """Resolve the request's identity from a signed JWT.

    The token is read from ``Authorization: Bearer <jwt>`` first and the
    ``access_token`` cookie second. Its ``sub`` claim is the user id.

    Args:
        secret_key: HMAC secret used to verify tokens. When None every
            request is anonymous.
        algorithm: JWT signing algorithm.
    """

    def __init__(self, secret_key: Optional[str], algorithm: str = "HS256") -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._logger = logger.bind(component="session_identity_resolver")

    def resolve(self, request: Request) -> SessionIdentity:
        """Identity for an incoming request; never raises."""
        return self.resolve_credentials(self._extract(request))

    def resolve_credentials(self, encoded: Optional[str]) -> SessionIdentity:
        """Identity for an encoded JWT, anonymous when it does not verify."""
        if not encoded or not self._secret_key:
            return SessionIdentity.anonymous()

        try:
            payload = jwt.decode(encoded, self._secret_key, algorithms=[self._algorithm])
        except JWTError as e:
            self._logger.info("jwt_decoding_failed", error=str(e))
            return SessionIdentity.anonymous()

        subject = payload.get("sub")
        if not subject or not isinstance(subject, str):
            self._logger.info("jwt_missing_subject")
            return SessionIdentity.anonymous()

        return SessionIdentity.authenticated(subject)

    def issue(self, user_id: str, expires_delta: Optional[timedelta] = None) -> str:
        """Sign an access JWT for ``user_id`` (development and tests).

        Raises:
            ValueError: If no secret key is configured.
        """
        if not self._secret_key:
            raise ValueError("SESSION_SECRET_KEY is not configured")

        expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=15))
        claims = {"sub": user_id, "exp": expire}
        return jwt.encode(claims, self._secret_key, algorithm=self._algorithm)

    @staticmethod
    def _extract(request: Request) -> Optional[str]:
        header = request.headers.get("Authorization", "")
        scheme, _, credentials = header.partition(" ")
        if scheme.lower() == "bearer" and credentials.strip():
            return credentials.strip()
        return request.cookies.get(ACCESS_COOKIE)
