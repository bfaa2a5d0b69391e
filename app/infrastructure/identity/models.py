"""Session identity model."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class IdentityKind(str, Enum):
    """Whether the visitor is signed in."""

    ANONYMOUS = "anonymous"
    AUTHENTICATED = "authenticated"


class SessionIdentity(BaseModel):
    """Who the current visitor is, as far as locale preferences care.

    Anonymous visitors keep their preferences in cookies; authenticated
    visitors also have a profile keyed by ``user_id``.
    """

    model_config = ConfigDict(frozen=True)

    kind: IdentityKind = Field(..., description="Anonymous or authenticated")
    user_id: Optional[str] = Field(
        default=None, description="Subject of the access token when authenticated"
    )

    @classmethod
    def anonymous(cls) -> "SessionIdentity":
        return cls(kind=IdentityKind.ANONYMOUS)

    @classmethod
    def authenticated(cls, user_id: str) -> "SessionIdentity":
        if not user_id:
            raise ValueError("Authenticated identity requires a user_id")
        return cls(kind=IdentityKind.AUTHENTICATED, user_id=user_id)

    @property
    def is_authenticated(self) -> bool:
        return self.kind == IdentityKind.AUTHENTICATED
