"""HTTP server settings."""

from typing import List

from pydantic import Field

from infrastructure.configuration.base import InfrastructureSettings


class ServerSettings(InfrastructureSettings):
    """Token verification and CORS.

    ``SESSION_SECRET_KEY`` verifies the HS256 access tokens issued by the
    authentication service; when it is unset every visitor is anonymous.
    ``CORS_ALLOW_ORIGINS`` (JSON list) applies outside production only.
    """

    SECRET_KEY: str | None = Field(default=None, alias="SESSION_SECRET_KEY")
    JWT_ALGORITHM: str = Field(default="HS256", alias="SESSION_JWT_ALGORITHM")
    CORS_ALLOW_ORIGINS: List[str] = Field(
        default=["http://localhost:3000", "http://127.0.0.1:8000"],
        alias="CORS_ALLOW_ORIGINS",
    )
