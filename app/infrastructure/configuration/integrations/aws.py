"""AWS settings for the DynamoDB profile repository."""

from typing import Optional

from pydantic import Field

from infrastructure.configuration.base import IntegrationSettings


class AwsSettings(IntegrationSettings):
    """Region and optional endpoint override.

    Set ``AWS_ENDPOINT_URL`` to point the profile repository at DynamoDB
    Local during development. Credentials come from the standard boto3 chain.
    """

    AWS_REGION: str = Field(default="ca-central-1", alias="AWS_REGION")
    ENDPOINT_URL: Optional[str] = Field(default=None, alias="AWS_ENDPOINT_URL")
