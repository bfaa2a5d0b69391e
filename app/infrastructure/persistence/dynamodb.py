"""DynamoDB user profile repository.

Table schema:
- Partition Key: user_id (string)
- Attributes: country_code, language_code, updated_at (ISO-8601 UTC strings)
"""

from typing import Any, Dict, Optional

import boto3  # type: ignore
from botocore.client import BaseClient  # type: ignore
from botocore.exceptions import BotoCoreError, ClientError  # type: ignore
import structlog

from infrastructure.operations import (
    OperationResult,
    OperationStatus,
    classify_aws_error,
)
from infrastructure.persistence.repository import ProfileRepository

logger = structlog.get_logger()

PARTITION_KEY = "user_id"


def get_dynamodb_client(
    region: Optional[str] = None, endpoint_url: Optional[str] = None
) -> BaseClient:
    """Create a DynamoDB client.

    Args:
        region: AWS region name
        endpoint_url: Optional endpoint override (local DynamoDB, localstack)

    Returns:
        botocore DynamoDB client
    """
    session_config = {"region_name": region} if region else {}
    client_config = {"endpoint_url": endpoint_url} if endpoint_url else {}
    session = boto3.Session(**session_config)
    return session.client("dynamodb", **client_config)


class DynamoDBProfileRepository(ProfileRepository):
    """Profile store backed by a DynamoDB table.

    Suitable for multi-instance deployments where every worker must see the
    same profile.

    Args:
        table_name: DynamoDB table holding user profiles
        client: Optional pre-built DynamoDB client (tests)
        region: AWS region used when no client is given
        endpoint_url: Optional endpoint override used when no client is given
    """

    def __init__(
        self,
        table_name: str,
        client: Optional[BaseClient] = None,
        region: Optional[str] = None,
        endpoint_url: Optional[str] = None,
    ) -> None:
        self.table_name = table_name
        self._client = client or get_dynamodb_client(region, endpoint_url)
        self._logger = logger.bind(component="dynamodb_profile_repository", table=table_name)
        self._logger.info("initialized_profile_repository", backend="dynamodb", region=region)

    def get_profile(self, user_id: str) -> OperationResult:
        log = self._logger.bind(user_id=user_id)
        try:
            response = self._client.get_item(
                TableName=self.table_name,
                Key={PARTITION_KEY: {"S": user_id}},
                ConsistentRead=True,
            )
        except (BotoCoreError, ClientError) as e:
            result = classify_aws_error(e)
            log.warning("profile_get_failed", status=result.status.value, error=result.message)
            return result

        item = response.get("Item")
        if not item:
            log.debug("profile_not_found")
            return OperationResult.error(
                OperationStatus.NOT_FOUND,
                f"No profile for user {user_id}",
                error_code="PROFILE_NOT_FOUND",
            )

        # DynamoDB stores strings in {"S": "value"} format
        profile = {
            name: value.get("S") if isinstance(value, dict) else value
            for name, value in item.items()
        }
        return OperationResult.success(data=profile, message="Profile loaded")

    def update_profile(self, user_id: str, fields: Dict[str, Any]) -> OperationResult:
        log = self._logger.bind(user_id=user_id)
        names = {}
        values = {}
        assignments = []
        for index, (name, value) in enumerate(sorted(fields.items())):
            names[f"#f{index}"] = name
            values[f":v{index}"] = {"S": str(value)}
            assignments.append(f"#f{index} = :v{index}")

        if not assignments:
            return OperationResult.success(data={}, message="Nothing to update")

        try:
            self._client.update_item(
                TableName=self.table_name,
                Key={PARTITION_KEY: {"S": user_id}},
                UpdateExpression="SET " + ", ".join(assignments),
                ExpressionAttributeNames=names,
                ExpressionAttributeValues=values,
            )
        except (BotoCoreError, ClientError) as e:
            result = classify_aws_error(e)
            log.error("profile_update_failed", status=result.status.value, error=result.message)
            return result

        log.debug("profile_updated", fields=sorted(fields))
        return OperationResult.success(data=dict(fields), message="Profile updated")
