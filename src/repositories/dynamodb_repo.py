"""DynamoDB document store helpers shared by the collection repositories."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, List, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from utils.error_handling import NotFoundError, PersistenceError
from utils.logging_config import get_logger

logger = get_logger(__name__)

KEY_ATTRIBUTE = "id"


def from_item(value: Any) -> Any:
    """Turn DynamoDB Decimals back into ints/floats, recursively."""
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, dict):
        return {k: from_item(v) for k, v in value.items()}
    if isinstance(value, list):
        return [from_item(v) for v in value]
    return value


class DynamoDbRepository:
    """Single-table document access keyed by ``id``."""

    def __init__(self, table_name: str, table=None, region: Optional[str] = None):
        self.table_name = table_name
        if table is None:
            table = boto3.resource("dynamodb", region_name=region).Table(table_name)
        self.table = table

    def get(self, key: str) -> Optional[Dict[str, Any]]:
        """Fetch one document or None."""
        try:
            resp = self.table.get_item(Key={KEY_ATTRIBUTE: key})
        except (BotoCoreError, ClientError) as exc:
            raise self._persistence_error("get", exc) from exc
        item = resp.get("Item")
        return from_item(item) if item else None

    def put(self, item: Dict[str, Any]) -> None:
        """Insert or replace a document."""
        try:
            self.table.put_item(Item=item)
        except (BotoCoreError, ClientError) as exc:
            raise self._persistence_error("put", exc) from exc

    def update(
        self, key: str, fields: Dict[str, Any], must_exist: bool = True
    ) -> Dict[str, Any]:
        """
        Merge ``fields`` into a document and return the new version.

        Keys may be dotted paths (``tracking.called``) to set a nested
        attribute without rewriting its parent map.
        """
        if not fields:
            raise ValueError("update requires at least one field")

        names: Dict[str, str] = {}
        values: Dict[str, Any] = {}
        assignments = []
        for i, (path, value) in enumerate(fields.items()):
            tokens = []
            for j, part in enumerate(path.split(".")):
                token = f"#f{i}_{j}"
                names[token] = part
                tokens.append(token)
            values[f":v{i}"] = value
            assignments.append(f"{'.'.join(tokens)} = :v{i}")

        kwargs: Dict[str, Any] = {
            "Key": {KEY_ATTRIBUTE: key},
            "UpdateExpression": "SET " + ", ".join(assignments),
            "ExpressionAttributeNames": names,
            "ExpressionAttributeValues": values,
            "ReturnValues": "ALL_NEW",
        }
        if must_exist:
            names["#pk"] = KEY_ATTRIBUTE
            kwargs["ConditionExpression"] = "attribute_exists(#pk)"

        try:
            resp = self.table.update_item(**kwargs)
        except ClientError as exc:
            if exc.response.get("Error", {}).get("Code") == "ConditionalCheckFailedException":
                raise NotFoundError(f"{key} not found in {self.table_name}") from exc
            raise self._persistence_error("update", exc) from exc
        except BotoCoreError as exc:
            raise self._persistence_error("update", exc) from exc
        return from_item(resp.get("Attributes", {}))

    def delete(self, key: str) -> None:
        """Delete a document; deleting a missing key is a no-op."""
        try:
            self.table.delete_item(Key={KEY_ATTRIBUTE: key})
        except (BotoCoreError, ClientError) as exc:
            raise self._persistence_error("delete", exc) from exc

    def scan(self, filter_expression=None) -> List[Dict[str, Any]]:
        """Read every matching document, following pagination."""
        kwargs: Dict[str, Any] = {}
        if filter_expression is not None:
            kwargs["FilterExpression"] = filter_expression

        items: List[Dict[str, Any]] = []
        try:
            while True:
                resp = self.table.scan(**kwargs)
                items.extend(resp.get("Items", []))
                last_key = resp.get("LastEvaluatedKey")
                if not last_key:
                    break
                kwargs["ExclusiveStartKey"] = last_key
        except (BotoCoreError, ClientError) as exc:
            raise self._persistence_error("scan", exc) from exc
        return [from_item(item) for item in items]

    def _persistence_error(self, operation: str, exc: Exception) -> PersistenceError:
        logger.error(
            "DynamoDB call failed",
            extra={"table": self.table_name, "operation": operation, "error": str(exc)},
        )
        return PersistenceError()
