"""
DynamoDB-backed item source for the WheelSpin package.

Lets the wheel read its items from the table where a host application keeps
its idea list. Items are stored one per row with a ``position`` attribute
that fixes their order on the wheel. Each row has its own generated
``row_id`` key, so two items may share an ``id``.

Classes:
    DynamoDBItemSource: ItemSource persisting items in DynamoDB
"""

import logging
import os
import uuid
from decimal import Decimal
from typing import Any, Dict, List, Optional

import boto3
from botocore.exceptions import ClientError, NoCredentialsError

from ..models.item import SelectableItem
from .item_source import ItemSource

logger = logging.getLogger(__name__)

# Hash key of the items table
ROW_KEY = "row_id"


class DynamoDBItemSource(ItemSource):
    """
    Item source reading and writing selectable items in DynamoDB.

    The table uses ``row_id`` as its hash key; the item id is a plain
    attribute. Reads scan the whole table and sort by ``position``; wheels
    hold a handful of items, so a scan is fine. Positions behave like list
    indexes: inserting shifts the rows after the insertion point.

    Attributes:
        table_name: Name of the DynamoDB table
        dynamodb: Boto3 DynamoDB resource
        table: DynamoDB table resource

    Example:
        >>> source = DynamoDBItemSource(table_name="wheel-items")
        >>> source.add_item(SelectableItem(id="idea-1", label="Learn pottery"))
        True
        >>> [item.label for item in source.list_items()]
        ['Learn pottery']
    """

    def __init__(self, table_name: Optional[str] = None):
        """
        Initialize the DynamoDB item source.

        Args:
            table_name: Optional table name override, uses env var if not provided

        Raises:
            ValueError: If no table name is available or the table does not exist
            NoCredentialsError: If AWS credentials are not configured
        """
        super().__init__()
        self.table_name = table_name or os.getenv("WHEEL_ITEMS_TABLE")

        if not self.table_name:
            raise ValueError(
                "Table name must be provided either as parameter or WHEEL_ITEMS_TABLE environment variable"
            )

        try:
            self.dynamodb = boto3.resource("dynamodb")
            self.table = self.dynamodb.Table(self.table_name)

            # Verify table exists by getting its description
            self.table.load()

        except NoCredentialsError:
            logger.error("AWS credentials not found for table %s", self.table_name)
            raise
        except ClientError as e:
            if e.response["Error"]["Code"] == "ResourceNotFoundException":
                raise ValueError(f"DynamoDB table '{self.table_name}' not found") from e
            raise

    def list_items(self) -> List[SelectableItem]:
        """
        Return all stored items ordered by position.

        Rows that fail validation are skipped and logged. AWS errors are
        logged and produce an empty list, which the engine treats as a wheel
        that cannot spin.
        """
        try:
            rows = self._ordered_rows()
        except ClientError as e:
            logger.error("Error scanning items from %s: %s", self.table_name, e)
            return []

        items = []
        for row in rows:
            try:
                items.append(SelectableItem.from_storage_item(row))
            except (KeyError, ValueError) as e:
                logger.warning("Skipping malformed item row %s: %s", row.get(ROW_KEY), e)
                continue

        return items

    def add_item(self, item: SelectableItem, position: Optional[int] = None) -> bool:
        """
        Insert ``item`` at list index ``position`` (appended by default).

        Rows at or after the insertion point move down one place, and all
        positions are renumbered densely from 0.

        Returns:
            True if the item was saved, False otherwise
        """
        try:
            rows = self._ordered_rows()
        except ClientError as e:
            logger.error("Error reading positions from %s: %s", self.table_name, e)
            return False

        new_row = _to_dynamodb(item.to_storage_item(0))
        new_row[ROW_KEY] = str(uuid.uuid4())

        if position is None:
            rows.append(new_row)
        else:
            rows.insert(position, new_row)

        try:
            for index, row in enumerate(rows):
                if row is new_row:
                    new_row["position"] = index
                elif int(row.get("position", 0)) != index:
                    self._set_position(row[ROW_KEY], index)

            response = self.table.put_item(Item=new_row)
            saved = response["ResponseMetadata"]["HTTPStatusCode"] == 200
        except ClientError as e:
            logger.error("Error saving item %s: %s", item.id, e)
            return False

        if saved:
            self._notify()
        return saved

    def remove_item(self, item_id: str) -> bool:
        """
        Delete the first item (in wheel order) with ``item_id``.

        Returns:
            True if a stored item was deleted, False otherwise
        """
        try:
            rows = self._ordered_rows()
            row = next((r for r in rows if r.get("id") == item_id), None)
            if row is None:
                return False

            response = self.table.delete_item(Key={ROW_KEY: row[ROW_KEY]}, ReturnValues="ALL_OLD")
        except ClientError as e:
            logger.error("Error deleting item %s: %s", item_id, e)
            return False

        if "Attributes" not in response:
            return False

        self._notify()
        return True

    def _ordered_rows(self) -> List[Dict[str, Any]]:
        rows = self._scan_all()
        rows.sort(key=lambda row: (int(row.get("position", 0)), row.get(ROW_KEY, "")))
        return rows

    def _scan_all(self) -> List[Dict[str, Any]]:
        response = self.table.scan()
        rows = list(response.get("Items", []))

        while "LastEvaluatedKey" in response:
            response = self.table.scan(ExclusiveStartKey=response["LastEvaluatedKey"])
            rows.extend(response.get("Items", []))

        return rows

    def _set_position(self, row_id: str, position: int) -> None:
        self.table.update_item(
            Key={ROW_KEY: row_id},
            UpdateExpression="SET #position = :position",
            ExpressionAttributeNames={"#position": "position"},
            ExpressionAttributeValues={":position": position},
        )


def _to_dynamodb(value: Any) -> Any:
    """Convert floats to Decimal, which is the only number type boto3 accepts."""
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, dict):
        return {k: _to_dynamodb(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_to_dynamodb(v) for v in value]
    return value
