"""
AWS DynamoDB implementation for table aggregate storage.

One DynamoDB item per restaurant table:
- table_number (N): partition key
- revision (N): bumped on every write, used in conditional writes
- document (S): JSON of the whole aggregate (services, orders, items)

Conditional writes give optimistic concurrency across processes and hosts.
boto3 is blocking, so every client call runs in a worker thread and the
event loop keeps serving other tables meanwhile.
"""

import asyncio
import json

try:
    import boto3
    from botocore.config import Config
    from botocore.exceptions import ClientError

    BOTO3_AVAILABLE = True
except ImportError:
    BOTO3_AVAILABLE = False

from tableside.core.logging import logger
from tableside.domain.exceptions import RevisionConflictError
from tableside.domain.models import Table
from tableside.infrastructure.repositories.table_repository import TableRepository

CONDITIONAL_CHECK_FAILED = "ConditionalCheckFailedException"

# Socket-level bounds for each DynamoDB call; the domain layer adds its own
# overall timeout on top of these
CONNECT_TIMEOUT_SECONDS = 2.0
READ_TIMEOUT_SECONDS = 5.0
MAX_ATTEMPTS = 2


class AWSTableRepository(TableRepository):
    """AWS DynamoDB implementation of TableRepository.

    Environment Variables:
    - AWS_REGION: AWS region (default: eu-west-1)
    - AWS_ACCESS_KEY_ID: AWS access key (optional if using IAM role)
    - AWS_SECRET_ACCESS_KEY: AWS secret key (optional if using IAM role)
    - AWS_DYNAMODB_TABLE: Table name (default: tableside-tables)
    """

    def __init__(
        self,
        table_name: str = "tableside-tables",
        region_name: str = "eu-west-1",
        auto_create_table: bool = False,
    ):
        """Initialize DynamoDB client.

        Args:
            table_name: DynamoDB table name (from settings.aws_dynamodb_table)
            region_name: AWS region (from settings.aws_region)
            auto_create_table: If True, create table if it doesn't exist
        """
        if not BOTO3_AVAILABLE:
            raise ImportError(
                "boto3 is required for AWS implementations. "
                "Install with: pip install tableside[aws]"
            )

        if not table_name:
            raise ValueError("table_name cannot be empty")
        if not region_name:
            raise ValueError("region_name cannot be empty")

        self.table_name = table_name
        self.region_name = region_name
        self.client = boto3.client(
            "dynamodb",
            region_name=region_name,
            config=Config(
                connect_timeout=CONNECT_TIMEOUT_SECONDS,
                read_timeout=READ_TIMEOUT_SECONDS,
                retries={"max_attempts": MAX_ATTEMPTS, "mode": "standard"},
            ),
        )

        if auto_create_table:
            self._ensure_table_exists()

        logger.info(
            f"Initialized AWSTableRepository with table={table_name}, region={region_name}"
        )

    def _ensure_table_exists(self) -> None:
        """Create DynamoDB table if it doesn't exist."""
        try:
            self.client.describe_table(TableName=self.table_name)
            logger.debug(f"Table {self.table_name} already exists")
            return
        except ClientError as e:
            if e.response["Error"]["Code"] != "ResourceNotFoundException":
                raise

        logger.info(f"Creating DynamoDB table: {self.table_name}")
        self.client.create_table(
            TableName=self.table_name,
            KeySchema=[{"AttributeName": "table_number", "KeyType": "HASH"}],
            AttributeDefinitions=[
                {"AttributeName": "table_number", "AttributeType": "N"}
            ],
            BillingMode="PAY_PER_REQUEST",
        )
        self.client.get_waiter("table_exists").wait(TableName=self.table_name)
        logger.info(f"Table {self.table_name} created successfully")

    def _key(self, table_number: int) -> dict:
        return {"table_number": {"N": str(table_number)}}

    def _to_item(self, table: Table) -> dict:
        return {
            "table_number": {"N": str(table.number)},
            "revision": {"N": str(table.revision)},
            "document": {"S": json.dumps(table.model_dump(mode="json"))},
        }

    def _from_item(self, item: dict) -> Table:
        table = Table.model_validate_json(item["document"]["S"])
        return table.model_copy(update={"revision": int(item["revision"]["N"])})

    def _current_revision(self, table_number: int) -> int | None:
        response = self.client.get_item(
            TableName=self.table_name,
            Key=self._key(table_number),
            ProjectionExpression="revision",
            ConsistentRead=True,
        )
        item = response.get("Item")
        return int(item["revision"]["N"]) if item else None

    def _get_table_sync(self, table_number: int) -> Table | None:
        response = self.client.get_item(
            TableName=self.table_name,
            Key=self._key(table_number),
            ConsistentRead=True,
        )
        item = response.get("Item")
        if item is None:
            return None
        return self._from_item(item)

    def _scan_sync(self) -> list[Table]:
        tables = []
        paginator = self.client.get_paginator("scan")
        for page in paginator.paginate(TableName=self.table_name, ConsistentRead=True):
            tables.extend(self._from_item(item) for item in page.get("Items", []))
        return sorted(tables, key=lambda table: table.number)

    def _put_sync(self, stored: Table, expected_revision: int | None, **condition) -> None:
        """Conditional put; a failed condition becomes RevisionConflictError."""
        try:
            self.client.put_item(
                TableName=self.table_name, Item=self._to_item(stored), **condition
            )
        except ClientError as e:
            if e.response["Error"]["Code"] != CONDITIONAL_CHECK_FAILED:
                raise
            raise RevisionConflictError(
                stored.number,
                expected=expected_revision if expected_revision is not None else 0,
                actual=self._current_revision(stored.number),
            ) from e

    async def get_table(self, table_number: int) -> Table | None:
        """Load a table with a strongly consistent read."""
        return await asyncio.to_thread(self._get_table_sync, table_number)

    async def list_tables(self) -> list[Table]:
        """Scan all tables, ordered by number."""
        return await asyncio.to_thread(self._scan_sync)

    async def create_table(self, table: Table) -> Table:
        """Store a new table unless the number is taken."""
        stored = table.model_copy(update={"revision": 0})
        await asyncio.to_thread(
            self._put_sync,
            stored,
            None,
            ConditionExpression="attribute_not_exists(table_number)",
        )

        logger.info(f"Created table {table.number} in {self.table_name}")
        return stored

    async def save_table(self, table: Table, expected_revision: int) -> Table:
        """Replace a table if its stored revision still matches."""
        stored = table.model_copy(update={"revision": expected_revision + 1})
        await asyncio.to_thread(
            self._put_sync,
            stored,
            expected_revision,
            ConditionExpression="revision = :expected",
            ExpressionAttributeValues={":expected": {"N": str(expected_revision)}},
        )

        logger.debug(f"Saved table {table.number} at revision {stored.revision}")
        return stored
