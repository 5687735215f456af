"""
DynamoDB Tools

Read and write the cached shift snapshot. The table is keyed by the shift
identifier ("ID") and expires items through the "TTL" attribute.
"""

from collections.abc import Sequence

import boto3
from botocore.exceptions import ClientError
import structlog

from shiftbot.config import Settings
from shiftbot.exceptions import DynamoDBError, UnprocessedItemsError
from shiftbot.models.shift import CachedShift

log = structlog.get_logger()


class ShiftTable:
    """
    The persisted shift snapshot.

    Args:
        settings: Application settings (table name, page and batch sizes)
        table: Optional boto3 Table resource, created from settings if omitted
    """

    def __init__(self, settings: Settings, *, table=None) -> None:
        self.table_name = settings.table_name
        self.page_size = settings.scan_page_size
        self.batch_size = settings.batch_write_size
        if table is None:
            dynamodb = boto3.resource("dynamodb", **settings.client_config)
            table = dynamodb.Table(settings.table_name)
        self._table = table

    def scan_shifts(self) -> list[CachedShift]:
        """
        Read every cached shift, following scan pagination.

        Returns:
            All cached shifts (empty on cold start)

        Raises:
            DynamoDBError: On DynamoDB operation failure
        """
        scan_kwargs: dict[str, object] = {"Limit": self.page_size}
        shifts: list[CachedShift] = []
        page = 1

        try:
            while True:
                response = self._table.scan(**scan_kwargs)
                items = response.get("Items", [])
                shifts.extend(CachedShift.from_dynamodb(item) for item in items)

                log.debug("shift_page_scanned", page=page, count=len(items))

                last_key = response.get("LastEvaluatedKey")
                if not last_key:
                    break
                scan_kwargs["ExclusiveStartKey"] = last_key
                page += 1
        except ClientError as e:
            log.error(
                "dynamodb_scan_failed",
                table=self.table_name,
                page=page,
                error=str(e),
            )
            raise DynamoDBError(
                operation="scan",
                table_name=self.table_name,
                error_message=str(e),
            ) from e

        log.info(
            "shift_cache_loaded",
            table=self.table_name,
            count=len(shifts),
            pages=page,
        )
        return shifts

    def put_shift(self, shift: CachedShift) -> None:
        """
        Write one shift, replacing any item with the same ID.

        Raises:
            DynamoDBError: On DynamoDB operation failure
        """
        try:
            self._table.put_item(Item=shift.to_dynamodb())
        except ClientError as e:
            log.error(
                "dynamodb_put_failed",
                table=self.table_name,
                shift_id=shift.id,
                error=str(e),
            )
            raise DynamoDBError(
                operation="put",
                table_name=self.table_name,
                error_message=str(e),
            ) from e

        log.info(
            "shift_written",
            table=self.table_name,
            shift_id=shift.id,
            shift_name=shift.name,
        )

    def write_batch(self, shifts: Sequence[CachedShift]) -> None:
        """
        Write up to batch_size shifts with a single BatchWriteItem call.

        Raises:
            ValueError: If the batch exceeds batch_size
            UnprocessedItemsError: If DynamoDB hands back unprocessed items
            DynamoDBError: On DynamoDB operation failure
        """
        if len(shifts) > self.batch_size:
            raise ValueError(
                f"Batch of {len(shifts)} exceeds the limit of {self.batch_size} items"
            )

        write_requests = [
            {"PutRequest": {"Item": shift.to_dynamodb()}} for shift in shifts
        ]

        try:
            response = self._table.meta.client.batch_write_item(
                RequestItems={self.table_name: write_requests}
            )
        except ClientError as e:
            log.error(
                "dynamodb_batch_write_failed",
                table=self.table_name,
                batch_size=len(shifts),
                error=str(e),
            )
            raise DynamoDBError(
                operation="batch_write",
                table_name=self.table_name,
                error_message=str(e),
            ) from e

        unprocessed = response.get("UnprocessedItems", {}).get(self.table_name, [])
        if unprocessed:
            log.error(
                "dynamodb_unprocessed_items",
                table=self.table_name,
                unprocessed=len(unprocessed),
            )
            raise UnprocessedItemsError(
                table_name=self.table_name,
                unprocessed_count=len(unprocessed),
            )

    def write_all(self, shifts: Sequence[CachedShift]) -> int:
        """
        Write a whole collection in batch_size chunks.

        Chunks already written stay committed if a later chunk fails.

        Returns:
            Number of shifts written
        """
        log.info("batch_write_started", table=self.table_name, total=len(shifts))

        for start in range(0, len(shifts), self.batch_size):
            batch = shifts[start : start + self.batch_size]
            log.debug(
                "writing_shift_batch",
                batch_number=start // self.batch_size + 1,
                batch_size=len(batch),
            )
            self.write_batch(batch)

        log.info("batch_write_completed", table=self.table_name, total=len(shifts))
        return len(shifts)
