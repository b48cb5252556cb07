"""DynamoDB table checker."""

from __future__ import annotations

import logging
from typing import Any

from conncheck.checks.aws import AWS_ERRORS, AwsChecker
from conncheck.checks.errors import NotFoundError, ProtocolError
from conncheck.models import Kind, WideColumnCheckResult, WideColumnConfig

logger = logging.getLogger(__name__)


class WideColumnChecker(AwsChecker[WideColumnConfig, WideColumnCheckResult]):
    kind = Kind.WIDE_COLUMN
    display_name = "DynamoDB table"
    service_name = "dynamodb"

    async def probe(self, config: WideColumnConfig) -> WideColumnCheckResult:
        client = await self.client(config)
        try:
            output = await self.call(client, "describe_table", TableName=config.table)
        except AWS_ERRORS as exc:
            raise ProtocolError(f"Failed to describe table: {exc}") from exc

        table = output.get("Table")
        if not table:
            raise NotFoundError("Table not found in response")

        logger.debug("DynamoDB table %s status: %s", config.table, table.get("TableStatus"))
        return WideColumnCheckResult(
            success=True,
            region=config.region,
            table=config.table,
            status=table.get("TableStatus"),
            item_count=table.get("ItemCount"),
            table_size_bytes=table.get("TableSizeBytes"),
        )

    def failed(self, config: WideColumnConfig, error: str, **fields: Any) -> WideColumnCheckResult:
        return WideColumnCheckResult(
            success=False,
            region=config.region,
            table=config.table,
            error=error,
            **fields,
        )
