"""S3 bucket checker."""

from __future__ import annotations

import logging
from typing import Any

from conncheck.checks.aws import AWS_ERRORS, AwsChecker
from conncheck.checks.errors import NotFoundError, PartialFailure
from conncheck.models import Kind, ObjectStoreCheckResult, ObjectStoreConfig

logger = logging.getLogger(__name__)

MAX_LISTED_OBJECTS = 1000


class ObjectStoreChecker(AwsChecker[ObjectStoreConfig, ObjectStoreCheckResult]):
    """``HeadBucket`` for existence, then count up to 1000 objects.

    Existence and listing are separate: a bucket can exist while the
    listing is denied, which reports ``success=False, exists=True``.
    """

    kind = Kind.OBJECT_STORE
    display_name = "S3 bucket"
    service_name = "s3"

    async def probe(self, config: ObjectStoreConfig) -> ObjectStoreCheckResult:
        client = await self.client(config)

        try:
            await self.call(client, "head_bucket", Bucket=config.bucket)
        except AWS_ERRORS as exc:
            raise NotFoundError(f"Bucket access failed: {exc}", exists=False) from exc
        logger.debug("Bucket %s exists", config.bucket)

        try:
            listing = await self.call(
                client, "list_objects_v2", Bucket=config.bucket, MaxKeys=MAX_LISTED_OBJECTS
            )
        except AWS_ERRORS as exc:
            raise PartialFailure(f"Failed to list objects: {exc}", exists=True) from exc

        return ObjectStoreCheckResult(
            success=True,
            region=config.region,
            bucket=config.bucket,
            exists=True,
            object_count=int(listing.get("KeyCount", 0)),
        )

    def failed(
        self, config: ObjectStoreConfig, error: str, **fields: Any
    ) -> ObjectStoreCheckResult:
        return ObjectStoreCheckResult(
            success=False,
            region=config.region,
            bucket=config.bucket,
            error=error,
            **fields,
        )
