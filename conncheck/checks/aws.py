"""Shared plumbing for checkers backed by AWS APIs (boto3).

boto3 is blocking, so client construction and every API call run in a worker
thread via :func:`asyncio.to_thread`.  Each check builds its own session and
client; nothing is cached between calls.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, ClassVar

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from conncheck.checks.base import Checker, ConfigT, ResultT
from conncheck.checks.errors import CheckConnectionError
from conncheck.models import CloudConfig

logger = logging.getLogger(__name__)

#: Exceptions raised by boto3 for transport, credential and API failures
AWS_ERRORS = (BotoCoreError, ClientError)

ClientFactory = Callable[[str, CloudConfig], Any]


def make_client(service_name: str, config: CloudConfig) -> Any:
    """Build a boto3 client, honouring static credentials when both are set."""
    if config.has_static_credentials:
        logger.debug("Using static AWS credentials for %s", config.identifier)
        session = boto3.session.Session(
            aws_access_key_id=config.access_key_id,
            aws_secret_access_key=config.secret_access_key,
            region_name=config.region,
        )
    else:
        session = boto3.session.Session(region_name=config.region)
    return session.client(service_name)


class AwsChecker(Checker[ConfigT, ResultT]):
    """Base for the S3 / MemoryDB / Secrets Manager / DynamoDB / Bedrock checkers.

    Args:
        client_factory: Callable ``(service_name, config) -> client``; tests
                        pass one returning a stub.
    """

    #: boto3 service name, e.g. ``"s3"``
    service_name: ClassVar[str] = ""

    def __init__(self, client_factory: ClientFactory = make_client) -> None:
        self._client_factory = client_factory

    async def client(self, config: CloudConfig) -> Any:
        try:
            return await asyncio.to_thread(self._client_factory, self.service_name, config)
        except AWS_ERRORS as exc:
            raise CheckConnectionError(
                f"Failed to create {self.service_name} client: {exc}"
            ) from exc

    @staticmethod
    async def call(client: Any, operation: str, **params: Any) -> dict[str, Any]:
        """Invoke ``client.<operation>(**params)`` off the event loop."""
        return await asyncio.to_thread(getattr(client, operation), **params)
