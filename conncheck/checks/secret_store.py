"""Secrets Manager checker."""

from __future__ import annotations

import logging
from typing import Any

from conncheck.checks.aws import AWS_ERRORS, AwsChecker
from conncheck.checks.errors import NotFoundError
from conncheck.models import Kind, SecretStoreCheckResult, SecretStoreConfig

logger = logging.getLogger(__name__)


class SecretStoreChecker(AwsChecker[SecretStoreConfig, SecretStoreCheckResult]):
    """Describe the secret (never reads its value) and echo one version id."""

    kind = Kind.SECRET_STORE
    display_name = "Secrets Manager secret"
    service_name = "secretsmanager"

    async def probe(self, config: SecretStoreConfig) -> SecretStoreCheckResult:
        client = await self.client(config)
        try:
            output = await self.call(client, "describe_secret", SecretId=config.secret_name)
        except AWS_ERRORS as exc:
            raise NotFoundError(f"Failed to describe secret: {exc}", exists=False) from exc

        # First key of the version → stages map, whatever stage it carries.
        versions = output.get("VersionIdsToStages") or {}
        version_id = next(iter(versions), None)
        return SecretStoreCheckResult(
            success=True,
            region=config.region,
            secret_name=config.secret_name,
            exists=True,
            version_id=version_id,
        )

    def failed(
        self, config: SecretStoreConfig, error: str, **fields: Any
    ) -> SecretStoreCheckResult:
        return SecretStoreCheckResult(
            success=False,
            region=config.region,
            secret_name=config.secret_name,
            error=error,
            **fields,
        )
