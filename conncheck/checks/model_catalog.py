"""Bedrock foundation-model catalog checker."""

from __future__ import annotations

import logging
from typing import Any

from conncheck.checks.aws import AWS_ERRORS, AwsChecker
from conncheck.checks.errors import ProtocolError
from conncheck.models import Kind, ModelCatalogCheckResult, ModelCatalogConfig

logger = logging.getLogger(__name__)


class ModelCatalogChecker(AwsChecker[ModelCatalogConfig, ModelCatalogCheckResult]):
    """List every foundation model id visible in the region.

    The full list is returned; trimming it for display is up to the caller.
    """

    kind = Kind.MODEL_CATALOG
    display_name = "Bedrock"
    service_name = "bedrock"

    async def probe(self, config: ModelCatalogConfig) -> ModelCatalogCheckResult:
        client = await self.client(config)
        try:
            output = await self.call(client, "list_foundation_models")
        except AWS_ERRORS as exc:
            raise ProtocolError(f"Failed to list foundation models: {exc}") from exc

        models = [m["modelId"] for m in output.get("modelSummaries", []) if "modelId" in m]
        logger.debug("Listed %d foundation models in %s", len(models), config.region)
        return ModelCatalogCheckResult(
            success=True,
            region=config.region,
            model_count=len(models),
            models=models,
        )

    def failed(
        self, config: ModelCatalogConfig, error: str, **fields: Any
    ) -> ModelCatalogCheckResult:
        return ModelCatalogCheckResult(
            success=False,
            region=config.region,
            error=error,
            **fields,
        )
