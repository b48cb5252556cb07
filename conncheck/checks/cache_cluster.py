"""MemoryDB cluster checker."""

from __future__ import annotations

import logging
from typing import Any

from conncheck.checks.aws import AWS_ERRORS, AwsChecker
from conncheck.checks.errors import NotFoundError, ProtocolError
from conncheck.models import CacheClusterCheckResult, CacheClusterConfig, Kind

logger = logging.getLogger(__name__)


class CacheClusterChecker(AwsChecker[CacheClusterConfig, CacheClusterCheckResult]):
    """Describe the named cluster and report status, endpoint and size."""

    kind = Kind.CACHE_CLUSTER
    display_name = "MemoryDB cluster"
    service_name = "memorydb"

    async def probe(self, config: CacheClusterConfig) -> CacheClusterCheckResult:
        client = await self.client(config)
        try:
            output = await self.call(client, "describe_clusters", ClusterName=config.cluster)
        except AWS_ERRORS as exc:
            raise ProtocolError(f"Failed to describe cluster: {exc}") from exc

        clusters = output.get("Clusters")
        if clusters is None:
            raise NotFoundError("No clusters returned in response")
        if not clusters:
            raise NotFoundError("Cluster not found in response")

        cluster = clusters[0]
        endpoint = (cluster.get("ClusterEndpoint") or {}).get("Address")
        status = cluster.get("Status") or "unknown"
        logger.debug("MemoryDB cluster %s status: %s", config.cluster, status)
        return CacheClusterCheckResult(
            success=True,
            region=config.region,
            cluster=config.cluster,
            endpoint=endpoint,
            status=status,
            # Shard count reported under the historical node_count key.
            node_count=int(cluster.get("NumberOfShards") or 0),
        )

    def failed(
        self, config: CacheClusterConfig, error: str, **fields: Any
    ) -> CacheClusterCheckResult:
        return CacheClusterCheckResult(
            success=False,
            region=config.region,
            cluster=config.cluster,
            error=error,
            **fields,
        )
