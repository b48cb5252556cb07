"""Tests for the boto3-backed checkers, using a stub client factory."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

from botocore.exceptions import ClientError, NoCredentialsError

from conncheck.checks.aws import make_client
from conncheck.checks.cache_cluster import CacheClusterChecker
from conncheck.checks.model_catalog import ModelCatalogChecker
from conncheck.checks.object_store import ObjectStoreChecker
from conncheck.checks.secret_store import SecretStoreChecker
from conncheck.checks.wide_column import WideColumnChecker
from conncheck.models import (
    CacheClusterConfig,
    ModelCatalogConfig,
    ObjectStoreConfig,
    SecretStoreConfig,
    WideColumnConfig,
)


def _client_error(code: str, operation: str) -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": code}}, operation)


# ──────────────────────────────────────────────────────────────────
# Client construction
# ──────────────────────────────────────────────────────────────────

class TestMakeClient:
    def test_static_credentials_used_when_both_set(self):
        config = ObjectStoreConfig(
            identifier="a",
            region="eu-west-1",
            bucket="b",
            access_key_id="AKIA",
            secret_access_key="shh",
        )
        with patch("conncheck.checks.aws.boto3.session.Session") as session_cls:
            make_client("s3", config)
        session_cls.assert_called_once_with(
            aws_access_key_id="AKIA",
            aws_secret_access_key="shh",
            region_name="eu-west-1",
        )
        session_cls.return_value.client.assert_called_once_with("s3")

    def test_ambient_chain_when_credentials_partial(self):
        config = ObjectStoreConfig(identifier="a", bucket="b", access_key_id="AKIA")
        with patch("conncheck.checks.aws.boto3.session.Session") as session_cls:
            make_client("s3", config)
        session_cls.assert_called_once_with(region_name="us-east-1")

    def test_empty_credentials_still_static(self):
        config = ObjectStoreConfig(
            identifier="a", bucket="b", access_key_id="", secret_access_key=""
        )
        with patch("conncheck.checks.aws.boto3.session.Session") as session_cls:
            make_client("s3", config)
        session_cls.assert_called_once_with(
            aws_access_key_id="",
            aws_secret_access_key="",
            region_name="us-east-1",
        )

    async def test_client_construction_failure_is_reported(self):
        def factory(service_name, config):
            raise NoCredentialsError()

        result = await ObjectStoreChecker(factory).check(
            ObjectStoreConfig(identifier="a", bucket="b")
        )
        assert result.success is False
        assert result.error.startswith("Failed to create s3 client:")


# ──────────────────────────────────────────────────────────────────
# S3
# ──────────────────────────────────────────────────────────────────

class TestObjectStoreChecker:
    async def test_bucket_counted(self, aws_client):
        aws_client.list_objects_v2.return_value = {"KeyCount": 42}
        config = ObjectStoreConfig(identifier="assets", region="us-west-2", bucket="my-bucket")
        result = await ObjectStoreChecker(aws_client.factory).check(config)

        assert result.to_dict() == {
            "success": True,
            "region": "us-west-2",
            "bucket": "my-bucket",
            "exists": True,
            "object_count": 42,
        }
        assert aws_client.factory_calls == [("s3", config)]
        aws_client.head_bucket.assert_called_once_with(Bucket="my-bucket")
        aws_client.list_objects_v2.assert_called_once_with(Bucket="my-bucket", MaxKeys=1000)

    async def test_missing_bucket(self, aws_client):
        aws_client.head_bucket.side_effect = _client_error("404", "HeadBucket")
        result = await ObjectStoreChecker(aws_client.factory).check(
            ObjectStoreConfig(identifier="assets", bucket="nope")
        )
        assert result.success is False
        assert result.exists is False
        assert result.object_count is None
        assert result.error.startswith("Bucket access failed:")
        aws_client.list_objects_v2.assert_not_called()

    async def test_listing_denied_but_bucket_exists(self, aws_client):
        aws_client.list_objects_v2.side_effect = _client_error("AccessDenied", "ListObjectsV2")
        result = await ObjectStoreChecker(aws_client.factory).check(
            ObjectStoreConfig(identifier="assets", bucket="locked")
        )
        assert result.success is False
        assert result.exists is True
        assert result.error.startswith("Failed to list objects:")

    async def test_empty_bucket(self, aws_client):
        aws_client.list_objects_v2.return_value = {}
        result = await ObjectStoreChecker(aws_client.factory).check(
            ObjectStoreConfig(identifier="assets", bucket="empty")
        )
        assert result.success is True
        assert result.object_count == 0


# ──────────────────────────────────────────────────────────────────
# MemoryDB
# ──────────────────────────────────────────────────────────────────

class TestCacheClusterChecker:
    async def test_cluster_described(self, aws_client):
        aws_client.describe_clusters.return_value = {
            "Clusters": [
                {
                    "Status": "available",
                    "ClusterEndpoint": {"Address": "clustercfg.main.memorydb.aws", "Port": 6379},
                    "NumberOfShards": 3,
                }
            ]
        }
        config = CacheClusterConfig(identifier="main", cluster="main")
        result = await CacheClusterChecker(aws_client.factory).check(config)
        assert result.success is True
        assert result.status == "available"
        assert result.endpoint == "clustercfg.main.memorydb.aws"
        assert result.node_count == 3
        assert aws_client.factory_calls == [("memorydb", config)]
        aws_client.describe_clusters.assert_called_once_with(ClusterName="main")

    async def test_status_defaults_to_unknown(self, aws_client):
        aws_client.describe_clusters.return_value = {"Clusters": [{}]}
        result = await CacheClusterChecker(aws_client.factory).check(
            CacheClusterConfig(identifier="main", cluster="main")
        )
        assert result.success is True
        assert result.status == "unknown"
        assert result.endpoint is None
        assert result.node_count == 0

    async def test_clusters_field_missing(self, aws_client):
        aws_client.describe_clusters.return_value = {}
        result = await CacheClusterChecker(aws_client.factory).check(
            CacheClusterConfig(identifier="main", cluster="gone")
        )
        assert result.success is False
        assert result.error == "No clusters returned in response"

    async def test_empty_cluster_list(self, aws_client):
        aws_client.describe_clusters.return_value = {"Clusters": []}
        result = await CacheClusterChecker(aws_client.factory).check(
            CacheClusterConfig(identifier="main", cluster="gone")
        )
        assert result.success is False
        assert result.error == "Cluster not found in response"

    async def test_describe_failure(self, aws_client):
        aws_client.describe_clusters.side_effect = _client_error(
            "ClusterNotFoundFault", "DescribeClusters"
        )
        result = await CacheClusterChecker(aws_client.factory).check(
            CacheClusterConfig(identifier="main", cluster="gone")
        )
        assert result.success is False
        assert result.error.startswith("Failed to describe cluster:")
        assert result.cluster == "gone"


# ──────────────────────────────────────────────────────────────────
# Secrets Manager
# ──────────────────────────────────────────────────────────────────

class TestSecretStoreChecker:
    async def test_secret_described(self, aws_client):
        aws_client.describe_secret.return_value = {
            "Name": "prod/app",
            "VersionIdsToStages": {"v-123": ["AWSCURRENT"], "v-122": ["AWSPREVIOUS"]},
        }
        result = await SecretStoreChecker(aws_client.factory).check(
            SecretStoreConfig(identifier="app", secret_name="prod/app")
        )
        assert result.to_dict() == {
            "success": True,
            "region": "us-east-1",
            "secret_name": "prod/app",
            "exists": True,
            "version_id": "v-123",
        }
        aws_client.describe_secret.assert_called_once_with(SecretId="prod/app")
        aws_client.get_secret_value.assert_not_called()

    async def test_no_versions(self, aws_client):
        aws_client.describe_secret.return_value = {"Name": "prod/app"}
        result = await SecretStoreChecker(aws_client.factory).check(
            SecretStoreConfig(identifier="app", secret_name="prod/app")
        )
        assert result.success is True
        assert result.version_id is None

    async def test_missing_secret(self, aws_client):
        aws_client.describe_secret.side_effect = _client_error(
            "ResourceNotFoundException", "DescribeSecret"
        )
        result = await SecretStoreChecker(aws_client.factory).check(
            SecretStoreConfig(identifier="app", secret_name="missing")
        )
        assert result.success is False
        assert result.exists is False
        assert result.error.startswith("Failed to describe secret:")


# ──────────────────────────────────────────────────────────────────
# DynamoDB
# ──────────────────────────────────────────────────────────────────

class TestWideColumnChecker:
    async def test_table_described(self, aws_client):
        aws_client.describe_table.return_value = {
            "Table": {"TableStatus": "ACTIVE", "ItemCount": 12, "TableSizeBytes": 2048}
        }
        result = await WideColumnChecker(aws_client.factory).check(
            WideColumnConfig(identifier="t1", table="users")
        )
        assert result.to_dict() == {
            "success": True,
            "region": "us-east-1",
            "table": "users",
            "status": "ACTIVE",
            "item_count": 12,
            "table_size_bytes": 2048,
        }
        aws_client.describe_table.assert_called_once_with(TableName="users")

    async def test_table_missing_from_response(self, aws_client):
        aws_client.describe_table.return_value = {}
        result = await WideColumnChecker(aws_client.factory).check(
            WideColumnConfig(identifier="t1", table="users")
        )
        assert result.success is False
        assert result.error == "Table not found in response"

    async def test_describe_failure(self, aws_client):
        aws_client.describe_table.side_effect = _client_error(
            "ResourceNotFoundException", "DescribeTable"
        )
        result = await WideColumnChecker(aws_client.factory).check(
            WideColumnConfig(identifier="t1", table="users")
        )
        assert result.success is False
        assert result.error.startswith("Failed to describe table:")


# ──────────────────────────────────────────────────────────────────
# Bedrock
# ──────────────────────────────────────────────────────────────────

class TestModelCatalogChecker:
    async def test_models_listed(self, aws_client):
        aws_client.list_foundation_models.return_value = {
            "modelSummaries": [
                {"modelId": "anthropic.claude-v2"},
                {"modelId": "amazon.titan-text-express-v1"},
            ]
        }
        config = ModelCatalogConfig(identifier="ai", region="us-west-2")
        result = await ModelCatalogChecker(aws_client.factory).check(config)
        assert result.success is True
        assert result.model_count == 2
        assert result.models == ["anthropic.claude-v2", "amazon.titan-text-express-v1"]
        assert aws_client.factory_calls == [("bedrock", config)]

    async def test_listing_failure(self, aws_client):
        aws_client.list_foundation_models.side_effect = _client_error(
            "AccessDeniedException", "ListFoundationModels"
        )
        result = await ModelCatalogChecker(aws_client.factory).check(
            ModelCatalogConfig(identifier="ai")
        )
        assert result.success is False
        assert result.models is None
        assert result.error.startswith("Failed to list foundation models:")

    async def test_unexpected_exception_contained(self):
        client = MagicMock()
        client.list_foundation_models.side_effect = RuntimeError("boom")
        result = await ModelCatalogChecker(lambda service, config: client).check(
            ModelCatalogConfig(identifier="ai")
        )
        assert result.success is False
        assert result.error == "Unexpected error: boom"
