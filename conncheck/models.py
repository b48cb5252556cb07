"""Configuration records and check results for every backend kind.

Configuration records are built fresh per request by :mod:`conncheck.extract`
and never mutated.  Check results are what the checkers in
:mod:`conncheck.checks` hand back; :meth:`CheckResult.to_dict` drops every
field whose value is ``None`` so the JSON report never carries null keys.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, fields
from typing import Any


class Kind(enum.Enum):
    """The eight backend kinds.

    ``value`` is the environment prefix, :attr:`report_key` the field name
    used in the aggregated report.
    """

    SQL = "SQL"
    KEY_VALUE = "NOSQL"
    HTTP = "HTTP"
    OBJECT_STORE = "S3"
    CACHE_CLUSTER = "MEMORYDB"
    SECRET_STORE = "SECRETS"
    WIDE_COLUMN = "DYNAMODB"
    MODEL_CATALOG = "BEDROCK"

    @property
    def prefix(self) -> str:
        return self.value

    @property
    def report_key(self) -> str:
        return _REPORT_KEYS[self]


_REPORT_KEYS: dict[Kind, str] = {
    Kind.SQL: "sql",
    Kind.KEY_VALUE: "nosql",
    Kind.HTTP: "http",
    Kind.OBJECT_STORE: "s3",
    Kind.CACHE_CLUSTER: "memorydb",
    Kind.SECRET_STORE: "secrets_manager",
    Kind.WIDE_COLUMN: "dynamodb",
    Kind.MODEL_CATALOG: "bedrock",
}


# ──────────────────────────────────────────────────────────────────
# Configuration records
# ──────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class SqlConfig:
    identifier: str
    driver: str
    host: str = "localhost"
    port: int = 5432
    user: str = "postgres"
    password: str = ""
    database: str = "postgres"


@dataclass(frozen=True)
class KeyValueConfig:
    identifier: str
    driver: str
    host: str = "localhost"
    port: int = 6379
    password: str | None = None


@dataclass(frozen=True)
class HttpConfig:
    identifier: str
    url: str
    method: str = "GET"
    headers: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class CloudConfig:
    """Fields shared by every kind backed by the AWS credential chain.

    When both ``access_key_id`` and ``secret_access_key`` are present, even
    empty, they replace the ambient credential resolution.
    """

    identifier: str
    region: str = "us-east-1"
    access_key_id: str | None = None
    secret_access_key: str | None = None

    @property
    def has_static_credentials(self) -> bool:
        return self.access_key_id is not None and self.secret_access_key is not None


@dataclass(frozen=True)
class ObjectStoreConfig(CloudConfig):
    bucket: str = ""


@dataclass(frozen=True)
class CacheClusterConfig(CloudConfig):
    cluster: str = ""


@dataclass(frozen=True)
class SecretStoreConfig(CloudConfig):
    secret_name: str = ""


@dataclass(frozen=True)
class WideColumnConfig(CloudConfig):
    table: str = ""


@dataclass(frozen=True)
class ModelCatalogConfig(CloudConfig):
    pass


# ──────────────────────────────────────────────────────────────────
# Check results
# ──────────────────────────────────────────────────────────────────

@dataclass
class CheckResult:
    """Base for all per-kind results."""

    success: bool

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready dict without ``None``-valued fields."""
        out: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is not None:
                out[f.name] = value
        return out


@dataclass
class SqlCheckResult(CheckResult):
    driver: str = ""
    host: str = ""
    port: int = 0
    database: str = ""
    tables: list[str] | None = None
    error: str | None = None


@dataclass
class KeyValueCheckResult(CheckResult):
    driver: str = ""
    host: str = ""
    port: int = 0
    info: dict[str, str] | None = None
    error: str | None = None


@dataclass
class HttpCheckResult(CheckResult):
    url: str = ""
    method: str = ""
    status_code: int | None = None
    response_headers: dict[str, str] | None = None
    response_body: str | None = None
    error: str | None = None


@dataclass
class ObjectStoreCheckResult(CheckResult):
    region: str = ""
    bucket: str = ""
    exists: bool | None = None
    object_count: int | None = None
    error: str | None = None


@dataclass
class CacheClusterCheckResult(CheckResult):
    region: str = ""
    cluster: str = ""
    endpoint: str | None = None
    status: str | None = None
    # Carries NumberOfShards from DescribeClusters, not a node count.
    node_count: int | None = None
    error: str | None = None


@dataclass
class SecretStoreCheckResult(CheckResult):
    region: str = ""
    secret_name: str = ""
    exists: bool | None = None
    version_id: str | None = None
    error: str | None = None


@dataclass
class WideColumnCheckResult(CheckResult):
    region: str = ""
    table: str = ""
    status: str | None = None
    item_count: int | None = None
    table_size_bytes: int | None = None
    error: str | None = None


@dataclass
class ModelCatalogCheckResult(CheckResult):
    region: str = ""
    model_count: int | None = None
    models: list[str] | None = None
    error: str | None = None
