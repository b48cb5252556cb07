"""Namespace extractor: flat ``KEY=value`` pairs → typed configuration records.

Relevant keys follow ``<PREFIX>_<IDENTIFIER>_<PARAM>``::

    SQL_orders_DRIVER=postgres
    SQL_orders_HOST=db.internal
    S3_assets_BUCKET=my-bucket
    S3_assets_ACCESS_KEY_ID=AKIA...

The identifier runs up to the first underscore after the prefix, so it can
never contain one; the param is the remainder (lowercased) and may.  A group
only becomes a record when it carries its kind's mandatory param.

Parsing is pure: the namespace is passed in, never read from ``os.environ``.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Callable

from conncheck.models import (
    CacheClusterConfig,
    HttpConfig,
    Kind,
    KeyValueConfig,
    ModelCatalogConfig,
    ObjectStoreConfig,
    SecretStoreConfig,
    SqlConfig,
    WideColumnConfig,
)

logger = logging.getLogger(__name__)

DEFAULT_REGION = "us-east-1"
DEFAULT_SQL_PORT = 5432
DEFAULT_KEY_VALUE_PORT = 6379

Params = dict[str, str]


def group_params(namespace: Mapping[str, str], prefix: str) -> dict[str, Params]:
    """Group keys under ``<prefix>_`` by identifier.

    Returns ``{identifier: {param: value}}``.  Keys lacking an underscore
    after the identifier are skipped.
    """
    marker = prefix + "_"
    groups: dict[str, Params] = {}
    for key, value in namespace.items():
        if not key.startswith(marker):
            continue
        identifier, sep, param = key[len(marker):].partition("_")
        if not sep:
            continue
        groups.setdefault(identifier, {})[param.lower()] = value
    return groups


def parse_port(raw: str | None, default: int) -> int:
    """Parse a TCP port, falling back to *default* on anything invalid."""
    if raw is None or not (raw.isascii() and raw.isdigit()):
        return default
    port = int(raw)
    return port if port <= 65535 else default


def parse_headers(raw: str | None) -> dict[str, str]:
    """Decode a JSON object of string → string; anything else yields ``{}``."""
    if not raw:
        return {}
    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        return {}
    if not isinstance(data, dict):
        return {}
    if not all(isinstance(k, str) and isinstance(v, str) for k, v in data.items()):
        return {}
    return data


# ── Per-kind builders ─────────────────────────────────────────────
# Each returns None when the mandatory param is missing.

def _build_sql(identifier: str, params: Params) -> SqlConfig | None:
    if "driver" not in params:
        return None
    return SqlConfig(
        identifier=identifier,
        driver=params["driver"],
        host=params.get("host", "localhost"),
        port=parse_port(params.get("port"), DEFAULT_SQL_PORT),
        user=params.get("user", "postgres"),
        password=params.get("password", ""),
        database=params.get("database", "postgres"),
    )


def _build_key_value(identifier: str, params: Params) -> KeyValueConfig | None:
    if "driver" not in params:
        return None
    return KeyValueConfig(
        identifier=identifier,
        driver=params["driver"],
        host=params.get("host", "localhost"),
        port=parse_port(params.get("port"), DEFAULT_KEY_VALUE_PORT),
        password=params.get("password"),
    )


def _build_http(identifier: str, params: Params) -> HttpConfig | None:
    if "url" not in params:
        return None
    return HttpConfig(
        identifier=identifier,
        url=params["url"],
        method=params.get("method", "GET").upper(),
        headers=parse_headers(params.get("headers")),
    )


def _cloud_fields(identifier: str, params: Params) -> dict[str, Any]:
    return {
        "identifier": identifier,
        "region": params.get("region", DEFAULT_REGION),
        "access_key_id": params.get("access_key_id"),
        "secret_access_key": params.get("secret_access_key"),
    }


def _build_object_store(identifier: str, params: Params) -> ObjectStoreConfig | None:
    if "bucket" not in params:
        return None
    return ObjectStoreConfig(bucket=params["bucket"], **_cloud_fields(identifier, params))


def _build_cache_cluster(identifier: str, params: Params) -> CacheClusterConfig | None:
    if "cluster" not in params:
        return None
    return CacheClusterConfig(cluster=params["cluster"], **_cloud_fields(identifier, params))


def _build_secret_store(identifier: str, params: Params) -> SecretStoreConfig | None:
    if "secret_name" not in params:
        return None
    return SecretStoreConfig(
        secret_name=params["secret_name"], **_cloud_fields(identifier, params)
    )


def _build_wide_column(identifier: str, params: Params) -> WideColumnConfig | None:
    if "table" not in params:
        return None
    return WideColumnConfig(table=params["table"], **_cloud_fields(identifier, params))


def _build_model_catalog(identifier: str, params: Params) -> ModelCatalogConfig:
    # No mandatory param: every identifier group yields a record.
    return ModelCatalogConfig(**_cloud_fields(identifier, params))


_BUILDERS: dict[Kind, Callable[[str, Params], Any]] = {
    Kind.SQL: _build_sql,
    Kind.KEY_VALUE: _build_key_value,
    Kind.HTTP: _build_http,
    Kind.OBJECT_STORE: _build_object_store,
    Kind.CACHE_CLUSTER: _build_cache_cluster,
    Kind.SECRET_STORE: _build_secret_store,
    Kind.WIDE_COLUMN: _build_wide_column,
    Kind.MODEL_CATALOG: _build_model_catalog,
}


def extract_kind(namespace: Mapping[str, str], kind: Kind) -> dict[str, Any]:
    """Return ``{identifier: config}`` for one *kind*."""
    build = _BUILDERS[kind]
    configs: dict[str, Any] = {}
    for identifier, params in group_params(namespace, kind.prefix).items():
        config = build(identifier, params)
        if config is None:
            logger.debug(
                "Skipping %s_%s: mandatory parameter missing", kind.prefix, identifier
            )
            continue
        configs[identifier] = config
    return configs


@dataclass(frozen=True)
class ExtractedConfigs:
    """All eight ``identifier → config`` maps parsed from one namespace."""

    by_kind: dict[Kind, dict[str, Any]] = field(default_factory=dict)

    def get(self, kind: Kind) -> dict[str, Any]:
        return self.by_kind.get(kind, {})

    @property
    def sql(self) -> dict[str, SqlConfig]:
        return self.get(Kind.SQL)

    @property
    def key_value(self) -> dict[str, KeyValueConfig]:
        return self.get(Kind.KEY_VALUE)

    @property
    def http(self) -> dict[str, HttpConfig]:
        return self.get(Kind.HTTP)

    @property
    def object_store(self) -> dict[str, ObjectStoreConfig]:
        return self.get(Kind.OBJECT_STORE)

    @property
    def cache_cluster(self) -> dict[str, CacheClusterConfig]:
        return self.get(Kind.CACHE_CLUSTER)

    @property
    def secret_store(self) -> dict[str, SecretStoreConfig]:
        return self.get(Kind.SECRET_STORE)

    @property
    def wide_column(self) -> dict[str, WideColumnConfig]:
        return self.get(Kind.WIDE_COLUMN)

    @property
    def model_catalog(self) -> dict[str, ModelCatalogConfig]:
        return self.get(Kind.MODEL_CATALOG)


def extract_all(namespace: Mapping[str, str]) -> ExtractedConfigs:
    """Parse every kind out of *namespace*."""
    return ExtractedConfigs(by_kind={kind: extract_kind(namespace, kind) for kind in Kind})
