"""Checker registry for conncheck.

Usage::

    from conncheck.checks import get_checker
    from conncheck.models import Kind

    checker = get_checker(Kind.SQL)
    result = await checker.check(config)
"""

from __future__ import annotations

from conncheck.models import Kind

from .base import Checker
from .cache_cluster import CacheClusterChecker
from .errors import (
    CheckConnectionError,
    CheckError,
    NotFoundError,
    PartialFailure,
    ProtocolError,
    UnsupportedError,
)
from .http import HttpChecker
from .key_value import KeyValueChecker
from .model_catalog import ModelCatalogChecker
from .object_store import ObjectStoreChecker
from .secret_store import SecretStoreChecker
from .sql import SqlChecker
from .wide_column import WideColumnChecker

__all__ = [
    "Checker",
    "CheckError",
    "CheckConnectionError",
    "NotFoundError",
    "PartialFailure",
    "ProtocolError",
    "UnsupportedError",
    "SqlChecker",
    "KeyValueChecker",
    "HttpChecker",
    "ObjectStoreChecker",
    "CacheClusterChecker",
    "SecretStoreChecker",
    "WideColumnChecker",
    "ModelCatalogChecker",
    "get_checker",
    "default_checkers",
]

_CHECKERS: dict[Kind, type[Checker]] = {
    Kind.SQL: SqlChecker,
    Kind.KEY_VALUE: KeyValueChecker,
    Kind.HTTP: HttpChecker,
    Kind.OBJECT_STORE: ObjectStoreChecker,
    Kind.CACHE_CLUSTER: CacheClusterChecker,
    Kind.SECRET_STORE: SecretStoreChecker,
    Kind.WIDE_COLUMN: WideColumnChecker,
    Kind.MODEL_CATALOG: ModelCatalogChecker,
}


def get_checker(kind: Kind) -> Checker:
    """Return a fresh checker for *kind*."""
    cls = _CHECKERS.get(kind)
    if cls is None:
        raise ValueError(f"No checker registered for {kind!r}")
    return cls()


def default_checkers() -> dict[Kind, Checker]:
    """One checker per kind, as used by :func:`conncheck.fanout.run_checks`."""
    return {kind: get_checker(kind) for kind in Kind}
