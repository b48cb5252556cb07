"""Key-value store checker.  Only Redis is implemented."""

from __future__ import annotations

import enum
import logging
from typing import Any
from urllib.parse import quote

import redis.asyncio as aioredis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError
from redis.exceptions import TimeoutError as RedisTimeoutError

from conncheck.checks.base import Checker
from conncheck.checks.errors import CheckConnectionError, ProtocolError, UnsupportedError
from conncheck.models import KeyValueCheckResult, KeyValueConfig, Kind

logger = logging.getLogger(__name__)


class KeyValueDriver(enum.Enum):
    REDIS = "redis"

    @classmethod
    def parse(cls, value: str) -> KeyValueDriver | None:
        try:
            return cls(value)
        except ValueError:
            return None


def build_redis_url(config: KeyValueConfig) -> str:
    if config.password is not None:
        return f"redis://:{quote(config.password, safe='')}@{config.host}:{config.port}/"
    return f"redis://{config.host}:{config.port}/"


def parse_server_info(raw: str | bytes) -> dict[str, str]:
    """Flatten ``INFO`` output into ``{key: value}``.

    Blank lines and ``# Section`` headers are skipped; every other line is
    split on its first colon.
    """
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="replace")
    info: dict[str, str] = {}
    for line in raw.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition(":")
        if sep:
            info[key.strip()] = value.strip()
    return info


def _raw_response(response: Any, **options: Any) -> Any:
    return response


class KeyValueChecker(Checker[KeyValueConfig, KeyValueCheckResult]):
    """PING the server, then collect its ``INFO`` map."""

    kind = Kind.KEY_VALUE
    display_name = "NoSQL database"

    async def probe(self, config: KeyValueConfig) -> KeyValueCheckResult:
        driver = KeyValueDriver.parse(config.driver)
        if driver is None:
            raise UnsupportedError(f"Unsupported NoSQL driver: {config.driver}")

        try:
            client = aioredis.Redis.from_url(build_redis_url(config), decode_responses=True)
        except (ValueError, RedisError) as exc:
            raise CheckConnectionError(f"Client creation failed: {exc}") from exc
        # Keep INFO as the raw text reply instead of redis-py's parsed dict.
        client.set_response_callback("INFO", _raw_response)
        try:
            try:
                await client.ping()
            except (RedisConnectionError, RedisTimeoutError, OSError) as exc:
                raise CheckConnectionError(
                    f"Connection manager creation failed: {exc}"
                ) from exc
            except RedisError as exc:
                raise ProtocolError(f"PING failed: {exc}") from exc
            logger.debug("Redis PING successful for %s", config.identifier)

            try:
                info = parse_server_info(await client.execute_command("INFO"))
            except (RedisError, UnicodeDecodeError) as exc:
                logger.error("Failed to get Redis INFO for %s: %s", config.identifier, exc)
                info = {}
        finally:
            await client.aclose()

        return KeyValueCheckResult(
            success=True,
            driver=driver.value,
            host=config.host,
            port=config.port,
            info=info,
        )

    def failed(self, config: KeyValueConfig, error: str, **fields: Any) -> KeyValueCheckResult:
        return KeyValueCheckResult(
            success=False,
            driver=config.driver,
            host=config.host,
            port=config.port,
            error=error,
            **fields,
        )
