"""Relational database checker (PostgreSQL, MySQL) built on SQLAlchemy asyncio."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any

from sqlalchemy import text
from sqlalchemy.engine import URL
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import create_async_engine

from conncheck.checks.base import Checker
from conncheck.checks.errors import CheckConnectionError, ProtocolError, UnsupportedError
from conncheck.models import Kind, SqlCheckResult, SqlConfig

logger = logging.getLogger(__name__)

# Seconds to wait for the single pooled connection.
ACQUIRE_TIMEOUT = 5


class SqlDriver(enum.Enum):
    POSTGRES = "postgres"
    MYSQL = "mysql"

    @classmethod
    def parse(cls, value: str) -> SqlDriver | None:
        try:
            return cls(value)
        except ValueError:
            return None


@dataclass(frozen=True)
class Dialect:
    drivername: str
    tables_query: str
    connect_args: dict[str, Any]
    scoped_to_database: bool = False


_DIALECTS: dict[SqlDriver, Dialect] = {
    SqlDriver.POSTGRES: Dialect(
        drivername="postgresql+asyncpg",
        tables_query=(
            "SELECT table_name FROM information_schema.tables "
            "WHERE table_schema = 'public' ORDER BY table_name"
        ),
        connect_args={"timeout": ACQUIRE_TIMEOUT},
    ),
    SqlDriver.MYSQL: Dialect(
        drivername="mysql+aiomysql",
        tables_query=(
            "SELECT table_name FROM information_schema.tables "
            "WHERE table_schema = :database ORDER BY table_name"
        ),
        connect_args={"connect_timeout": ACQUIRE_TIMEOUT},
        scoped_to_database=True,
    ),
}


def build_url(config: SqlConfig, driver: SqlDriver) -> URL:
    return URL.create(
        _DIALECTS[driver].drivername,
        username=config.user,
        password=config.password,
        host=config.host,
        port=config.port,
        database=config.database,
    )


class SqlChecker(Checker[SqlConfig, SqlCheckResult]):
    """Connect with a one-connection pool and list the visible tables."""

    kind = Kind.SQL
    display_name = "SQL database"

    async def probe(self, config: SqlConfig) -> SqlCheckResult:
        driver = SqlDriver.parse(config.driver)
        if driver is None:
            raise UnsupportedError(f"Unsupported SQL driver: {config.driver}")

        dialect = _DIALECTS[driver]
        tables = await self._list_tables(config, driver, dialect)
        logger.debug("Retrieved %d tables from %s", len(tables), config.identifier)
        return SqlCheckResult(
            success=True,
            driver=driver.value,
            host=config.host,
            port=config.port,
            database=config.database,
            tables=tables,
        )

    async def _list_tables(
        self,
        config: SqlConfig,
        driver: SqlDriver,
        dialect: Dialect,
    ) -> list[str]:
        logger.debug("Connecting to %s database %s", driver.value, config.identifier)
        try:
            engine = create_async_engine(
                build_url(config, driver),
                pool_size=1,
                max_overflow=0,
                pool_timeout=ACQUIRE_TIMEOUT,
                connect_args=dialect.connect_args,
            )
        except Exception as exc:
            raise CheckConnectionError(f"Connection failed: {exc}") from exc

        try:
            try:
                conn = await engine.connect()
            except Exception as exc:
                raise CheckConnectionError(f"Connection failed: {exc}") from exc

            try:
                params = {"database": config.database} if dialect.scoped_to_database else {}
                rows = await conn.execute(text(dialect.tables_query), params)
                return [row[0] for row in rows]
            except SQLAlchemyError as exc:
                raise ProtocolError(f"Failed to retrieve tables: {exc}") from exc
            finally:
                await conn.close()
        finally:
            await engine.dispose()

    def failed(self, config: SqlConfig, error: str, **fields: Any) -> SqlCheckResult:
        return SqlCheckResult(
            success=False,
            driver=config.driver,
            host=config.host,
            port=config.port,
            database=config.database,
            error=error,
            **fields,
        )
