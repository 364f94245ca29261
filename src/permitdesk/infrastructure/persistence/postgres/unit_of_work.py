"""PostgreSQL Unit of Work implementation."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import psycopg
from psycopg_pool import AsyncConnectionPool, PoolTimeout

from permitdesk.domain.exceptions import StoreError
from permitdesk.infrastructure.persistence.postgres.activity_repository import (
    PostgresActivityRepository,
)
from permitdesk.infrastructure.persistence.postgres.history_repository import (
    PostgresHistoryRepository,
)
from permitdesk.infrastructure.persistence.postgres.permission_repository import (
    PostgresPermissionRepository,
)
from permitdesk.infrastructure.persistence.postgres.permit_repository import (
    PostgresPermitRepository,
)
from permitdesk.infrastructure.persistence.postgres.user_repository import (
    PostgresUserRepository,
)

logger = logging.getLogger("permitdesk.store")


class PostgresUnitOfWork:
    """PostgreSQL Unit of Work - one connection, one transaction."""

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool
        self._conn: object | None = None
        self._conn_cm: object | None = None

    async def __aenter__(self) -> "PostgresUnitOfWork":
        self._conn_cm = self._pool.connection()
        self._conn = await self._conn_cm.__aenter__()
        self._users = PostgresUserRepository(self._conn)
        self._permissions = PostgresPermissionRepository(self._conn)
        self._permits = PostgresPermitRepository(self._conn)
        self._history = PostgresHistoryRepository(self._conn)
        self._activity = PostgresActivityRepository(self._conn)
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        if exc_type and self._conn:
            await self._conn.rollback()
        if self._conn_cm:
            await self._conn_cm.__aexit__(exc_type, exc_val, exc_tb)

    @property
    def users(self) -> PostgresUserRepository:
        return self._users

    @property
    def permissions(self) -> PostgresPermissionRepository:
        return self._permissions

    @property
    def permits(self) -> PostgresPermitRepository:
        return self._permits

    @property
    def history(self) -> PostgresHistoryRepository:
        return self._history

    @property
    def activity(self) -> PostgresActivityRepository:
        return self._activity

    async def commit(self) -> None:
        if self._conn:
            await self._conn.commit()

    async def rollback(self) -> None:
        if self._conn:
            await self._conn.rollback()


def create_uow_factory(pool: AsyncConnectionPool) -> object:
    """Create UnitOfWork factory (async context manager).

    Driver and pool errors leave the factory as StoreError.
    """

    @asynccontextmanager
    async def factory() -> AsyncIterator[PostgresUnitOfWork]:
        try:
            async with PostgresUnitOfWork(pool) as uow:
                try:
                    yield uow
                    await uow.commit()
                except BaseException:
                    await uow.rollback()
                    raise
        except (psycopg.Error, PoolTimeout) as exc:
            logger.error("Database error: %s", exc)
            raise StoreError(str(exc)) from exc

    return factory
