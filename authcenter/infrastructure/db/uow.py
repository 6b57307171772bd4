from __future__ import annotations

from typing import Any, Callable, Optional, Type

import psycopg
from psycopg_pool import AsyncConnectionPool

from authcenter.domain.errors import RepositoryError
from authcenter.domain.identity import ID
from authcenter.domain.ports.unit_of_work import UnitOfWorkPort
from authcenter.infrastructure.db.apps_repo import PgAppRepository
from authcenter.infrastructure.db.errors import wrap_db_errors
from authcenter.infrastructure.db.users_repo import PgUserRepository


class PgUnitOfWork(UnitOfWorkPort):
    def __init__(
        self, pool: AsyncConnectionPool, parse_id: Callable[[Any], ID]
    ) -> None:
        self._pool = pool
        self._parse_id = parse_id
        self._conn_cm: Optional[Any] = None
        self._conn: Optional[psycopg.AsyncConnection] = None
        self._committed: bool = False
        self.apps: PgAppRepository
        self.users: PgUserRepository

    async def __aenter__(self) -> "PgUnitOfWork":
        self._conn_cm = self._pool.connection()
        try:
            self._conn = await self._conn_cm.__aenter__()
        except psycopg.Error as e:
            self._conn_cm = None
            raise RepositoryError(f"could not acquire a connection: {e}") from e
        self.apps = PgAppRepository(self._conn, self._parse_id)
        self.users = PgUserRepository(self._conn, self._parse_id)
        self._committed = False
        return self

    async def __aexit__(
        self,
        exc_type: Type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: Any,
    ) -> None:
        try:
            if self._conn:
                if exc_value or not self._committed:
                    try:
                        await self._conn.rollback()
                    except psycopg.Error:
                        # the pool discards broken connections on return
                        pass
        finally:
            if self._conn_cm:
                await self._conn_cm.__aexit__(exc_type, exc_value, traceback)
            self._conn = None
            self._conn_cm = None
            self._committed = False

    async def commit(self) -> None:
        if not self._conn:
            raise RuntimeError("No connection available to commit")
        with wrap_db_errors("commit"):
            await self._conn.commit()
        self._committed = True

    async def rollback(self) -> None:
        if self._conn:
            with wrap_db_errors("rollback"):
                await self._conn.rollback()
        self._committed = False
