from __future__ import annotations

from typing import Any, Callable, Optional

import psycopg
from psycopg import sql

from authcenter.domain.entities import App, AppQuery, CreateApp
from authcenter.domain.identity import ID
from authcenter.domain.ports.app_repository import AppRepositoryPort
from authcenter.infrastructure.db.errors import wrap_db_errors
from authcenter.infrastructure.db.filters import escape_like, where_clause

_COLUMNS = sql.SQL("id, name, secret_hash, secret_salt, created_at, updated_at")


class PgAppRepository(AppRepositoryPort):
    """
    Postgres implementation of AppRepositoryPort.

    NOTE:
    - This repo is constructed with an *active async connection* supplied by the UoW.
    - It does not commit; the UnitOfWork controls the transaction boundary.
    """

    def __init__(
        self, conn: psycopg.AsyncConnection, parse_id: Callable[[Any], ID]
    ) -> None:
        self._conn = conn
        self._parse_id = parse_id

    def _row_to_app(self, row: tuple) -> App:
        id_, name, secret_hash, secret_salt, created_at, updated_at = row
        return App(
            id=self._parse_id(id_),
            name=str(name),
            secret_hash=str(secret_hash),
            secret_salt=str(secret_salt),
            created_at=created_at,
            updated_at=updated_at,
        )

    def _where(self, query: AppQuery) -> tuple[sql.Composable, list[Any]]:
        extra = []
        if query.name_like_any:
            fragment = sql.SQL("({})").format(
                sql.SQL(" OR ").join(
                    sql.SQL("name ILIKE %s") for _ in query.name_like_any
                )
            )
            extra.append(
                (fragment, [f"%{escape_like(k)}%" for k in query.name_like_any])
            )
        return where_clause([("id", query.id_eq)], extra=extra)

    async def insert(self, app: CreateApp) -> ID:
        stmt = """
        INSERT INTO apps (name, secret_hash, secret_salt)
        VALUES (%s, %s, %s)
        RETURNING id
        """
        with wrap_db_errors("insert app"):
            async with self._conn.cursor() as cur:
                await cur.execute(stmt, (app.name, app.secret_hash, app.secret_salt))
                row = await cur.fetchone()
        if not row:
            raise RuntimeError("insert app returned no row")
        return self._parse_id(row[0])

    async def fetch(self, query: AppQuery[ID]) -> Optional[App[ID]]:
        where, params = self._where(query)
        stmt = sql.SQL("SELECT {} FROM apps {} ORDER BY id LIMIT 1").format(
            _COLUMNS, where
        )
        with wrap_db_errors("fetch app"):
            async with self._conn.cursor() as cur:
                await cur.execute(stmt, params)
                row = await cur.fetchone()
        return self._row_to_app(row) if row else None

    async def list(self, query: AppQuery[ID], page: int, size: int) -> list[App[ID]]:
        where, params = self._where(query)
        stmt = sql.SQL(
            "SELECT {} FROM apps {} ORDER BY created_at, id LIMIT %s OFFSET %s"
        ).format(_COLUMNS, where)
        with wrap_db_errors("list apps"):
            async with self._conn.cursor() as cur:
                await cur.execute(stmt, [*params, size, (page - 1) * size])
                rows = await cur.fetchall()
        return [self._row_to_app(r) for r in rows]

    async def count(self, query: AppQuery[ID]) -> int:
        where, params = self._where(query)
        stmt = sql.SQL("SELECT count(*) FROM apps {}").format(where)
        with wrap_db_errors("count apps"):
            async with self._conn.cursor() as cur:
                await cur.execute(stmt, params)
                row = await cur.fetchone()
        return int(row[0]) if row else 0
