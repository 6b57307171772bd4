from __future__ import annotations

from typing import Any, Callable, Optional

import psycopg
from psycopg import sql

from authcenter.domain.entities import CreateUser, User, UserQuery, UserUpdate
from authcenter.domain.errors import ContactAlreadyRegistered
from authcenter.domain.identity import ID
from authcenter.domain.ports.user_repository import UserRepositoryPort
from authcenter.infrastructure.db.errors import wrap_db_errors
from authcenter.infrastructure.db.filters import where_clause

_COLUMNS = sql.SQL(
    "id, app_id, secret_hash, secret_salt, created_at, updated_at, "
    "phone, email, password_hash, password_salt"
)


class PgUserRepository(UserRepositoryPort):
    """
    Postgres implementation of UserRepositoryPort.

    NOTE:
    - This repo is constructed with an *active async connection* supplied by the UoW.
    - It does not commit; the UnitOfWork controls the transaction boundary.
    """

    def __init__(
        self, conn: psycopg.AsyncConnection, parse_id: Callable[[Any], ID]
    ) -> None:
        self._conn = conn
        self._parse_id = parse_id

    def _row_to_user(self, row: tuple) -> User:
        (
            id_,
            app_id,
            secret_hash,
            secret_salt,
            created_at,
            updated_at,
            phone,
            email,
            password_hash,
            password_salt,
        ) = row
        return User(
            id=self._parse_id(id_),
            app_id=self._parse_id(app_id),
            secret_hash=str(secret_hash),
            secret_salt=str(secret_salt),
            created_at=created_at,
            updated_at=updated_at,
            phone=phone,
            email=email,
            password_hash=password_hash,
            password_salt=password_salt,
        )

    @staticmethod
    def _where(query: UserQuery) -> tuple[sql.Composable, list[Any]]:
        return where_clause(
            [
                ("id", query.id_eq),
                ("phone", query.phone_eq),
                ("email", query.email_eq),
                ("app_id", query.app_id_eq),
            ]
        )

    async def insert(self, user: CreateUser[ID]) -> ID:
        stmt = """
        INSERT INTO users (
            app_id, phone, email, password_hash, password_salt, secret_hash, secret_salt
        )
        VALUES (%s, %s, %s, %s, %s, %s, %s)
        RETURNING id
        """
        params = (
            user.app_id,
            user.phone,
            user.email,
            user.password_hash,
            user.password_salt,
            user.secret_hash,
            user.secret_salt,
        )
        with wrap_db_errors("insert user"):
            try:
                async with self._conn.cursor() as cur:
                    await cur.execute(stmt, params)
                    row = await cur.fetchone()
            except psycopg.errors.UniqueViolation as e:
                raise ContactAlreadyRegistered() from e
        if not row:
            raise RuntimeError("insert user returned no row")
        return self._parse_id(row[0])

    async def fetch(self, query: UserQuery[ID]) -> Optional[User[ID]]:
        where, params = self._where(query)
        stmt = sql.SQL("SELECT {} FROM users {} ORDER BY id LIMIT 1").format(
            _COLUMNS, where
        )
        with wrap_db_errors("fetch user"):
            async with self._conn.cursor() as cur:
                await cur.execute(stmt, params)
                row = await cur.fetchone()
        return self._row_to_user(row) if row else None

    async def update(self, query: UserQuery[ID], update: UserUpdate) -> int:
        where, params = self._where(query)
        stmt = sql.SQL(
            """
            UPDATE users
            SET secret_hash = COALESCE(%s, secret_hash),
                secret_salt = COALESCE(%s, secret_salt),
                updated_at = now()
            {}
            """
        ).format(where)
        with wrap_db_errors("update user"):
            async with self._conn.cursor() as cur:
                await cur.execute(stmt, [update.secret_hash, update.secret_salt, *params])
                return cur.rowcount
