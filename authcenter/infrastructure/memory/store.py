from __future__ import annotations

import asyncio
import itertools
import uuid
from datetime import datetime, timezone
from typing import Any, Optional, Type

from authcenter.domain.entities import (
    App,
    AppQuery,
    CreateApp,
    CreateUser,
    User,
    UserQuery,
    UserUpdate,
)
from authcenter.domain.errors import ContactAlreadyRegistered
from authcenter.domain.identity import ID, IdentityType
from authcenter.domain.ports.app_repository import AppRepositoryPort
from authcenter.domain.ports.unit_of_work import UnitOfWorkPort
from authcenter.domain.ports.user_repository import UserRepositoryPort
from authcenter.settings import get_settings


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _contact_taken(existing: User, candidate: User) -> bool:
    if existing.id == candidate.id or existing.app_id != candidate.app_id:
        return False
    if candidate.phone is not None and existing.phone == candidate.phone:
        return True
    return candidate.email is not None and existing.email == candidate.email


class MemoryStore:
    """
    Process-local system of record shared by every MemoryUnitOfWork.
    Ids come from a counter (int) or uuid4 (str), like a DB sequence:
    they are never reused, even when the inserting transaction rolls back.
    """

    def __init__(self, identity_type: IdentityType = "int") -> None:
        self.apps: dict[Any, App] = {}
        self.users: dict[Any, User] = {}
        self.lock = asyncio.Lock()
        self._identity_type = identity_type
        self._ids = itertools.count(1)

    def next_id(self) -> int | str:
        if self._identity_type == "int":
            return next(self._ids)
        return str(uuid.uuid4())


class MemoryAppRepository(AppRepositoryPort):
    def __init__(self, tx: "MemoryUnitOfWork") -> None:
        self._tx = tx

    async def insert(self, app: CreateApp) -> ID:
        now = _now()
        app_id = self._tx.store.next_id()
        self._tx.stage_app(
            App(
                id=app_id,
                name=app.name,
                secret_hash=app.secret_hash,
                secret_salt=app.secret_salt,
                created_at=now,
                updated_at=now,
            )
        )
        return app_id

    async def fetch(self, query: AppQuery[ID]) -> Optional[App[ID]]:
        for app in self._tx.working_apps.values():
            if query.matches(app):
                return app
        return None

    async def list(self, query: AppQuery[ID], page: int, size: int) -> list[App[ID]]:
        matched = [a for a in self._tx.working_apps.values() if query.matches(a)]
        start = (page - 1) * size
        return matched[start : start + size]

    async def count(self, query: AppQuery[ID]) -> int:
        return sum(1 for a in self._tx.working_apps.values() if query.matches(a))


class MemoryUserRepository(UserRepositoryPort):
    def __init__(self, tx: "MemoryUnitOfWork") -> None:
        self._tx = tx

    async def insert(self, user: CreateUser[ID]) -> ID:
        now = _now()
        candidate = User(
            id=self._tx.store.next_id(),
            app_id=user.app_id,
            secret_hash=user.secret_hash,
            secret_salt=user.secret_salt,
            created_at=now,
            updated_at=now,
            phone=user.phone,
            email=user.email,
            password_hash=user.password_hash,
            password_salt=user.password_salt,
        )
        if any(_contact_taken(u, candidate) for u in self._tx.working_users.values()):
            raise ContactAlreadyRegistered()
        self._tx.stage_user(candidate)
        return candidate.id

    async def fetch(self, query: UserQuery[ID]) -> Optional[User[ID]]:
        for user in self._tx.working_users.values():
            if query.matches(user):
                return user
        return None

    async def update(self, query: UserQuery[ID], update: UserUpdate) -> int:
        now = _now()
        affected = 0
        for user in list(self._tx.working_users.values()):
            if query.matches(user):
                self._tx.stage_user(update.apply(user, now))
                affected += 1
        return affected


class MemoryUnitOfWork(UnitOfWorkPort):
    """
    Reads see the store as of __aenter__ plus this transaction's own writes.
    commit() publishes the staged rows under the store lock (last writer wins).
    """

    def __init__(self, store: MemoryStore) -> None:
        self.store = store
        self._active: bool = False
        self._committed: bool = False
        self.working_apps: dict[Any, App] = {}
        self.working_users: dict[Any, User] = {}
        self._staged_apps: dict[Any, App] = {}
        self._staged_users: dict[Any, User] = {}
        self.apps: MemoryAppRepository
        self.users: MemoryUserRepository

    def _reset(self) -> None:
        self.working_apps = dict(self.store.apps)
        self.working_users = dict(self.store.users)
        self._staged_apps = {}
        self._staged_users = {}

    def stage_app(self, app: App) -> None:
        self.working_apps[app.id] = app
        self._staged_apps[app.id] = app

    def stage_user(self, user: User) -> None:
        self.working_users[user.id] = user
        self._staged_users[user.id] = user

    async def __aenter__(self) -> "MemoryUnitOfWork":
        self._reset()
        self.apps = MemoryAppRepository(self)
        self.users = MemoryUserRepository(self)
        self._active = True
        self._committed = False
        return self

    async def __aexit__(
        self,
        exc_type: Type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: Any,
    ) -> None:
        if self._active and (exc_value or not self._committed):
            await self.rollback()
        self._active = False
        self._committed = False

    async def commit(self) -> None:
        if not self._active:
            raise RuntimeError("No transaction available to commit")
        async with self.store.lock:
            for user in self._staged_users.values():
                if user.id in self.store.users:
                    continue
                if any(_contact_taken(u, user) for u in self.store.users.values()):
                    raise ContactAlreadyRegistered()
            self.store.apps.update(self._staged_apps)
            self.store.users.update(self._staged_users)
        self._staged_apps = {}
        self._staged_users = {}
        self._committed = True

    async def rollback(self) -> None:
        self._reset()
        self._committed = False


_store: Optional[MemoryStore] = None


def get_memory_store() -> MemoryStore:
    """Lazy singleton store for STORAGE_BACKEND=memory."""
    global _store
    if _store is None:
        _store = MemoryStore(get_settings().identity_type)
    return _store


def reset_memory_store() -> None:
    global _store
    _store = None
