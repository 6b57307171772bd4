from __future__ import annotations

from typing import Optional, Protocol

from authcenter.domain.entities import CreateUser, User, UserQuery, UserUpdate
from authcenter.domain.identity import ID


class UserRepositoryPort(Protocol):
    async def insert(self, user: CreateUser[ID]) -> ID:
        """
        Insert a new user and return its id.
        Raise ContactAlreadyRegistered if the phone/email is taken in the same app.
        """

    async def fetch(self, query: UserQuery[ID]) -> Optional[User[ID]]:
        """Return the first user matching `query`, or None."""

    async def update(self, query: UserQuery[ID], update: UserUpdate) -> int:
        """Apply `update` to every matching user. Return the affected row count."""
