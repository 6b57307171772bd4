from __future__ import annotations

from types import TracebackType
from typing import Protocol, Type

from authcenter.domain.ports.app_repository import AppRepositoryPort
from authcenter.domain.ports.user_repository import UserRepositoryPort


class UnitOfWorkPort(Protocol):
    """
    Transaction boundary.

    Usage:
        async with uow as tx:
            app_id = await tx.apps.insert(CreateApp(...))
            await tx.commit()

    Leaving the block without commit() rolls everything back.
    """

    apps: AppRepositoryPort
    users: UserRepositoryPort

    async def __aenter__(self) -> "UnitOfWorkPort":
        """Begin a new transaction. Code here runs before code in the context manager."""

    async def __aexit__(
        self,
        exc_type: Type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        """End the transaction. Code here runs after code in the context manager."""

    async def commit(self) -> None:
        """Commit the transaction."""

    async def rollback(self) -> None:
        """Rollback the transaction."""
