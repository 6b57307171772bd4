from __future__ import annotations

from typing import Optional, Protocol

from authcenter.domain.entities import App, AppQuery, CreateApp
from authcenter.domain.identity import ID


class AppRepositoryPort(Protocol):
    async def insert(self, app: CreateApp) -> ID:
        """Insert a new app and return its id."""

    async def fetch(self, query: AppQuery[ID]) -> Optional[App[ID]]:
        """Return the first app matching `query`, or None."""

    async def list(self, query: AppQuery[ID], page: int, size: int) -> list[App[ID]]:
        """Return one page (1-based) of matching apps, oldest first."""

    async def count(self, query: AppQuery[ID]) -> int:
        """Number of apps matching `query`."""
