from __future__ import annotations

from typing import Optional, Protocol

from authcenter.domain.entities import SecretPair
from authcenter.domain.identity import ID


class CacherPort(Protocol):
    """
    Read-through cache of current secret pairs.
    Every method may raise CacherError; callers treat the cache as best-effort.
    """

    async def get_app_secret(self, app_id: ID) -> Optional[SecretPair]:
        """Cached pair for the app, None on miss."""

    async def put_app_secret(self, app_id: ID, pair: SecretPair) -> None:
        """Replace (never merge) the cached pair for the app."""

    async def delete_app_secret(self, app_id: ID) -> None:
        """Drop the cached pair for the app."""

    async def get_user_secret(self, app_id: ID, user_id: ID) -> Optional[SecretPair]:
        """Cached pair for the user under its owning app, None on miss."""

    async def put_user_secret(self, app_id: ID, user_id: ID, pair: SecretPair) -> None:
        """Replace (never merge) the cached pair for the user."""
