from __future__ import annotations

from typing import Any, Optional

from authcenter.domain.entities import SecretPair
from authcenter.domain.identity import ID
from authcenter.domain.ports.cacher import CacherPort


class MemorySecretCacher(CacherPort):
    """Dict-backed cacher for single-process deployments and tests."""

    def __init__(self) -> None:
        self.apps: dict[Any, SecretPair] = {}
        self.users: dict[tuple[Any, Any], SecretPair] = {}

    async def get_app_secret(self, app_id: ID) -> Optional[SecretPair]:
        return self.apps.get(app_id)

    async def put_app_secret(self, app_id: ID, pair: SecretPair) -> None:
        self.apps[app_id] = pair

    async def delete_app_secret(self, app_id: ID) -> None:
        self.apps.pop(app_id, None)

    async def get_user_secret(self, app_id: ID, user_id: ID) -> Optional[SecretPair]:
        return self.users.get((app_id, user_id))

    async def put_user_secret(self, app_id: ID, user_id: ID, pair: SecretPair) -> None:
        self.users[(app_id, user_id)] = pair


class NullSecretCacher(CacherPort):
    """CACHE_BACKEND=none: every lookup misses, every write is dropped."""

    async def get_app_secret(self, app_id: ID) -> Optional[SecretPair]:
        return None

    async def put_app_secret(self, app_id: ID, pair: SecretPair) -> None:
        return None

    async def delete_app_secret(self, app_id: ID) -> None:
        return None

    async def get_user_secret(self, app_id: ID, user_id: ID) -> Optional[SecretPair]:
        return None

    async def put_user_secret(self, app_id: ID, user_id: ID, pair: SecretPair) -> None:
        return None
