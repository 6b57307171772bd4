from __future__ import annotations

from typing import Optional

from redis.asyncio import Redis
from redis.exceptions import RedisError

from authcenter.domain.entities import SecretPair
from authcenter.domain.errors import CacherError
from authcenter.domain.identity import ID
from authcenter.domain.ports.cacher import CacherPort


class RedisSecretCacher(CacherPort):
    """
    One Redis hash per identity: {hashed_secret, secret_salt}.
    Writes DEL + HSET (+ EXPIRE) in a single MULTI so a pair is only ever
    replaced as a whole.
    """

    def __init__(
        self,
        redis: Redis,
        *,
        key_prefix: str = "secret:",
        ttl_seconds: int | None = None,
    ) -> None:
        self._redis = redis
        self._prefix = key_prefix
        self._ttl = ttl_seconds

    def _app_key(self, app_id: ID) -> str:
        return f"{self._prefix}app:{app_id}"

    def _user_key(self, app_id: ID, user_id: ID) -> str:
        return f"{self._prefix}user:{app_id}:{user_id}"

    async def _get(self, key: str) -> Optional[SecretPair]:
        try:
            stored = await self._redis.hgetall(key)
        except RedisError as e:
            raise CacherError(f"redis HGETALL {key} failed: {e}") from e
        if not stored or "hashed_secret" not in stored or "secret_salt" not in stored:
            return None
        return SecretPair(
            hashed_secret=stored["hashed_secret"], secret_salt=stored["secret_salt"]
        )

    async def _put(self, key: str, pair: SecretPair) -> None:
        pipe = self._redis.pipeline(transaction=True)
        pipe.delete(key)
        pipe.hset(
            key,
            mapping={"hashed_secret": pair.hashed_secret, "secret_salt": pair.secret_salt},
        )
        if self._ttl:
            pipe.expire(key, self._ttl)
        try:
            await pipe.execute()
        except RedisError as e:
            raise CacherError(f"redis write of {key} failed: {e}") from e

    async def get_app_secret(self, app_id: ID) -> Optional[SecretPair]:
        return await self._get(self._app_key(app_id))

    async def put_app_secret(self, app_id: ID, pair: SecretPair) -> None:
        await self._put(self._app_key(app_id), pair)

    async def delete_app_secret(self, app_id: ID) -> None:
        try:
            await self._redis.delete(self._app_key(app_id))
        except RedisError as e:
            raise CacherError(f"redis DEL failed: {e}") from e

    async def get_user_secret(self, app_id: ID, user_id: ID) -> Optional[SecretPair]:
        return await self._get(self._user_key(app_id, user_id))

    async def put_user_secret(self, app_id: ID, user_id: ID, pair: SecretPair) -> None:
        await self._put(self._user_key(app_id, user_id), pair)
