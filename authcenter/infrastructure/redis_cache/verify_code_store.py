from __future__ import annotations

from redis.asyncio import Redis

from authcenter.domain import services as domain_services
from authcenter.domain.ports.verify_code_store import VerifyCodeStorePort


_LUA_CONSUME = """
-- KEYS[1]: verify code key
-- ARGV[1]: expected digest (base64)
local key = KEYS[1]
local expected = ARGV[1]
local cur = redis.call('HGET', key, 'digest')
if not cur then
  return 0
end
if cur ~= expected then
  return 0
end
redis.call('DEL', key)
return 1
"""


class RedisVerifyCodeStore(VerifyCodeStorePort):
    def __init__(self, redis: Redis, *, key_prefix: str = "vc:") -> None:
        self._redis = redis
        self._prefix = key_prefix

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    async def store_hashed_code(
        self, key: str, salt_b64: str, digest_b64: str, ttl_seconds: int
    ) -> None:
        redis_key = self._key(key)
        pipe = self._redis.pipeline(transaction=True)
        pipe.delete(redis_key)
        pipe.hset(redis_key, mapping={"salt": salt_b64, "digest": digest_b64})
        pipe.expire(redis_key, ttl_seconds)
        await pipe.execute()

    async def verify_and_consume(self, key: str, code: str) -> bool:
        redis_key = self._key(key)
        # read salt (to compute expected digest)
        stored = await self._redis.hgetall(redis_key)
        if not stored or "salt" not in stored or "digest" not in stored:
            return False
        try:
            expected = domain_services.code_digest_b64(code, stored["salt"])
        except ValueError:
            return False
        # atomic compare-and-delete
        res = await self._redis.eval(_LUA_CONSUME, 1, redis_key, expected)
        return int(res) == 1

    async def invalidate(self, key: str) -> None:
        await self._redis.delete(self._key(key))
