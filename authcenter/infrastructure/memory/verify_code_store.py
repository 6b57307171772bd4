from __future__ import annotations

import time
from typing import Callable

from authcenter.domain import services as domain_services
from authcenter.domain.ports.verify_code_store import VerifyCodeStorePort


class MemoryVerifyCodeStore(VerifyCodeStorePort):
    """Same contract as the Redis store; expiry is checked lazily on read."""

    def __init__(self, *, clock: Callable[[], float] = time.monotonic) -> None:
        self._codes: dict[str, tuple[str, str, float]] = {}
        self._clock = clock

    async def store_hashed_code(
        self, key: str, salt_b64: str, digest_b64: str, ttl_seconds: int
    ) -> None:
        self._codes[key] = (salt_b64, digest_b64, self._clock() + ttl_seconds)

    async def verify_and_consume(self, key: str, code: str) -> bool:
        stored = self._codes.get(key)
        if stored is None:
            return False
        salt_b64, digest_b64, expires_at = stored
        if self._clock() >= expires_at:
            del self._codes[key]
            return False
        if not domain_services.verify_code_digest(code, salt_b64, digest_b64):
            return False
        del self._codes[key]
        return True

    async def invalidate(self, key: str) -> None:
        self._codes.pop(key, None)
