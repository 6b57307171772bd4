from typing import Protocol


class VerifyCodeStorePort(Protocol):
    async def store_hashed_code(
        self, key: str, salt_b64: str, digest_b64: str, ttl_seconds: int
    ) -> None:
        """Store/replace the hashed code under `key` with TTL=ttl_seconds."""

    async def verify_and_consume(self, key: str, code: str) -> bool:
        """True if matches (and then delete it for single-use), else False."""

    async def invalidate(self, key: str) -> None:
        """Delete any existing code."""
