from __future__ import annotations

from typing import Optional

from psycopg_pool import AsyncConnectionPool

from authcenter.settings import Settings, get_settings

_pool: Optional[AsyncConnectionPool] = None


def with_connect_timeout(dsn: str, seconds: int) -> str:
    """Append connect_timeout to a URL DSN unless it already sets one."""
    if "connect_timeout=" in dsn:
        return dsn
    sep = "&" if "?" in dsn else "?"
    return f"{dsn}{sep}connect_timeout={seconds}"


def build_pool(settings: Settings) -> AsyncConnectionPool:
    # created closed; the lifespan (or a test) opens it
    return AsyncConnectionPool(
        with_connect_timeout(settings.database_url, settings.db_connect_timeout),
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
        timeout=settings.db_pool_timeout,
        name="authcenter",
        open=False,
    )


def get_pool() -> AsyncConnectionPool:
    """Process-wide pool, created lazily and NOT opened."""
    global _pool
    if _pool is None:
        _pool = build_pool(get_settings())
    return _pool


async def close_pool() -> None:
    global _pool
    if _pool is not None:
        await _pool.close()
        _pool = None
