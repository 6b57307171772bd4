# tests/integration/conftest.py
from pathlib import Path

import psycopg
import pytest
import pytest_asyncio
from psycopg_pool import AsyncConnectionPool
from redis.asyncio import Redis
from redis.exceptions import RedisError

from authcenter.infrastructure.db import migrate
from authcenter.settings import get_settings

REPO_ROOT = Path(__file__).resolve().parents[2]


@pytest_asyncio.fixture
async def redis_client():
    r = Redis.from_url(
        get_settings().redis_url, encoding="utf-8", decode_responses=True
    )
    try:
        await r.ping()
    except (RedisError, OSError):
        await r.aclose()
        pytest.skip("redis is not reachable")
    try:
        yield r
    finally:
        await r.aclose()


@pytest.fixture(scope="session")
def migrated_dsn() -> str:
    """Apply the bigint migrations once; skip the module when Postgres is down."""
    dsn = get_settings().database_url
    try:
        psycopg.connect(dsn, connect_timeout=3).close()
    except psycopg.OperationalError:
        pytest.skip("postgres is not reachable")
    assert migrate.cmd_up(REPO_ROOT / "migrations" / "bigint") == 0
    return dsn


@pytest_asyncio.fixture
async def pg_pool(migrated_dsn):
    pool = AsyncConnectionPool(migrated_dsn, min_size=1, max_size=4, open=False)
    await pool.open()
    async with pool.connection() as conn:
        await conn.execute("TRUNCATE users, apps RESTART IDENTITY CASCADE;")
    try:
        yield pool
    finally:
        await pool.close()
