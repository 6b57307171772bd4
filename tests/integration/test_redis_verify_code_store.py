import asyncio
from uuid import uuid4

import pytest

from authcenter.domain.services import make_code_digest
from authcenter.infrastructure.redis_cache.verify_code_store import RedisVerifyCodeStore


@pytest.mark.asyncio
async def test_store_verify_consume_success_then_missing(redis_client):
    store = RedisVerifyCodeStore(redis_client)
    key = f"sms:{uuid4()}"
    salt_b64, digest_b64 = make_code_digest("123456")

    await store.store_hashed_code(key, salt_b64, digest_b64, ttl_seconds=60)

    assert await store.verify_and_consume(key, "123456") is True
    assert await store.verify_and_consume(key, "123456") is False
    assert await redis_client.exists(f"vc:{key}") == 0


@pytest.mark.asyncio
async def test_wrong_code_does_not_consume(redis_client):
    store = RedisVerifyCodeStore(redis_client)
    key = f"email:{uuid4()}"
    salt_b64, digest_b64 = make_code_digest("567890")

    await store.store_hashed_code(key, salt_b64, digest_b64, ttl_seconds=60)

    assert await store.verify_and_consume(key, "999999") is False
    h = await redis_client.hgetall(f"vc:{key}")
    assert h.get("digest") == digest_b64
    await store.invalidate(key)


@pytest.mark.asyncio
async def test_invalidate_deletes_key(redis_client):
    store = RedisVerifyCodeStore(redis_client)
    key = f"sms:{uuid4()}"
    salt_b64, digest_b64 = make_code_digest("123456")

    await store.store_hashed_code(key, salt_b64, digest_b64, ttl_seconds=60)
    await store.invalidate(key)

    assert await redis_client.exists(f"vc:{key}") == 0


@pytest.mark.asyncio
async def test_ttl_expiry_causes_failure(redis_client):
    store = RedisVerifyCodeStore(redis_client)
    key = f"sms:{uuid4()}"
    salt_b64, digest_b64 = make_code_digest("000001")

    await store.store_hashed_code(key, salt_b64, digest_b64, ttl_seconds=1)
    await asyncio.sleep(1.2)

    assert await store.verify_and_consume(key, "000001") is False


@pytest.mark.asyncio
async def test_atomic_single_use_under_race(redis_client):
    store = RedisVerifyCodeStore(redis_client)
    key = f"sms:{uuid4()}"
    salt_b64, digest_b64 = make_code_digest("424242")

    await store.store_hashed_code(key, salt_b64, digest_b64, ttl_seconds=60)

    res1, res2 = await asyncio.gather(
        store.verify_and_consume(key, "424242"),
        store.verify_and_consume(key, "424242"),
    )
    assert sorted([res1, res2]) == [False, True]
