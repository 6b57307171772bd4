from contextlib import asynccontextmanager

from fastapi import FastAPI

from authcenter.domain.ports.verify_code_store import VerifyCodeStorePort
from authcenter.infrastructure.db.pool import close_pool, get_pool
from authcenter.infrastructure.delivery.log_adapter import LogDeliveryAdapter
from authcenter.infrastructure.email.http_smtp_adapter import HttpSmtpEmailAdapter
from authcenter.infrastructure.http.client import (
    close_http_client,
    get_http_client,
    open_http_client,
)
from authcenter.infrastructure.memory.verify_code_store import MemoryVerifyCodeStore
from authcenter.infrastructure.redis_cache.pool import close_redis, get_redis
from authcenter.infrastructure.redis_cache.verify_code_store import (
    RedisVerifyCodeStore,
)
from authcenter.infrastructure.sms.http_sms_adapter import HttpSmsAdapter
from authcenter.infrastructure.verify_codes.manager import VerifyCodeManager
from authcenter.logging import setup_logging
from authcenter.presentation.api import api
from authcenter.settings import Settings, get_settings

settings = get_settings()


def _uses_redis(settings: Settings) -> bool:
    # verification codes live next to the secret cache; memory when there is none
    return settings.cache_backend == "redis"


def build_verify_code_store(settings: Settings) -> VerifyCodeStorePort:
    if _uses_redis(settings):
        return RedisVerifyCodeStore(get_redis())
    return MemoryVerifyCodeStore()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # startup
    if settings.storage_backend == "postgres":
        pool = get_pool()
        if not getattr(pool, "is_open", False):
            await pool.open()

    if settings.delivery_backend == "http":
        await open_http_client(settings)
        email_adapter = HttpSmtpEmailAdapter(
            base_url=settings.smtp_base_url, client=get_http_client()
        )
        sms_adapter = HttpSmsAdapter(
            base_url=settings.sms_base_url, client=get_http_client()
        )
    else:
        email_adapter = LogDeliveryAdapter("email")
        sms_adapter = LogDeliveryAdapter("sms")

    app.state.verify_code_manager = VerifyCodeManager(
        build_verify_code_store(settings),
        email=email_adapter,
        sms=sms_adapter,
        ttl_seconds=settings.verify_code_ttl_seconds,
        code_length=settings.verify_code_length,
    )

    try:
        yield
    finally:
        # shutdown
        await close_http_client()
        if _uses_redis(settings):
            await close_redis()
        if settings.storage_backend == "postgres":
            await close_pool()


def create_app() -> FastAPI:
    setup_logging(settings.log_level)
    app = FastAPI(title="Auth Center API", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.include_router(api)
    return app


app = create_app()
