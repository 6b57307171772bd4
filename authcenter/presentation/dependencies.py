from typing import Any, Callable, Optional

from fastapi import Request

from authcenter.domain.identity import identity_parser
from authcenter.domain.ports.cacher import CacherPort
from authcenter.domain.ports.hasher import HasherPort
from authcenter.domain.ports.secret_generator import SecretGeneratorPort
from authcenter.domain.ports.unit_of_work import UnitOfWorkPort
from authcenter.domain.ports.verify_code_manager import VerifyCodeManagerPort
from authcenter.infrastructure.db.pool import get_pool
from authcenter.infrastructure.db.uow import PgUnitOfWork
from authcenter.infrastructure.memory.cacher import MemorySecretCacher, NullSecretCacher
from authcenter.infrastructure.memory.store import MemoryUnitOfWork, get_memory_store
from authcenter.infrastructure.redis_cache.pool import get_redis
from authcenter.infrastructure.redis_cache.secret_cacher import RedisSecretCacher
from authcenter.infrastructure.security.hashers import build_hasher
from authcenter.infrastructure.security.secret_generator import TokenSecretGenerator
from authcenter.settings import get_settings

_memory_cacher: Optional[MemorySecretCacher] = None
_hasher: Optional[HasherPort] = None


def get_identity_parser() -> Callable[[Any], Any]:
    return identity_parser(get_settings().identity_type)


def get_uow() -> UnitOfWorkPort:
    settings = get_settings()
    if settings.storage_backend == "memory":
        return MemoryUnitOfWork(get_memory_store())
    return PgUnitOfWork(get_pool(), identity_parser(settings.identity_type))


def get_cacher() -> CacherPort:
    global _memory_cacher
    settings = get_settings()
    if settings.cache_backend == "redis":
        return RedisSecretCacher(
            get_redis(),
            key_prefix=settings.secret_cache_prefix,
            ttl_seconds=settings.secret_cache_ttl_seconds,
        )
    if settings.cache_backend == "memory":
        if _memory_cacher is None:
            _memory_cacher = MemorySecretCacher()
        return _memory_cacher
    return NullSecretCacher()


def get_hasher() -> HasherPort:
    global _hasher
    if _hasher is None:
        settings = get_settings()
        _hasher = build_hasher(settings.hasher, rounds=settings.bcrypt_rounds)
    return _hasher


def get_secret_generator() -> SecretGeneratorPort:
    return TokenSecretGenerator(nbytes=get_settings().secret_bytes)


def get_verify_code_manager(request: Request) -> VerifyCodeManagerPort:
    # This is set in authcenter.main lifespan()
    return request.app.state.verify_code_manager


def get_app_listing_enabled() -> bool:
    return get_settings().enable_app_listing
