"""
Secret minting plus the two protocols every use case builds on:

- cache-aside verification: trust a cache hit outright (match or mismatch),
  fall back to storage only on a miss, and repopulate the cache afterwards;
- rotation after a password login: replace the user's secret pair, and
  refuse to commit unless exactly one row changed.

The cache is best-effort everywhere: a failing cache reads as a miss and a
failing write is dropped, both logged.
"""

from __future__ import annotations

import logging
from typing import Awaitable, Optional

from authcenter.domain.entities import (
    AppQuery,
    SecretPair,
    User,
    UserQuery,
    UserUpdate,
)
from authcenter.domain.errors import (
    InvalidAppCredential,
    InvalidCredential,
    SecretRotationFailed,
)
from authcenter.domain.identity import ID
from authcenter.domain.ports.cacher import CacherPort
from authcenter.domain.ports.hasher import HasherPort
from authcenter.domain.ports.secret_generator import SecretGeneratorPort
from authcenter.domain.ports.unit_of_work import UnitOfWorkPort
from authcenter.domain.services import secure_compare

logger = logging.getLogger(__name__)


def mint_secret(
    hasher: HasherPort, secret_generator: SecretGeneratorPort
) -> tuple[str, SecretPair]:
    """Return (plaintext, pair). The plaintext must only reach the caller once."""
    secret = secret_generator.generate_secret()
    salt = hasher.generate_salt()
    return secret, SecretPair(hashed_secret=hasher.hash(secret, salt), secret_salt=salt)


def matches(hasher: HasherPort, claimed: str, pair: SecretPair) -> bool:
    return secure_compare(hasher.hash(claimed, pair.secret_salt), pair.hashed_secret)


async def cache_get_fail_open(
    lookup: Awaitable[Optional[SecretPair]], *, entity: str, entity_id: ID
) -> Optional[SecretPair]:
    try:
        return await lookup
    except Exception:  # noqa: BLE001
        logger.warning(
            "secret cache read failed, treating as miss",
            extra={"entity": entity, "entity_id": str(entity_id)},
            exc_info=True,
        )
        return None


async def cache_put_best_effort(
    write: Awaitable[None], *, entity: str, entity_id: ID
) -> None:
    try:
        await write
    except Exception:  # noqa: BLE001
        logger.warning(
            "secret cache write failed",
            extra={"entity": entity, "entity_id": str(entity_id)},
            exc_info=True,
        )


async def verify_app_secret(
    tx: UnitOfWorkPort,
    cacher: CacherPort,
    hasher: HasherPort,
    app_id: ID,
    app_secret: str,
) -> None:
    """Authenticate the calling tenant. Raises InvalidAppCredential."""
    cached = await cache_get_fail_open(
        cacher.get_app_secret(app_id), entity="app", entity_id=app_id
    )
    if cached is not None:
        if not matches(hasher, app_secret, cached):
            raise InvalidAppCredential()
        return

    app = await tx.apps.fetch(AppQuery(id_eq=app_id))
    if app is None or not matches(hasher, app_secret, app.secret_pair):
        raise InvalidAppCredential()
    await cache_put_best_effort(
        cacher.put_app_secret(app.id, app.secret_pair), entity="app", entity_id=app.id
    )


async def verify_user_secret(
    tx: UnitOfWorkPort,
    cacher: CacherPort,
    hasher: HasherPort,
    app_id: ID,
    user_id: ID,
    secret: str,
) -> None:
    """Check a user's current secret under its owning app. Raises InvalidCredential."""
    cached = await cache_get_fail_open(
        cacher.get_user_secret(app_id, user_id), entity="user", entity_id=user_id
    )
    if cached is not None:
        if not matches(hasher, secret, cached):
            raise InvalidCredential()
        return

    user = await tx.users.fetch(UserQuery(id_eq=user_id, app_id_eq=app_id))
    if user is None or not matches(hasher, secret, user.secret_pair):
        raise InvalidCredential()
    await cache_put_best_effort(
        cacher.put_user_secret(user.app_id, user.id, user.secret_pair),
        entity="user",
        entity_id=user.id,
    )


async def rotate_user_secret(
    tx: UnitOfWorkPort,
    hasher: HasherPort,
    secret_generator: SecretGeneratorPort,
    user: User[ID],
) -> tuple[str, SecretPair]:
    """
    Stage a fresh secret pair for `user` inside `tx`. The caller commits and
    then writes the returned pair to the cache.
    """
    secret, pair = mint_secret(hasher, secret_generator)
    affected = await tx.users.update(
        UserQuery(id_eq=user.id, app_id_eq=user.app_id),
        UserUpdate(secret_hash=pair.hashed_secret, secret_salt=pair.secret_salt),
    )
    if affected != 1:
        raise SecretRotationFailed(affected)
    return secret, pair
