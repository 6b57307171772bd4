import logging
from typing import Optional

import authcenter.domain.services as domain_services
from authcenter.application.secrets import (
    cache_put_best_effort,
    matches,
    rotate_user_secret,
    verify_app_secret,
)
from authcenter.domain.entities import IssuedSecret, SecretPair, UserQuery
from authcenter.domain.errors import InvalidCredential, UnsupportedLoginMethod
from authcenter.domain.identity import ID
from authcenter.domain.ports.cacher import CacherPort
from authcenter.domain.ports.hasher import HasherPort
from authcenter.domain.ports.secret_generator import SecretGeneratorPort
from authcenter.domain.ports.unit_of_work import UnitOfWorkPort

logger = logging.getLogger(__name__)


async def login(
    uow: UnitOfWorkPort,
    cacher: CacherPort,
    hasher: HasherPort,
    secret_generator: SecretGeneratorPort,
    *,
    phone: Optional[str],
    email: Optional[str],
    password: str,
    app_id: ID,
    app_secret: str,
) -> IssuedSecret:
    """
    Password login. On success the user's secret is rotated: the returned
    secret is the only valid one from now on.
    """
    phone, email = domain_services.normalize_contact(phone, email)

    async with uow as transaction:
        await verify_app_secret(transaction, cacher, hasher, app_id, app_secret)

        user = await transaction.users.fetch(
            UserQuery(phone_eq=phone, email_eq=email, app_id_eq=app_id)
        )
        if user is None:
            raise InvalidCredential()
        if not user.supports_password_login:
            raise UnsupportedLoginMethod()
        password_pair = SecretPair(
            hashed_secret=user.password_hash, secret_salt=user.password_salt
        )
        if not matches(hasher, password, password_pair):
            raise InvalidCredential()

        secret, pair = await rotate_user_secret(
            transaction, hasher, secret_generator, user
        )
        await transaction.commit()

    await cache_put_best_effort(
        cacher.put_user_secret(user.app_id, user.id, pair),
        entity="user",
        entity_id=user.id,
    )
    logger.info(
        "user logged in", extra={"app_id": str(app_id), "user_id": str(user.id)}
    )
    return IssuedSecret(id=user.id, secret=secret)
