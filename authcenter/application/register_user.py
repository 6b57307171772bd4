import logging
from typing import Optional

import authcenter.domain.services as domain_services
from authcenter.application.secrets import (
    cache_put_best_effort,
    mint_secret,
    verify_app_secret,
)
from authcenter.domain.entities import CreateUser, IssuedSecret, UserQuery
from authcenter.domain.errors import ContactAlreadyRegistered
from authcenter.domain.identity import ID
from authcenter.domain.ports.cacher import CacherPort
from authcenter.domain.ports.hasher import HasherPort
from authcenter.domain.ports.secret_generator import SecretGeneratorPort
from authcenter.domain.ports.unit_of_work import UnitOfWorkPort
from authcenter.domain.ports.verify_code_manager import VerifyCodeManagerPort

logger = logging.getLogger(__name__)


async def register_user(
    uow: UnitOfWorkPort,
    cacher: CacherPort,
    hasher: HasherPort,
    secret_generator: SecretGeneratorPort,
    verify_codes: VerifyCodeManagerPort,
    *,
    phone: Optional[str],
    email: Optional[str],
    password: str,
    verify_code: str,
    app_id: ID,
    app_secret: str,
) -> IssuedSecret:
    phone, email = domain_services.normalize_contact(phone, email)

    async with uow as transaction:
        await verify_app_secret(transaction, cacher, hasher, app_id, app_secret)

        # every supplied channel must prove ownership
        if phone is not None:
            await verify_codes.verify_sms_code(phone, verify_code)
        if email is not None:
            await verify_codes.verify_email_code(email, verify_code)

        for query in (
            UserQuery(phone_eq=phone, app_id_eq=app_id) if phone else None,
            UserQuery(email_eq=email, app_id_eq=app_id) if email else None,
        ):
            if query is not None and await transaction.users.fetch(query):
                raise ContactAlreadyRegistered()

        secret, pair = mint_secret(hasher, secret_generator)
        password_salt = hasher.generate_salt()
        user_id = await transaction.users.insert(
            CreateUser(
                app_id=app_id,
                secret_hash=pair.hashed_secret,
                secret_salt=pair.secret_salt,
                phone=phone,
                email=email,
                password_hash=hasher.hash(password, password_salt),
                password_salt=password_salt,
            )
        )
        await transaction.commit()

    await cache_put_best_effort(
        cacher.put_user_secret(app_id, user_id, pair), entity="user", entity_id=user_id
    )
    logger.info(
        "user registered", extra={"app_id": str(app_id), "user_id": str(user_id)}
    )
    return IssuedSecret(id=user_id, secret=secret)
