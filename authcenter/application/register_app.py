import logging

from authcenter.application.secrets import cache_put_best_effort, mint_secret
from authcenter.domain.entities import CreateApp, RegisteredApp
from authcenter.domain.ports.cacher import CacherPort
from authcenter.domain.ports.hasher import HasherPort
from authcenter.domain.ports.secret_generator import SecretGeneratorPort
from authcenter.domain.ports.unit_of_work import UnitOfWorkPort

logger = logging.getLogger(__name__)


async def register_app(
    uow: UnitOfWorkPort,
    cacher: CacherPort,
    hasher: HasherPort,
    secret_generator: SecretGeneratorPort,
    name: str,
) -> RegisteredApp:
    secret, pair = mint_secret(hasher, secret_generator)

    async with uow as transaction:
        app_id = await transaction.apps.insert(
            CreateApp(
                name=name, secret_hash=pair.hashed_secret, secret_salt=pair.secret_salt
            )
        )
        await transaction.commit()

    await cache_put_best_effort(
        cacher.put_app_secret(app_id, pair), entity="app", entity_id=app_id
    )
    logger.info("app registered", extra={"app_id": str(app_id)})
    return RegisteredApp(id=app_id, name=name, secret=secret)
