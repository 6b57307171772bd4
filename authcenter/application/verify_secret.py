from authcenter.application.secrets import verify_app_secret, verify_user_secret
from authcenter.domain.identity import ID
from authcenter.domain.ports.cacher import CacherPort
from authcenter.domain.ports.hasher import HasherPort
from authcenter.domain.ports.unit_of_work import UnitOfWorkPort


async def verify_secret(
    uow: UnitOfWorkPort,
    cacher: CacherPort,
    hasher: HasherPort,
    *,
    user_id: ID,
    secret: str,
    app_id: ID,
    app_secret: str,
) -> None:
    async with uow as transaction:
        await verify_app_secret(transaction, cacher, hasher, app_id, app_secret)
        await verify_user_secret(transaction, cacher, hasher, app_id, user_id, secret)
        # read-only: no commit
