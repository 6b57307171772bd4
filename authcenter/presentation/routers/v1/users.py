from typing import Annotated, Any, Callable

from fastapi import APIRouter, Depends, status

from authcenter.application.register_user import register_user
from authcenter.domain.errors import DomainError
from authcenter.domain.ports.cacher import CacherPort
from authcenter.domain.ports.hasher import HasherPort
from authcenter.domain.ports.secret_generator import SecretGeneratorPort
from authcenter.domain.ports.unit_of_work import UnitOfWorkPort
from authcenter.domain.ports.verify_code_manager import VerifyCodeManagerPort
from authcenter.presentation.dependencies import (
    get_cacher,
    get_hasher,
    get_identity_parser,
    get_secret_generator,
    get_uow,
    get_verify_code_manager,
)
from authcenter.presentation.errors import parse_id, to_http_exception
from authcenter.schemas.requests import UserCreateIn
from authcenter.schemas.responses import SecretIssuedOut

router = APIRouter(prefix="/users", tags=["Users"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=SecretIssuedOut,
)
async def post_register_user(
    body: UserCreateIn,
    uow: Annotated[UnitOfWorkPort, Depends(get_uow)],
    cacher: Annotated[CacherPort, Depends(get_cacher)],
    hasher: Annotated[HasherPort, Depends(get_hasher)],
    secret_generator: Annotated[SecretGeneratorPort, Depends(get_secret_generator)],
    verify_codes: Annotated[VerifyCodeManagerPort, Depends(get_verify_code_manager)],
    parse: Annotated[Callable[[Any], Any], Depends(get_identity_parser)],
):
    app_id = parse_id(parse, body.app_id, "app_id")
    try:
        issued = await register_user(
            uow,
            cacher,
            hasher,
            secret_generator,
            verify_codes,
            phone=body.phone,
            email=body.email,
            password=body.password,
            verify_code=body.verify_code,
            app_id=app_id,
            app_secret=body.app_secret,
        )
    except DomainError as e:
        raise to_http_exception(e) from e
    return SecretIssuedOut(id=issued.id, secret=issued.secret)
