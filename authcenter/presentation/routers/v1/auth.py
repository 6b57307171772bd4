from typing import Annotated, Any, Callable

from fastapi import APIRouter, Depends, Response

from authcenter.application.login import login
from authcenter.application.send_verify_code import send_verify_code
from authcenter.application.verify_secret import verify_secret
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
from authcenter.schemas.requests import LoginIn, SendVerifyCodeIn, VerifySecretIn
from authcenter.schemas.responses import SecretIssuedOut

router = APIRouter(tags=["Auth"])


@router.put("/login", response_model=SecretIssuedOut)
async def put_login(
    body: LoginIn,
    uow: Annotated[UnitOfWorkPort, Depends(get_uow)],
    cacher: Annotated[CacherPort, Depends(get_cacher)],
    hasher: Annotated[HasherPort, Depends(get_hasher)],
    secret_generator: Annotated[SecretGeneratorPort, Depends(get_secret_generator)],
    parse: Annotated[Callable[[Any], Any], Depends(get_identity_parser)],
):
    app_id = parse_id(parse, body.app_id, "app_id")
    try:
        issued = await login(
            uow,
            cacher,
            hasher,
            secret_generator,
            phone=body.phone,
            email=body.email,
            password=body.password,
            app_id=app_id,
            app_secret=body.app_secret,
        )
    except DomainError as e:
        raise to_http_exception(e) from e
    return SecretIssuedOut(id=issued.id, secret=issued.secret)


@router.put("/verify_secret")
async def put_verify_secret(
    body: VerifySecretIn,
    uow: Annotated[UnitOfWorkPort, Depends(get_uow)],
    cacher: Annotated[CacherPort, Depends(get_cacher)],
    hasher: Annotated[HasherPort, Depends(get_hasher)],
    parse: Annotated[Callable[[Any], Any], Depends(get_identity_parser)],
):
    app_id = parse_id(parse, body.app_id, "app_id")
    user_id = parse_id(parse, body.id, "id")
    try:
        await verify_secret(
            uow,
            cacher,
            hasher,
            user_id=user_id,
            secret=body.secret,
            app_id=app_id,
            app_secret=body.app_secret,
        )
    except DomainError as e:
        raise to_http_exception(e) from e
    return Response(status_code=200)


@router.put("/send_verify_code")
async def put_send_verify_code(
    body: SendVerifyCodeIn,
    verify_codes: Annotated[VerifyCodeManagerPort, Depends(get_verify_code_manager)],
):
    try:
        await send_verify_code(verify_codes, phone=body.phone, email=body.email)
    except DomainError as e:
        raise to_http_exception(e) from e
    return Response(status_code=200)
