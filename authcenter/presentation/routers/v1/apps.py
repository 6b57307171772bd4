from typing import Annotated, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from authcenter.application.list_apps import list_apps
from authcenter.application.register_app import register_app
from authcenter.domain.ports.cacher import CacherPort
from authcenter.domain.ports.hasher import HasherPort
from authcenter.domain.ports.secret_generator import SecretGeneratorPort
from authcenter.domain.ports.unit_of_work import UnitOfWorkPort
from authcenter.presentation.dependencies import (
    get_app_listing_enabled,
    get_cacher,
    get_hasher,
    get_secret_generator,
    get_uow,
)
from authcenter.schemas.requests import AppCreateIn
from authcenter.schemas.responses import AppListOut, AppOut, AppRegisteredOut

router = APIRouter(prefix="/apps", tags=["Apps"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=AppRegisteredOut,
)
async def post_register_app(
    body: AppCreateIn,
    uow: Annotated[UnitOfWorkPort, Depends(get_uow)],
    cacher: Annotated[CacherPort, Depends(get_cacher)],
    hasher: Annotated[HasherPort, Depends(get_hasher)],
    secret_generator: Annotated[SecretGeneratorPort, Depends(get_secret_generator)],
):
    registered = await register_app(
        uow=uow,
        cacher=cacher,
        hasher=hasher,
        secret_generator=secret_generator,
        name=body.name,
    )
    return AppRegisteredOut(
        id=registered.id, name=registered.name, secret=registered.secret
    )


@router.get("", response_model=AppListOut)
async def get_list_apps(
    uow: Annotated[UnitOfWorkPort, Depends(get_uow)],
    enabled: Annotated[bool, Depends(get_app_listing_enabled)],
    keywords: Optional[str] = None,
    page: Annotated[int, Query(ge=1)] = 1,
    size: Annotated[int, Query(ge=1, le=100)] = 20,
):
    if not enabled:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")
    apps, total = await list_apps(uow, keywords=keywords, page=page, size=size)
    return AppListOut(
        list=[
            AppOut(
                id=a.id, name=a.name, created_at=a.created_at, updated_at=a.updated_at
            )
            for a in apps
        ],
        total=total,
    )
