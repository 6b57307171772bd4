from fastapi import APIRouter

from authcenter.presentation.routers.v1.apps import router as apps_router
from authcenter.presentation.routers.v1.auth import router as auth_router
from authcenter.presentation.routers.v1.users import router as users_router
from authcenter.presentation.routes.health import router as health_router

api = APIRouter()

# Add all v1 routers here
routers = (apps_router, users_router, auth_router)
for router in routers:
    api.include_router(router, prefix="/v1")

api.include_router(health_router)
