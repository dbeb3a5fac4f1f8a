from fastapi import APIRouter, Depends

from filters.auth import BearerAuthFilter
from . import networks


def setup_routers() -> APIRouter:
    router = APIRouter(dependencies=[Depends(BearerAuthFilter())])
    router.include_router(networks.router)

    return router
