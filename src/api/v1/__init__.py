"""API v1 router configuration."""

from fastapi import APIRouter

from api.v1.routes.links import router as links_router
from api.v1.routes.profiles import router as profiles_router
from api.v1.routes.public import router as public_router

router = APIRouter()
router.include_router(profiles_router)
router.include_router(links_router)
router.include_router(public_router)
