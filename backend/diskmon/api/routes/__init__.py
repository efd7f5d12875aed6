"""API route registration."""

from fastapi import APIRouter

from diskmon.api.routes import filesystems, health

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(filesystems.router, prefix="/filesystems", tags=["filesystems"])
