"""Health check — reports whether the disk report tool can be found."""

from __future__ import annotations

import shutil

from fastapi import APIRouter

from diskmon import __version__
from diskmon.config import settings
from diskmon.schemas.system import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Version plus resolution of the configured df executable."""
    df_path = shutil.which(settings.df_command[0])
    return HealthResponse(
        status="ok" if df_path else "degraded",
        version=__version__,
        df_command=" ".join(settings.df_command),
        df_path=df_path,
    )


@router.get("/ping")
async def ping():
    return {"status": "ok"}
