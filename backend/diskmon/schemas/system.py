"""Health check schemas."""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Health check response; ``degraded`` when the disk report tool is missing."""
    status: str = "ok"
    version: str
    service: str = "diskmon"
    df_command: str
    df_path: str | None = None
