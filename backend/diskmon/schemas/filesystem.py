"""Filesystem usage schemas."""

from pydantic import BaseModel

from diskmon.services.display_settings import DisplayType, DisplayUnit


class FilesystemUsage(BaseModel):
    """One mounted block-device filesystem."""
    device: str
    mount: str
    capacity_bytes: int
    used_bytes: int
    usage_percent: int | None = None  # None when capacity is 0
    capacity: str
    used: str


class DisplaySettings(BaseModel):
    display_type: DisplayType
    display_unit: DisplayUnit


class ChartMax(BaseModel):
    value: float
    max_bytes: float
    label: str
