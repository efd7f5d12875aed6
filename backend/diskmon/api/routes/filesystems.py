"""Filesystem usage routes — df discovery with human-readable sizes."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Query

from diskmon.config import settings
from diskmon.schemas.filesystem import ChartMax, DisplaySettings, FilesystemUsage
from diskmon.services import get_filesystem_service
from diskmon.services.display_settings import (
    DisplayUnit,
    get_display_type_setting,
    get_display_units_setting,
)
from diskmon.services.filesystem_service import FilesystemRecord
from diskmon.utils.command import CommandFailure
from diskmon.utils.units import (
    DomainError,
    binary_bytes_to_human_string,
    bytes_to_human_string,
    round_max,
)

logger = logging.getLogger(__name__)
router = APIRouter()


def _to_usage(fs: FilesystemRecord, unit: DisplayUnit) -> FilesystemUsage:
    fmt = binary_bytes_to_human_string if unit.is_binary else bytes_to_human_string
    return FilesystemUsage(
        device=fs.device,
        mount=fs.mount,
        capacity_bytes=fs.capacity_bytes,
        used_bytes=fs.used_bytes,
        usage_percent=fs.usage_percent if fs.capacity_bytes else None,
        capacity=fmt(fs.capacity_bytes),
        used=fmt(fs.used_bytes),
    )


@router.get("", response_model=list[FilesystemUsage])
async def list_filesystems():
    """Mounted block-device filesystems, one per device."""
    service = get_filesystem_service()
    try:
        filesystems = await service.discover()
    except CommandFailure as e:
        raise HTTPException(503, e.message)

    unit = get_display_units_setting(settings, "fs-meter-unit")
    return [_to_usage(fs, unit) for fs in sorted(filesystems, key=lambda f: f.mount)]


@router.get("/display", response_model=DisplaySettings)
async def display_settings():
    """Configured display type and unit for filesystem meters."""
    return DisplaySettings(
        display_type=get_display_type_setting(settings, "fs-display"),
        display_unit=get_display_units_setting(settings, "fs-meter-unit"),
    )


@router.get("/chart-max", response_model=ChartMax)
async def chart_max(value: float = Query(..., description="Largest value on the chart, in bytes")):
    """Rounded chart axis maximum for ``value``."""
    try:
        max_bytes = round_max(value)
    except DomainError as e:
        raise HTTPException(422, str(e))
    return ChartMax(value=value, max_bytes=max_bytes, label=bytes_to_human_string(max_bytes))
