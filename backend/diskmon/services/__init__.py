"""Business logic services — singleton registry."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from diskmon.services.filesystem_service import FilesystemService

logger = logging.getLogger(__name__)

_filesystem_service: FilesystemService | None = None


async def init_services() -> None:
    """Create and wire up all service singletons."""
    global _filesystem_service

    from diskmon.services.filesystem_service import FilesystemService

    _filesystem_service = FilesystemService()
    logger.info("Filesystem service initialized")


async def shutdown_services() -> None:
    """Drop service singletons."""
    global _filesystem_service
    _filesystem_service = None


def get_filesystem_service() -> FilesystemService:
    if _filesystem_service is None:
        raise RuntimeError("Services not initialized — call init_services() first")
    return _filesystem_service
