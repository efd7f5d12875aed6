"""Filesystem discovery by parsing POSIX ``df -P`` output."""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Sequence
from dataclasses import dataclass

from diskmon.config import settings
from diskmon.utils.command import CommandFailure, CommandRunner, run_command

logger = logging.getLogger(__name__)

# df -P reports sizes in 1024-byte blocks
DF_BLOCK_SIZE = 1024

RE_DF_IS_DISK = re.compile(r"^\s*/dev/(\S+)(.*)$")
RE_DF_DISK_USAGE = re.compile(r"^\s*(\d+)\s+(\d+)\s+(\d+)\s+(\d+%)\s+(.*)$")


@dataclass(frozen=True)
class FilesystemRecord:
    device: str
    capacity_bytes: int
    used_bytes: int
    mount: str

    @property
    def usage_percent(self) -> int:
        """Used share of capacity, rounded half up.

        Raises ZeroDivisionError when ``capacity_bytes`` is 0.
        """
        return math.floor(self.used_bytes / self.capacity_bytes * 100 + 0.5)


def parse_df_output(output: str) -> list[FilesystemRecord]:
    """Parse ``df -P`` output into one record per device.

    Header lines and pseudo filesystems (no ``/dev/`` source) are skipped.
    When a device appears more than once, the entry with the shortest
    mount path is kept.
    """
    filesystems: dict[str, FilesystemRecord] = {}
    for line in output.splitlines():
        m = RE_DF_IS_DISK.match(line)
        if not m:
            continue
        details = RE_DF_DISK_USAGE.match(m.group(2))
        if not details:
            logger.debug("Skipping unparseable df line: %r", line)
            continue

        record = FilesystemRecord(
            device=m.group(1),
            capacity_bytes=int(details.group(1)) * DF_BLOCK_SIZE,
            used_bytes=int(details.group(2)) * DF_BLOCK_SIZE,
            mount=details.group(5),
        )
        old = filesystems.get(record.device)
        if old is not None and len(old.mount) < len(record.mount):
            continue
        filesystems[record.device] = record

    return list(filesystems.values())


class FilesystemService:
    """Discovers mounted block-device filesystems and their usage."""

    def __init__(
        self,
        runner: CommandRunner | None = None,
        command: Sequence[str] | None = None,
        timeout: float | None = None,
    ):
        self._runner = runner or run_command
        self._command = list(command or settings.df_command)
        self._timeout = timeout if timeout is not None else settings.df_timeout_seconds

    async def discover(self) -> list[FilesystemRecord]:
        """Run the disk report and return one record per device.

        Raises CommandFailure if the command cannot run or exits unsuccessfully.
        """
        cmd = " ".join(self._command)
        try:
            result = await self._runner(self._command, timeout=self._timeout)
        except CommandFailure as e:
            logger.warning("Disk report failed: %s", e)
            raise

        if not result.success:
            logger.warning(
                "Could not run %s: exit status %s %s",
                cmd, result.returncode, result.stderr.strip(),
            )
            raise CommandFailure(
                f"Could not run {cmd}", self._command, returncode=result.returncode,
            )

        if result.stderr.strip():
            logger.warning("%s reported: %s", cmd, result.stderr.strip())

        filesystems = parse_df_output(result.output)
        logger.debug("Discovered %d filesystems", len(filesystems))
        return filesystems


async def discover_filesystems(runner: CommandRunner | None = None) -> list[FilesystemRecord]:
    """Discover filesystems with a one-off FilesystemService."""
    return await FilesystemService(runner=runner).discover()
