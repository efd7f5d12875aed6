"""Async subprocess execution with captured stdout."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    output: str
    success: bool
    returncode: int | None = None
    stderr: str = ""


class CommandFailure(RuntimeError):
    """External command could not be started, timed out, or exited unsuccessfully."""

    def __init__(self, message: str, args: Sequence[str] = (), returncode: int | None = None):
        super().__init__(message)
        self.message = message
        self.command = list(args)
        self.returncode = returncode


class CommandRunner(Protocol):
    async def __call__(self, args: Sequence[str], timeout: float | None = None) -> CommandResult: ...


async def run_command(args: Sequence[str], timeout: float | None = None) -> CommandResult:
    """Run ``args`` and capture its output.

    Returns a CommandResult whose ``success`` reflects the exit status.
    Raises CommandFailure if the process cannot be started or exceeds
    ``timeout`` seconds; the child is killed on timeout and on cancellation.
    """
    cmd = " ".join(args)
    try:
        proc = await asyncio.create_subprocess_exec(
            *args,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        raise CommandFailure(f"Could not run {cmd}: {e}", args) from e

    try:
        stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=timeout)
    except asyncio.TimeoutError as e:
        _kill(proc)
        await proc.wait()
        raise CommandFailure(f"Could not run {cmd}: timed out after {timeout}s", args) from e
    except asyncio.CancelledError:
        _kill(proc)
        await proc.wait()
        raise

    return CommandResult(
        output=stdout.decode("utf-8", errors="replace"),
        success=proc.returncode == 0,
        returncode=proc.returncode,
        stderr=stderr.decode("utf-8", errors="replace"),
    )


def _kill(proc: asyncio.subprocess.Process) -> None:
    try:
        proc.kill()
    except ProcessLookupError:
        logger.debug("Process %s already exited", proc.pid)
