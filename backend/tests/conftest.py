"""Test fixtures — fake command runner and FastAPI test client."""

from __future__ import annotations

from collections.abc import Sequence

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from diskmon.main import create_app
from diskmon.utils.command import CommandResult

DF_OUTPUT = """\
Filesystem     1024-blocks      Used Available Capacity Mounted on
udev               8124436         0   8124436       0% /dev
tmpfs              1631408      2176   1629232       1% /run
/dev/nvme0n1p2   490617784 187355396 278266608      41% /
/dev/sda1          1000000    250000    750000      25% /mnt/data
/dev/sda1          1000000    250000    750000      25% /data
/dev/sdb1         20511312   8123456  11322840      42% /media/user/My Passport
"""


class FakeRunner:
    """Records calls and returns a canned CommandResult (or raises)."""

    def __init__(self, result: CommandResult | None = None, exc: Exception | None = None):
        self.result = result or CommandResult(output=DF_OUTPUT, success=True, returncode=0)
        self.exc = exc
        self.calls: list[tuple[list[str], float | None]] = []

    async def __call__(self, args: Sequence[str], timeout: float | None = None) -> CommandResult:
        self.calls.append((list(args), timeout))
        if self.exc is not None:
            raise self.exc
        return self.result


@pytest.fixture
def fake_runner():
    return FakeRunner()


@pytest_asyncio.fixture
async def client():
    """Provide an async test client (lifespan not run; services patched per test)."""
    app = create_app()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def make_runner():
    """Factory for FakeRunner instances with custom results."""
    return FakeRunner
