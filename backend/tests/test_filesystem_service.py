"""Tests for FilesystemService — df parsing, dedup, failure handling."""

import logging

import pytest

from diskmon.services.filesystem_service import (
    FilesystemRecord,
    FilesystemService,
    discover_filesystems,
    parse_df_output,
)
from diskmon.utils.command import CommandFailure, CommandResult


def _by_device(records):
    return {r.device: r for r in records}


class TestParseDfOutput:
    def test_skips_header_and_pseudo_filesystems(self):
        records = parse_df_output(
            "Filesystem 1024-blocks Used Available Capacity Mounted on\n"
            "tmpfs 1631408 2176 1629232 1% /run\n"
            "udev 8124436 0 8124436 0% /dev\n"
        )
        assert records == []

    def test_parses_device_line(self):
        records = parse_df_output("/dev/nvme0n1p2   490617784 187355396 278266608      41% /\n")
        assert records == [
            FilesystemRecord(
                device="nvme0n1p2",
                capacity_bytes=490617784 * 1024,
                used_bytes=187355396 * 1024,
                mount="/",
            )
        ]

    def test_mount_path_with_spaces(self):
        records = parse_df_output("/dev/sdb1 20511312 8123456 11322840 42% /media/user/My Passport\n")
        assert records[0].mount == "/media/user/My Passport"

    def test_shortest_mount_wins(self):
        records = parse_df_output(
            "/dev/sda1 1000000 250000 750000 25% /mnt/data\n"
            "/dev/sda1 1000000 250000 750000 25% /data\n"
        )
        assert len(records) == 1
        assert records[0].mount == "/data"

    def test_shortest_mount_wins_regardless_of_order(self):
        records = parse_df_output(
            "/dev/sda1 1000000 250000 750000 25% /data\n"
            "/dev/sda1 1000000 250000 750000 25% /mnt/data\n"
        )
        assert [r.mount for r in records] == ["/data"]

    def test_equal_length_mount_keeps_later_line(self):
        records = parse_df_output(
            "/dev/sda1 100 50 50 50% /aaa\n"
            "/dev/sda1 100 50 50 50% /bbb\n"
        )
        assert [r.mount for r in records] == ["/bbb"]

    def test_device_line_without_usage_is_skipped(self):
        records = parse_df_output(
            "/dev/mapper/very-long-volume-name\n"
            "/dev/sdc1 abc def ghi 10% /broken\n"
        )
        assert records == []

    def test_leading_whitespace_accepted(self):
        records = parse_df_output("   /dev/sdd1 10 5 5 50% /srv\n")
        assert _by_device(records)["sdd1"].mount == "/srv"

    def test_empty_output(self):
        assert parse_df_output("") == []


class TestUsagePercent:
    def test_quarter(self):
        assert FilesystemRecord("sda1", 1000, 250, "/").usage_percent == 25

    def test_rounds_half_up(self):
        assert FilesystemRecord("sda1", 200, 1, "/").usage_percent == 1
        assert FilesystemRecord("sda1", 1000, 125, "/").usage_percent == 13

    def test_zero_capacity_is_undefined(self):
        with pytest.raises(ZeroDivisionError):
            FilesystemRecord("loop0", 0, 0, "/snap").usage_percent


class TestDiscover:
    @pytest.mark.asyncio
    async def test_discover_parses_runner_output(self, fake_runner):
        service = FilesystemService(runner=fake_runner, command=["df", "-P"], timeout=3)
        records = _by_device(await service.discover())

        assert set(records) == {"nvme0n1p2", "sda1", "sdb1"}
        assert records["sda1"].mount == "/data"
        assert records["sda1"].capacity_bytes == 1000000 * 1024
        assert records["sda1"].usage_percent == 25
        assert fake_runner.calls == [(["df", "-P"], 3)]

    @pytest.mark.asyncio
    async def test_discover_fresh_each_call(self, fake_runner):
        service = FilesystemService(runner=fake_runner)
        first = await service.discover()
        second = await service.discover()
        assert first is not second
        assert len(fake_runner.calls) == 2

    @pytest.mark.asyncio
    async def test_unsuccessful_command_raises(self, make_runner):
        runner = make_runner(CommandResult(output="/dev/sda1 1 1 0 100% /\n", success=False, returncode=1))
        service = FilesystemService(runner=runner)

        with pytest.raises(CommandFailure) as exc_info:
            await service.discover()
        assert exc_info.value.returncode == 1
        assert "df -P" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_runner_failure_propagates(self, make_runner):
        runner = make_runner(exc=CommandFailure("Could not run df -P: not found", ["df", "-P"]))
        service = FilesystemService(runner=runner)

        with pytest.raises(CommandFailure, match="not found"):
            await service.discover()

    @pytest.mark.asyncio
    async def test_stderr_on_success_is_logged(self, make_runner, caplog):
        runner = make_runner(CommandResult(
            output="/dev/sda1 100 50 50 50% /\n",
            success=True,
            returncode=0,
            stderr="df: /run/user/1000/doc: Operation not permitted\n",
        ))
        service = FilesystemService(runner=runner, command=["df", "-P"])

        with caplog.at_level(logging.WARNING, logger="diskmon.services.filesystem_service"):
            records = await service.discover()

        assert [r.device for r in records] == ["sda1"]
        assert "Operation not permitted" in caplog.text

    @pytest.mark.asyncio
    async def test_discover_filesystems_uses_given_runner(self, fake_runner):
        records = await discover_filesystems(runner=fake_runner)
        assert len(records) == 3
        assert len(fake_runner.calls) == 1
