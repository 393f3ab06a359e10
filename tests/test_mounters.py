"""
Tests for the platform mount backends.

Uses mocks to simulate gio, mount and osascript output.
"""

from unittest.mock import AsyncMock, patch

import pytest

from nas_monitor.core.exceptions import UnsupportedPlatformError
from nas_monitor.models import MountTarget
from nas_monitor.services.network_mount import PlatformFactory
from nas_monitor.services.network_mount.gio_mounter import GioMounter, mount_listing_contains
from nas_monitor.services.network_mount.macos_mounter import MacOSMounter, mount_table_contains
from nas_monitor.utils.process_utils import CommandResult

TARGET = MountTarget(host="nas.local", share="media")

GIO_LISTING = """\
Drive(0): Samsung SSD
  Type: GProxyDrive (GProxyVolumeMonitorUDisks2)
Mount(0): media on nas.local -> smb://nas.local/media/
  Type: GDaemonMount
"""

MACOS_MOUNT_TABLE = """\
/dev/disk3s1s1 on / (apfs, sealed, local, read-only, journaled)
//alice@nas.local/media on /Volumes/media (smbfs, nodev, nosuid, mounted by alice)
"""


def result(returncode=0, stdout="", stderr=""):
    return CommandResult(returncode=returncode, stdout=stdout, stderr=stderr)


class TestGioListing:
    def test_mounted_share_found(self):
        assert mount_listing_contains(GIO_LISTING, TARGET) is True

    def test_match_is_case_insensitive(self):
        assert mount_listing_contains(GIO_LISTING.upper(), TARGET) is True

    def test_other_share_not_found(self):
        assert mount_listing_contains(GIO_LISTING, MountTarget(host="nas.local", share="backup")) is False

    def test_host_is_matched_literally(self):
        target = MountTarget(host="192.168.1.10", share="media")

        assert mount_listing_contains("smb://192x168x1x10/media/", target) is False


class TestMacOSMountTable:
    def test_mounted_share_found_with_user(self):
        assert mount_table_contains(MACOS_MOUNT_TABLE, TARGET) is True

    def test_mounted_share_found_without_user(self):
        assert mount_table_contains("//nas.local/media on /Volumes/media (smbfs)\n", TARGET) is True

    def test_share_prefix_does_not_match(self):
        table = "//nas.local/media-archive on /Volumes/media-archive (smbfs)\n"

        assert mount_table_contains(table, TARGET) is False

    def test_percent_encoded_share_found(self):
        target = MountTarget(host="nas.local", share="my share")
        table = "//alice@nas.local/my%20share on /Volumes/my share (smbfs, nodev)\n"

        assert mount_table_contains(table, target) is True

    def test_share_with_space_found_unencoded(self):
        target = MountTarget(host="nas.local", share="my share")

        assert mount_table_contains("//nas.local/my share on /Volumes/x (smbfs)\n", target) is True


@pytest.mark.asyncio
class TestGioMounter:
    async def test_is_mounted(self):
        with patch(
            "nas_monitor.services.network_mount.gio_mounter.run_command",
            AsyncMock(return_value=result(stdout=GIO_LISTING)),
        ):
            assert await GioMounter().is_mounted(TARGET) is True

    async def test_listing_failure_means_not_mounted(self):
        with patch(
            "nas_monitor.services.network_mount.gio_mounter.run_command",
            AsyncMock(return_value=None),
        ):
            assert await GioMounter().is_mounted(TARGET) is False

    async def test_mount_success(self):
        run = AsyncMock(return_value=result())
        with patch("nas_monitor.services.network_mount.gio_mounter.run_command", run):
            mount_result = await GioMounter(mount_timeout=12).mount(TARGET)

        assert mount_result.success is True
        run.assert_awaited_once_with(["gio", "mount", "smb://nas.local/media"], 12)

    async def test_mount_failure_carries_stderr(self):
        run = AsyncMock(return_value=result(returncode=2, stderr="gio: Failed to mount\n"))
        with patch("nas_monitor.services.network_mount.gio_mounter.run_command", run):
            mount_result = await GioMounter().mount(TARGET)

        assert mount_result.success is False
        assert mount_result.error_message == "gio: Failed to mount"

    async def test_mount_timeout(self):
        with patch(
            "nas_monitor.services.network_mount.gio_mounter.run_command",
            AsyncMock(return_value=None),
        ):
            mount_result = await GioMounter().mount(TARGET)

        assert mount_result.success is False
        assert "did not complete" in mount_result.error_message


@pytest.mark.asyncio
class TestMacOSMounter:
    async def test_is_mounted(self):
        with patch(
            "nas_monitor.services.network_mount.macos_mounter.run_command",
            AsyncMock(return_value=result(stdout=MACOS_MOUNT_TABLE)),
        ):
            assert await MacOSMounter().is_mounted(TARGET) is True

    async def test_mount_uses_osascript(self):
        run = AsyncMock(return_value=result())
        with patch("nas_monitor.services.network_mount.macos_mounter.run_command", run):
            mount_result = await MacOSMounter(mount_timeout=20).mount(TARGET)

        assert mount_result.success is True
        run.assert_awaited_once_with(
            ["osascript", "-e", 'mount volume "smb://nas.local/media"'], 20
        )

    async def test_mount_failure(self):
        with patch(
            "nas_monitor.services.network_mount.macos_mounter.run_command",
            AsyncMock(return_value=result(returncode=1)),
        ):
            mount_result = await MacOSMounter().mount(TARGET)

        assert mount_result.success is False
        assert mount_result.error_message == "Unknown error"


class TestPlatformFactory:
    @pytest.mark.parametrize(
        "system, mounter_type", [("Linux", GioMounter), ("Darwin", MacOSMounter)]
    )
    def test_creates_platform_mounter(self, system, mounter_type):
        with patch("platform.system", return_value=system):
            mounter = PlatformFactory().create_mounter()

        assert isinstance(mounter, mounter_type)

    def test_unsupported_platform(self):
        with patch("platform.system", return_value="Windows"):
            with pytest.raises(UnsupportedPlatformError):
                PlatformFactory().create_mounter()
