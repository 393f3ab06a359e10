import asyncio
from unittest.mock import AsyncMock, patch

import pytest

from nas_monitor.services.network_mount import ReachabilityChecker
from nas_monitor.utils.process_utils import CommandResult

MODULE = "nas_monitor.services.network_mount.reachability"


@pytest.mark.asyncio
class TestPing:
    async def test_ping_success(self):
        run = AsyncMock(return_value=CommandResult(returncode=0, stdout="", stderr=""))
        with patch(f"{MODULE}.command_available", return_value=True), patch(
            f"{MODULE}.run_command", run
        ), patch(f"{MODULE}.platform.system", return_value="Linux"):
            assert await ReachabilityChecker(timeout_seconds=3).is_reachable("nas.local") is True

        run.assert_awaited_once_with(["ping", "-c", "1", "-W", "3", "nas.local"], 5)

    async def test_macos_timeout_flag(self):
        run = AsyncMock(return_value=CommandResult(returncode=0, stdout="", stderr=""))
        with patch(f"{MODULE}.command_available", return_value=True), patch(
            f"{MODULE}.run_command", run
        ), patch(f"{MODULE}.platform.system", return_value="Darwin"):
            await ReachabilityChecker(timeout_seconds=3).is_reachable("nas.local")

        assert run.await_args.args[0] == ["ping", "-c", "1", "-t", "3", "nas.local"]

    @pytest.mark.parametrize(
        "outcome", [None, CommandResult(returncode=1, stdout="", stderr="")]
    )
    async def test_ping_failure_or_timeout(self, outcome):
        with patch(f"{MODULE}.command_available", return_value=True), patch(
            f"{MODULE}.run_command", AsyncMock(return_value=outcome)
        ):
            assert await ReachabilityChecker().is_reachable("nas.local") is False


@pytest.mark.asyncio
class TestTcpFallback:
    async def test_tcp_probe_used_without_ping(self):
        checker = ReachabilityChecker()
        with patch(f"{MODULE}.command_available", return_value=False), patch.object(
            checker, "_tcp_probe", AsyncMock(return_value=True)
        ) as probe:
            assert await checker.is_reachable("nas.local") is True

        probe.assert_awaited_once_with("nas.local")

    async def test_tcp_probe_connection_refused(self):
        with patch(
            f"{MODULE}.asyncio.open_connection",
            AsyncMock(side_effect=ConnectionRefusedError()),
        ):
            assert await ReachabilityChecker()._tcp_probe("nas.local") is False

    async def test_tcp_probe_timeout(self):
        with patch(
            f"{MODULE}.asyncio.open_connection",
            AsyncMock(side_effect=asyncio.TimeoutError()),
        ):
            assert await ReachabilityChecker()._tcp_probe("nas.local") is False

    async def test_tcp_probe_success_against_local_server(self):
        server = await asyncio.start_server(lambda r, w: w.close(), "127.0.0.1", 0)
        port = server.sockets[0].getsockname()[1]
        try:
            with patch(f"{MODULE}.SMB_PORT", port):
                assert await ReachabilityChecker()._tcp_probe("127.0.0.1") is True
        finally:
            server.close()
            await server.wait_closed()
