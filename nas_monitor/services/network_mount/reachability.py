"""Host reachability check performed before paying for a mount attempt."""

import asyncio
import logging
import platform

from ...utils.process_utils import command_available, run_command

SMB_PORT = 445


class ReachabilityChecker:
    """Single ICMP ping, or a TCP connect to the SMB port when ping is missing."""

    def __init__(self, timeout_seconds: int = 3):
        self._timeout = timeout_seconds

    def _ping_command(self, host: str) -> list[str]:
        # macOS ping takes the overall timeout via -t, Linux via -W
        timeout_flag = "-t" if platform.system() == "Darwin" else "-W"
        return ["ping", "-c", "1", timeout_flag, str(self._timeout), host]

    async def is_reachable(self, host: str) -> bool:
        if command_available("ping"):
            # Grace period on top of ping's own timeout for process startup
            result = await run_command(self._ping_command(host), self._timeout + 2)
            return result is not None and result.ok
        return await self._tcp_probe(host)

    async def _tcp_probe(self, host: str) -> bool:
        try:
            _, writer = await asyncio.wait_for(
                asyncio.open_connection(host, SMB_PORT), timeout=self._timeout
            )
        except (OSError, asyncio.TimeoutError) as e:
            logging.debug(f"TCP probe to {host}:{SMB_PORT} failed: {e}")
            return False

        writer.close()
        try:
            await writer.wait_closed()
        except OSError:
            pass
        return True
