"""macOS Network Mounter."""

import logging
import re
from urllib.parse import quote

from .base_mounter import BaseMounter
from ...models import MountResult, MountTarget
from ...utils.process_utils import run_command


def mount_table_contains(mount_output: str, target: MountTarget) -> bool:
    """Check `mount` output for //[user@]HOST/SHARE (share may be percent-encoded)."""
    shares = {re.escape(target.share), re.escape(quote(target.share))}
    pattern = re.compile(
        r"//(?:[^@\s]+@)?"
        + re.escape(target.host)
        + "/(?:"
        + "|".join(sorted(shares))
        + r")\s",
        re.IGNORECASE,
    )
    return any(pattern.search(line) for line in mount_output.splitlines())


class MacOSMounter(BaseMounter):
    """macOS-specific network mount implementation."""

    async def is_mounted(self, target: MountTarget) -> bool:
        result = await run_command(["mount"], self._query_timeout)
        if result is None or not result.ok:
            return False
        return mount_table_contains(result.stdout, target)

    async def mount(self, target: MountTarget) -> MountResult:
        """Mount network share using macOS osascript."""
        logging.debug(f"Attempting macOS mount: {target.share_url}")

        cmd = ["osascript", "-e", f'mount volume "{target.share_url}"']
        result = await run_command(cmd, self._mount_timeout)

        if result is None:
            return MountResult(
                success=False,
                error_message=f"Mount operation timed out for {target.share_url}",
            )
        if result.ok:
            return MountResult(success=True)

        error_msg = result.stderr.strip() or "Unknown error"
        return MountResult(success=False, error_message=error_msg)

    def get_platform_name(self) -> str:
        return "macOS"
