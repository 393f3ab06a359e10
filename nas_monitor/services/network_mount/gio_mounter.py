"""Linux GIO Network Mounter."""

import logging
import re

from .base_mounter import BaseMounter
from ...models import MountResult, MountTarget
from ...utils.process_utils import run_command


def mount_listing_contains(listing: str, target: MountTarget) -> bool:
    """Check a `gio mount -l` listing for HOST.*SHARE on any line."""
    pattern = re.compile(
        re.escape(target.host) + r".*" + re.escape(target.share), re.IGNORECASE
    )
    return any(pattern.search(line) for line in listing.splitlines())


class GioMounter(BaseMounter):
    """Linux mount implementation using the desktop session's gvfs."""

    async def is_mounted(self, target: MountTarget) -> bool:
        result = await run_command(["gio", "mount", "-l"], self._query_timeout)
        if result is None or not result.ok:
            logging.debug(f"gio mount listing unavailable while checking {target}")
            return False
        return mount_listing_contains(result.stdout, target)

    async def mount(self, target: MountTarget) -> MountResult:
        logging.debug(f"Attempting gio mount: {target.share_url}")
        result = await run_command(["gio", "mount", target.share_url], self._mount_timeout)

        if result is None:
            return MountResult(
                success=False,
                error_message=f"gio mount did not complete for {target.share_url}",
            )
        if result.ok:
            return MountResult(success=True)

        error_msg = result.stderr.strip() or "Unknown error"
        return MountResult(success=False, error_message=error_msg)

    def get_platform_name(self) -> str:
        return "Linux (gio)"
