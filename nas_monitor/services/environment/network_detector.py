"""Network identity detection via NetworkManager."""

import logging

from ...utils.process_utils import command_available, run_command


def parse_active_ssid(nmcli_output: str) -> str:
    """
    Extract the active SSID from `nmcli -t -f active,ssid dev wifi` output.

    Terse mode escapes ':' inside values as '\\:'.
    """
    for line in nmcli_output.splitlines():
        if not line.startswith("yes:"):
            continue
        return line[len("yes:"):].replace("\\:", ":").replace("\\\\", "\\")
    return ""


class NmcliNetworkDetector:
    """Reads the active wifi network name; '' means wired or unknown."""

    def __init__(self, timeout: float = 5.0):
        self._timeout = timeout

    async def current_network(self) -> str:
        if not command_available("nmcli"):
            # Assume ethernet if nmcli not available
            return ""

        result = await run_command(
            ["nmcli", "-t", "-f", "active,ssid", "dev", "wifi"], self._timeout
        )
        if result is None or not result.ok:
            logging.debug("nmcli query failed, treating network as wired/unknown")
            return ""
        return parse_active_ssid(result.stdout)
