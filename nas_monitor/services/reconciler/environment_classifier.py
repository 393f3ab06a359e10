"""Environment classification: home/away and AC/battery for one cycle."""

from typing import AbstractSet

from ..environment.probe import EnvironmentProbe
from ...models import EnvironmentSnapshot


def is_home_network(current_network: str, home_networks: AbstractSet[str]) -> bool:
    """Exact, case-sensitive membership; '' in home_networks admits wired."""
    return current_network in home_networks


async def classify_environment(
    probe: EnvironmentProbe, home_networks: AbstractSet[str]
) -> EnvironmentSnapshot:
    current_network = await probe.current_network()
    on_ac_power = await probe.on_ac_power()
    battery_level = await probe.battery_level()

    return EnvironmentSnapshot(
        current_network=current_network,
        is_home_network=is_home_network(current_network, home_networks),
        on_ac_power=on_ac_power,
        battery_level=battery_level,
    )
