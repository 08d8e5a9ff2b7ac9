"""
Trunk link discovery.

Devices report the MAC of their upstream device and the port index on that
device. The downstream side of the link is located heuristically since
devices do not report their own uplink port consistently.
"""

from loguru import logger
from unifi_diagnostics.analysis.vlan_signature import VlanSignatureResolver
from unifi_diagnostics.models.device import Device
from unifi_diagnostics.models.findings import TrunkLink
from unifi_diagnostics.models.port import SwitchPort


def find_uplink_port(device: Device) -> SwitchPort | None:
    """Locate the port a device uses to reach its upstream device.

    Order: the port flagged as uplink, then the first port whose name
    contains "uplink", then the highest-index port.
    """
    if not device.port_table:
        return None

    for port in device.port_table:
        if port.is_uplink:
            return port

    for port in device.port_table:
        if port.name and 'uplink' in port.name.lower():
            return port

    return max(device.port_table, key=lambda p: p.port_idx)


def discover_trunk_links(
    devices: list[Device], resolver: VlanSignatureResolver
) -> list[TrunkLink]:
    """Find linked trunk port pairs.

    Side A of each link is the upstream device. A link is reported once even
    if both devices declare an uplink toward each other, and only when both
    ends are trunk candidates.
    """
    by_mac: dict[str, Device] = {}
    for device in devices:
        by_mac.setdefault(device.mac.lower(), device)

    links: list[TrunkLink] = []
    seen: set[frozenset] = set()

    for device in devices:
        uplink = device.uplink
        if uplink is None or not uplink.uplink_mac:
            continue

        upstream = by_mac.get(uplink.uplink_mac.lower())
        if upstream is None or upstream.mac.lower() == device.mac.lower():
            logger.debug(f'{device.display_name}: uplink target {uplink.uplink_mac} not in snapshot')
            continue

        local_port = find_uplink_port(device)
        upstream_port = upstream.port(uplink.uplink_remote_port)
        if local_port is None or upstream_port is None:
            logger.debug(
                f'{device.display_name}: cannot resolve link ports toward {upstream.display_name}'
            )
            continue

        key = frozenset(
            {
                (upstream.mac.lower(), upstream_port.port_idx),
                (device.mac.lower(), local_port.port_idx),
            }
        )
        if key in seen:
            continue
        seen.add(key)

        vlans_a = resolver.resolve(upstream_port)
        vlans_b = resolver.resolve(local_port)
        if vlans_a is None or vlans_b is None:
            continue

        links.append(
            TrunkLink(
                device_a_mac=upstream.mac,
                device_a_name=upstream.display_name,
                port_a=upstream_port.port_idx,
                port_a_name=upstream_port.name,
                device_b_mac=device.mac,
                device_b_name=device.display_name,
                port_b=local_port.port_idx,
                port_b_name=local_port.name,
                vlans_a=vlans_a,
                vlans_b=vlans_b,
            )
        )

    logger.debug(f'Discovered {len(links)} trunk links across {len(devices)} devices')
    return links
