"""
Trunk VLAN consistency analysis.

Both ends of a trunk link should carry the same tagged VLANs. A network
present on one end only is reported, graded by how many other trunk links
carry it: a VLAN that most trunks carry is probably missing by mistake,
one that only a few trunks carry is probably local on purpose.

Confidence depends on how many links were discovered, so a partial snapshot
(devices missing mid-poll) can grade the same physical mismatch differently
from a complete one.
"""

from loguru import logger
from unifi_diagnostics.analysis.trunk_links import discover_trunk_links
from unifi_diagnostics.analysis.vlan_signature import VlanSignatureResolver
from unifi_diagnostics.models.device import Device
from unifi_diagnostics.models.findings import Confidence, MismatchIssue, TrunkLink, VlanMismatch
from unifi_diagnostics.models.network import NetworkConfig
from unifi_diagnostics.models.profile import PortProfile


CONFIDENCE_TEXT = {
    Confidence.HIGH: (
        'This is likely a configuration error since these VLANs are present '
        'on most other trunk links.'
    ),
    Confidence.MEDIUM: 'Review whether these VLANs should be allowed on this trunk.',
    Confidence.LOW: (
        'This may be intentional if these VLANs are only needed in specific network segments.'
    ),
}


def grade_presence(count: int, total: int) -> Confidence:
    """Grade a VLAN carried on `count` of `total` trunk links."""
    if total <= 0:
        return Confidence.LOW
    if count * 2 > total:
        return Confidence.HIGH
    if count * 2 == total:
        return Confidence.MEDIUM
    return Confidence.LOW


def count_vlan_presence(links: list[TrunkLink]) -> dict[str, int]:
    """Count, per network ID, the links carrying it on at least one side."""
    counts: dict[str, int] = {}
    for link in links:
        for network_id in link.vlans_a | link.vlans_b:
            counts[network_id] = counts.get(network_id, 0) + 1
    return counts


def _recommendation(link: TrunkLink, mismatches: list[VlanMismatch], confidence: Confidence) -> str:
    vlan_list = ', '.join(f'{m.network_name} (VLAN {m.vlan})' for m in mismatches)

    fixes = []
    missing_on_a = [m.network_name for m in mismatches if m.missing_side == 'A']
    missing_on_b = [m.network_name for m in mismatches if m.missing_side == 'B']
    if missing_on_a:
        fixes.append(f'Add VLANs ({", ".join(missing_on_a)}) to {link.device_a_name} port {link.port_a}')
    if missing_on_b:
        fixes.append(f'Add VLANs ({", ".join(missing_on_b)}) to {link.device_b_name} port {link.port_b}')

    return (
        f'VLAN mismatch on trunk link between {link.device_a_name} and {link.device_b_name}. '
        f'Mismatched VLANs: {vlan_list}. '
        f'{" OR ".join(fixes)}. '
        f'{CONFIDENCE_TEXT[confidence]}'
    )


def detect_mismatches(
    links: list[TrunkLink], resolver: VlanSignatureResolver
) -> list[MismatchIssue]:
    """Compare both ends of every link and report asymmetric VLANs."""
    counts = count_vlan_presence(links)
    total = len(links)
    issues = []

    for link in links:
        mismatches = []
        for network_id in (link.vlans_a ^ link.vlans_b) & resolver.universe_ids:
            network = resolver.network(network_id)
            missing_side = 'B' if network_id in link.vlans_a else 'A'
            count = counts.get(network_id, 0)
            mismatches.append(
                VlanMismatch(
                    network_id=network_id,
                    network_name=network.name,
                    vlan=network.vlan,
                    purpose=network.purpose,
                    missing_side=missing_side,
                    missing_device_name=(
                        link.device_a_name if missing_side == 'A' else link.device_b_name
                    ),
                    missing_port_idx=link.port_a if missing_side == 'A' else link.port_b,
                    presence=count / total,
                    confidence=grade_presence(count, total),
                )
            )

        if not mismatches:
            continue

        mismatches.sort(key=lambda m: (m.vlan, m.network_id))
        confidence = max((m.confidence for m in mismatches), key=lambda c: c.rank)
        issues.append(
            MismatchIssue(
                link=link,
                mismatches=mismatches,
                confidence=confidence,
                recommendation=_recommendation(link, mismatches, confidence),
            )
        )
        logger.debug(
            f'Trunk mismatch: {link.device_a_name}:{link.port_a} <-> '
            f'{link.device_b_name}:{link.port_b} - {len(mismatches)} VLANs ({confidence.value})'
        )

    return issues


class TrunkConsistencyAnalyzer:
    """Finds trunk links and the VLAN mismatches between their ends."""

    def run(
        self,
        devices: list[Device],
        profiles: list[PortProfile],
        networks: list[NetworkConfig],
    ) -> tuple[list[TrunkLink], list[MismatchIssue]]:
        """Discover links and detect mismatches.

        Returns:
            The discovered links and the issues found on them
        """
        resolver = VlanSignatureResolver(profiles, networks)
        links = discover_trunk_links(devices, resolver)
        issues = detect_mismatches(links, resolver)
        logger.debug(f'Trunk consistency: {len(issues)} issues on {len(links)} links')
        return links, issues

    def analyze(
        self,
        devices: list[Device],
        profiles: list[PortProfile],
        networks: list[NetworkConfig],
    ) -> list[MismatchIssue]:
        return self.run(devices, profiles, networks)[1]
