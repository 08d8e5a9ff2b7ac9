"""
Per-port configuration rules.

Each rule is a plain function taking a PortRuleInput and the candidate VLAN
networks and returning a PortFinding or None. Rules run in order and every
match is reported. Add a rule by appending it to DEFAULT_PORT_RULES.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from unifi_diagnostics.analysis.vlan_signature import EffectivePortConfig, VlanSignatureResolver
from unifi_diagnostics.config import DiagnosticsThresholds
from unifi_diagnostics.models.device import Device
from unifi_diagnostics.models.findings import DiagnosticSeverity, PortFinding, PortReference
from unifi_diagnostics.models.network import NetworkConfig
from unifi_diagnostics.models.port import SwitchPort
from unifi_diagnostics.models.profile import PortProfile


@dataclass(frozen=True)
class PortRuleInput:
    """One port with its resolved configuration."""

    device: Device
    port: SwitchPort
    config: EffectivePortConfig
    signature: frozenset[str] | None
    trunk_vlan_threshold: int

    def reference(self) -> PortReference:
        return PortReference(
            device_mac=self.device.mac,
            device_name=self.device.display_name,
            port_idx=self.port.port_idx,
            port_name=self.port.name,
            current_profile_id=self.config.profile_id,
        )


PortRule = Callable[[PortRuleInput, Sequence[NetworkConfig]], PortFinding | None]


def uplink_blocks_tagged(item: PortRuleInput, networks: Sequence[NetworkConfig]) -> PortFinding | None:
    """Uplink configured as an access port while VLAN networks exist."""
    if not item.port.is_uplink or not networks:
        return None
    if item.config.forward != 'native' and item.config.tagged_vlan_mgmt != 'block_all':
        return None
    return PortFinding(
        rule_id='uplink-blocks-tagged',
        severity=DiagnosticSeverity.WARNING,
        port=item.reference(),
        message='Uplink port blocks tagged VLANs',
        recommendation='Allow tagged VLANs on the uplink so downstream devices reach every network',
    )


def uplink_partial_trunk(item: PortRuleInput, networks: Sequence[NetworkConfig]) -> PortFinding | None:
    """Uplink trunk that leaves some VLAN networks out."""
    if not item.port.is_uplink or item.signature is None or not networks:
        return None
    missing = [n for n in networks if n.id not in item.signature]
    if not missing:
        return None
    names = ', '.join(n.name for n in missing)
    return PortFinding(
        rule_id='uplink-partial-trunk',
        severity=DiagnosticSeverity.INFO,
        port=item.reference(),
        message=f'Uplink trunk excludes {len(missing)} of {len(networks)} VLANs ({names})',
        recommendation='Confirm downstream devices do not need the excluded VLANs',
    )


def access_port_vlan_exposure(
    item: PortRuleInput, networks: Sequence[NetworkConfig]
) -> PortFinding | None:
    """Single-device port that carries more tagged VLANs than a device needs."""
    if item.port.is_uplink or item.signature is None or not networks:
        return None
    # one allowed MAC is the evidence a single end device sits here
    if len(item.port.port_security_mac_address) != 1:
        return None

    tagged = item.signature - {item.config.native_networkconf_id}
    allows_all = item.config.allows_all_vlans
    if not allows_all and len(tagged) <= item.trunk_vlan_threshold:
        return None

    vlan_desc = 'all VLANs tagged' if allows_all else f'{len(tagged)} VLANs tagged'
    return PortFinding(
        rule_id='access-port-vlan-exposure',
        severity=DiagnosticSeverity.WARNING,
        port=item.reference(),
        message=f'Access port for single device has {vlan_desc}',
        recommendation='Limit tagged VLANs to only those required by this device',
    )


DEFAULT_PORT_RULES: tuple[PortRule, ...] = (
    uplink_blocks_tagged,
    uplink_partial_trunk,
    access_port_vlan_exposure,
)


def evaluate_port_rules(
    devices: list[Device],
    profiles: list[PortProfile],
    networks: list[NetworkConfig],
    thresholds: DiagnosticsThresholds | None = None,
    rules: Sequence[PortRule] = DEFAULT_PORT_RULES,
) -> list[PortFinding]:
    """Run every rule against every port and collect all matches."""
    thresholds = thresholds or DiagnosticsThresholds()
    resolver = VlanSignatureResolver(profiles, networks)
    findings = []

    for device in devices:
        for port in device.port_table:
            config = resolver.effective(port)
            item = PortRuleInput(
                device=device,
                port=port,
                config=config,
                signature=resolver.resolve(port),
                trunk_vlan_threshold=thresholds.trunk_vlan_threshold,
            )
            for rule in rules:
                finding = rule(item, resolver.universe)
                if finding is not None:
                    findings.append(finding)

    return findings


class PortRuleAnalyzer:
    """Evaluates an ordered rule list against every port."""

    def __init__(
        self,
        thresholds: DiagnosticsThresholds | None = None,
        rules: Sequence[PortRule] = DEFAULT_PORT_RULES,
    ):
        self.thresholds = thresholds or DiagnosticsThresholds()
        self.rules = tuple(rules)

    def analyze(
        self,
        devices: list[Device],
        profiles: list[PortProfile],
        networks: list[NetworkConfig],
    ) -> list[PortFinding]:
        return evaluate_port_rules(devices, profiles, networks, self.thresholds, self.rules)
