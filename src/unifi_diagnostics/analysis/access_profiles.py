"""
Profile suggestions for disabled ports and unrestricted access ports.

These sit outside VLAN signature clustering: disabled ports only differ by
PoE capability, and access ports are grouped by their native network.
"""

from loguru import logger
from unifi_diagnostics.analysis.vlan_signature import VlanSignatureResolver
from unifi_diagnostics.config import DiagnosticsThresholds
from unifi_diagnostics.models.device import Device
from unifi_diagnostics.models.findings import (
    ConsolidationSuggestion,
    PortReference,
    SuggestionSeverity,
    SuggestionType,
)
from unifi_diagnostics.models.port import SwitchPort
from unifi_diagnostics.models.profile import PortProfile

DISABLED_NOTE = 'Note: Currently more clicks in UniFi Network, but we expect this to improve.'


def _reference(device: Device, port: SwitchPort) -> PortReference:
    return PortReference(
        device_mac=device.mac,
        device_name=device.display_name,
        port_idx=port.port_idx,
        port_name=port.name,
    )


def _unprofiled_ports(devices: list[Device], resolver: VlanSignatureResolver):
    """Non-uplink ports with no (known) profile assigned."""
    for device in devices:
        for port in device.port_table:
            if port.is_uplink or resolver.profile_for(port) is not None:
                continue
            yield device, port


def is_unrestricted_access_profile(profile: PortProfile) -> bool:
    """Access mode, no MAC restriction, tagged VLANs blocked."""
    return (
        profile.forward == 'native'
        and not profile.port_security_enabled
        and profile.tagged_vlan_mgmt == 'block_all'
    )


def is_access_port(port: SwitchPort) -> bool:
    if port.forward == 'disabled':
        return False
    return port.forward == 'native' or (
        port.tagged_vlan_mgmt == 'block_all' and port.forward != 'customize'
    )


class AccessProfileAnalyzer:
    """Suggests shared profiles for disabled and unrestricted access ports."""

    def __init__(self, thresholds: DiagnosticsThresholds | None = None):
        self.thresholds = thresholds or DiagnosticsThresholds()

    def analyze(
        self,
        devices: list[Device],
        profiles: list[PortProfile],
        networks,
        resolver: VlanSignatureResolver | None = None,
    ) -> list[ConsolidationSuggestion]:
        resolver = resolver or VlanSignatureResolver(profiles, networks)
        return self.disabled_port_suggestions(devices, profiles, resolver) + (
            self.access_port_suggestions(devices, profiles, resolver)
        )

    def disabled_port_suggestions(
        self,
        devices: list[Device],
        profiles: list[PortProfile],
        resolver: VlanSignatureResolver,
    ) -> list[ConsolidationSuggestion]:
        """Suggest a shared "Disabled" profile for disabled ports.

        PoE-capable ports want a profile that also turns PoE off. Ports
        without PoE hardware can use any disabled profile.
        """
        minimum = self.thresholds.min_disabled_ports
        disabled = [
            (device, port)
            for device, port in _unprofiled_ports(devices, resolver)
            if port.forward == 'disabled'
        ]
        logger.debug(f'Found {len(disabled)} disabled ports without profiles')
        if len(disabled) < minimum:
            return []

        capable = [_reference(d, p) for d, p in disabled if p.port_poe]
        incapable = [_reference(d, p) for d, p in disabled if not p.port_poe]

        disabled_profiles = [p for p in profiles if p.forward == 'disabled']
        poe_off_profile = next((p for p in disabled_profiles if p.forces_poe_off), None)

        suggestions = []
        if len(capable) >= minimum:
            if poe_off_profile is not None:
                suggestions.append(
                    ConsolidationSuggestion(
                        type=SuggestionType.APPLY_EXISTING,
                        severity=SuggestionSeverity.RECOMMENDATION,
                        category='disabled',
                        affected_ports=capable,
                        ports_without_profile=len(capable),
                        matching_profile_id=poe_off_profile.id,
                        matching_profile_name=poe_off_profile.name,
                        recommendation=(
                            f'{len(capable)} disabled PoE-capable ports could use the existing '
                            f'"{poe_off_profile.name}" profile for consistent configuration. '
                            f'{DISABLED_NOTE}'
                        ),
                    )
                )
            else:
                suggestions.append(
                    ConsolidationSuggestion(
                        type=SuggestionType.CREATE_NEW,
                        severity=SuggestionSeverity.RECOMMENDATION,
                        category='disabled',
                        affected_ports=capable,
                        ports_without_profile=len(capable),
                        suggested_profile_name='Disabled (PoE Off)',
                        recommendation=(
                            f'{len(capable)} disabled PoE-capable ports share the same configuration. '
                            'A "Disabled" port profile with PoE off enables consistent configuration '
                            f'and bulk changes. {DISABLED_NOTE}'
                        ),
                    )
                )

        if len(incapable) >= minimum:
            any_disabled = poe_off_profile or next(iter(disabled_profiles), None)
            if any_disabled is not None:
                suggestions.append(
                    ConsolidationSuggestion(
                        type=SuggestionType.APPLY_EXISTING,
                        severity=SuggestionSeverity.INFO,
                        category='disabled',
                        affected_ports=incapable,
                        ports_without_profile=len(incapable),
                        matching_profile_id=any_disabled.id,
                        matching_profile_name=any_disabled.name,
                        recommendation=(
                            f'{len(incapable)} disabled non-PoE ports could use the existing '
                            f'"{any_disabled.name}" profile for consistent configuration. '
                            f'{DISABLED_NOTE}'
                        ),
                    )
                )
            elif len(capable) < minimum:
                suggestions.append(
                    ConsolidationSuggestion(
                        type=SuggestionType.CREATE_NEW,
                        severity=SuggestionSeverity.INFO,
                        category='disabled',
                        affected_ports=incapable,
                        ports_without_profile=len(incapable),
                        suggested_profile_name='Disabled',
                        recommendation=(
                            f'{len(incapable)} disabled ports share the same configuration. '
                            'A "Disabled" port profile enables consistent configuration and bulk '
                            f'changes. {DISABLED_NOTE}'
                        ),
                    )
                )

        return suggestions

    def access_port_suggestions(
        self,
        devices: list[Device],
        profiles: list[PortProfile],
        resolver: VlanSignatureResolver,
    ) -> list[ConsolidationSuggestion]:
        """Suggest one unrestricted access profile per native network."""
        by_network: dict[str, list[PortReference]] = {}
        for device, port in _unprofiled_ports(devices, resolver):
            if not is_access_port(port) or port.has_mac_restriction:
                continue
            network_id = port.native_networkconf_id or 'default'
            by_network.setdefault(network_id, []).append(_reference(device, port))

        unrestricted = [p for p in profiles if is_unrestricted_access_profile(p)]
        suggestions = []

        for network_id, ports in by_network.items():
            if len(ports) < self.thresholds.min_access_ports:
                continue

            network = resolver.network(network_id)
            network_name = network.name if network is not None else network_id
            existing = next(
                (p for p in unrestricted if p.native_networkconf_id == network_id), None
            )

            if existing is not None:
                suggestions.append(
                    ConsolidationSuggestion(
                        type=SuggestionType.APPLY_EXISTING,
                        severity=SuggestionSeverity.RECOMMENDATION,
                        category='access',
                        affected_ports=ports,
                        ports_without_profile=len(ports),
                        matching_profile_id=existing.id,
                        matching_profile_name=existing.name,
                        recommendation=(
                            f'{len(ports)} unrestricted access ports on the "{network_name}" network '
                            f'could use the existing "{existing.name}" profile for consistent configuration.'
                        ),
                    )
                )
            else:
                suggestions.append(
                    ConsolidationSuggestion(
                        type=SuggestionType.CREATE_NEW,
                        severity=SuggestionSeverity.RECOMMENDATION,
                        category='access',
                        affected_ports=ports,
                        ports_without_profile=len(ports),
                        suggested_profile_name=f'[Access] {network_name} - Unrestricted',
                        recommendation=(
                            f'{len(ports)} access ports on the "{network_name}" network have no MAC '
                            'restriction and no profile assigned. Create an unrestricted access port '
                            'profile to standardize configuration for ports that need to accept any '
                            'device (e.g., conference rooms, guest areas).'
                        ),
                    )
                )
            logger.debug(f'Access profile suggestion for {len(ports)} ports on {network_name}')

        return suggestions
