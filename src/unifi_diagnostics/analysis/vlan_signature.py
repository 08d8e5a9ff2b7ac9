"""
Effective VLAN signature resolution for switch ports.

A port's settings can come from its own fields or from an assigned port
profile. resolve_effective() merges the two once, and everything downstream
works from the merged EffectivePortConfig.

Trunk scope uses the controller's exclusion model: a trunk carries every
VLAN network except the ones listed in excluded_networkconf_ids, and a
missing or empty list means "allow all".
"""

from collections.abc import Iterable
from dataclasses import dataclass
from unifi_diagnostics.models.network import NetworkConfig
from unifi_diagnostics.models.port import PoEState, SwitchPort
from unifi_diagnostics.models.profile import PortProfile, SpeedConstraint


@dataclass(frozen=True)
class EffectivePortConfig:
    """Port settings after applying profile precedence."""

    forward: str | None
    tagged_vlan_mgmt: str | None
    native_networkconf_id: str | None
    excluded_networkconf_ids: tuple[str, ...] | None
    poe: PoEState
    speed_constraint: SpeedConstraint
    port_security_enabled: bool
    profile_id: str | None = None

    @property
    def is_trunk_candidate(self) -> bool:
        return self.forward == 'customize' and self.tagged_vlan_mgmt == 'custom'

    @property
    def allows_all_vlans(self) -> bool:
        return not self.excluded_networkconf_ids


def _defined(value) -> bool:
    return value is not None and value != ''


def _resolve_poe(port: SwitchPort, profile: PortProfile | None) -> PoEState:
    if not port.port_poe:
        return PoEState.UNSUPPORTED

    if profile is not None and _defined(profile.poe_mode):
        return PoEState.DISABLED if profile.forces_poe_off else PoEState.ENABLED

    if port.poe_enable is not None:
        return PoEState.ENABLED if port.poe_enable else PoEState.DISABLED

    if port.poe_mode is None or port.poe_mode.lower() == 'off':
        return PoEState.DISABLED
    return PoEState.ENABLED


def _resolve_speed(port: SwitchPort, profile: PortProfile | None) -> SpeedConstraint:
    if profile is not None and (profile.autoneg is not None or profile.speed):
        return profile.speed_constraint
    if port.autoneg:
        return SpeedConstraint(autoneg=True)
    return SpeedConstraint(autoneg=False, speed=port.speed or None)


def resolve_effective(port: SwitchPort, profile: PortProfile | None = None) -> EffectivePortConfig:
    """Merge a port with its profile.

    The profile wins for every field it defines. A profile's empty excluded
    list is a definition (allow all); an unset list defers to the port.
    """

    def pick(field_name: str):
        if profile is not None:
            value = getattr(profile, field_name)
            if _defined(value):
                return value
        return getattr(port, field_name)

    excluded = port.excluded_networkconf_ids
    if profile is not None and profile.excluded_networkconf_ids is not None:
        excluded = profile.excluded_networkconf_ids

    security = port.port_security_enabled
    if profile is not None and profile.port_security_enabled is not None:
        security = profile.port_security_enabled

    return EffectivePortConfig(
        forward=pick('forward'),
        tagged_vlan_mgmt=pick('tagged_vlan_mgmt'),
        native_networkconf_id=pick('native_networkconf_id'),
        excluded_networkconf_ids=tuple(excluded) if excluded is not None else None,
        poe=_resolve_poe(port, profile),
        speed_constraint=_resolve_speed(port, profile),
        port_security_enabled=security,
        profile_id=profile.id if profile is not None else None,
    )


def candidate_universe(networks: Iterable[NetworkConfig]) -> tuple[NetworkConfig, ...]:
    """VLAN-bearing networks that can ride a switch trunk, in input order."""
    return tuple(n for n in networks if n.is_vlan_network)


class VlanSignatureResolver:
    """Resolves effective configs and VLAN signatures against one snapshot."""

    def __init__(self, profiles: Iterable[PortProfile], networks: Iterable[NetworkConfig]):
        networks = list(networks)
        self.universe = candidate_universe(networks)
        self.universe_ids = frozenset(n.id for n in self.universe)
        self._networks = {}
        for network in networks:
            self._networks.setdefault(network.id, network)
        self._profiles = {}
        for profile in profiles:
            self._profiles.setdefault(profile.id, profile)

    def profile(self, profile_id: str | None) -> PortProfile | None:
        if not profile_id:
            return None
        return self._profiles.get(profile_id)

    def profile_for(self, port: SwitchPort) -> PortProfile | None:
        """Get the port's assigned profile. Unknown profile IDs count as none."""
        return self.profile(port.portconf_id)

    def network(self, network_id: str | None) -> NetworkConfig | None:
        if not network_id:
            return None
        return self._networks.get(network_id)

    def effective(self, port: SwitchPort) -> EffectivePortConfig:
        return resolve_effective(port, self.profile_for(port))

    def signature_from_excluded(self, excluded: Iterable[str] | None) -> frozenset[str]:
        """Candidate universe minus the excluded IDs. Unknown IDs are ignored."""
        if not excluded:
            return self.universe_ids
        return self.universe_ids - frozenset(excluded)

    def resolve(self, port: SwitchPort) -> frozenset[str] | None:
        """Get the port's VLAN signature, or None if it is not a trunk candidate."""
        config = self.effective(port)
        if not config.is_trunk_candidate:
            return None
        return self.signature_from_excluded(config.excluded_networkconf_ids)

    def profile_signature(self, profile: PortProfile) -> frozenset[str] | None:
        """Signature a trunk profile imposes on its ports, or None for non-trunk profiles."""
        if not profile.is_trunk_profile:
            return None
        return self.signature_from_excluded(profile.excluded_networkconf_ids)

    def ordered(self, network_ids: Iterable[str]) -> list[NetworkConfig]:
        """Known networks for the IDs, ordered by VLAN tag then ID."""
        found = [self._networks[i] for i in set(network_ids) if i in self._networks]
        return sorted(found, key=lambda n: (n.vlan or 0, n.id))

    def vlan_names(self, network_ids: Iterable[str]) -> list[str]:
        return [n.name for n in self.ordered(network_ids)]


def resolve_signature(
    port: SwitchPort,
    profiles: Iterable[PortProfile],
    networks: Iterable[NetworkConfig],
) -> frozenset[str] | None:
    """Resolve one port's VLAN signature without keeping a resolver around."""
    return VlanSignatureResolver(profiles, networks).resolve(port)
