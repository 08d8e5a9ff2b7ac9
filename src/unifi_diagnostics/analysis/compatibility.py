"""
Transport compatibility between ports and the profile they would share.

Two constraints decide whether ports can sit on one profile besides their
VLANs:

- PoE: enabled ports don't mix with PoE-off ports. Capable-but-disabled and
  incapable ports are the same thing here ("no power").
- Speed: an autoneg profile fits any link speed, a forced-speed profile only
  fits ports currently linked at that speed.
"""

from dataclasses import dataclass, field
from unifi_diagnostics.analysis.vlan_signature import EffectivePortConfig
from unifi_diagnostics.config import MIN_CLUSTER_SIZE
from unifi_diagnostics.models.device import Device
from unifi_diagnostics.models.findings import PortReference
from unifi_diagnostics.models.port import SwitchPort
from unifi_diagnostics.models.profile import PortProfile


@dataclass(frozen=True, eq=False)
class TrunkPortCandidate:
    """A trunk-candidate port with everything clustering needs."""

    device: Device
    port: SwitchPort
    signature: frozenset[str]
    config: EffectivePortConfig
    profile: PortProfile | None = None

    @property
    def poe_on(self) -> bool:
        return self.config.poe.is_on

    @property
    def speed(self) -> int:
        return self.port.speed

    @property
    def autoneg(self) -> bool:
        return self.config.speed_constraint.autoneg

    @property
    def profile_id(self) -> str | None:
        return self.profile.id if self.profile is not None else None

    def reference(self) -> PortReference:
        return PortReference(
            device_mac=self.device.mac,
            device_name=self.device.display_name,
            port_idx=self.port.port_idx,
            port_name=self.port.name,
            current_profile_id=self.profile_id,
            current_profile_name=self.profile.name if self.profile is not None else None,
        )


@dataclass
class PortGroup:
    """Ports that can share one profile."""

    ports: list[TrunkPortCandidate] = field(default_factory=list)
    poe_mixed: bool = False

    @property
    def any_poe_on(self) -> bool:
        return any(c.poe_on for c in self.ports)

    def __len__(self) -> int:
        return len(self.ports)


def _without(candidates, kept):
    kept_ids = {id(c) for c in kept}
    return [c for c in candidates if id(c) not in kept_ids]


def filter_for_profile(
    profile: PortProfile,
    candidates: list[TrunkPortCandidate],
    users: list[TrunkPortCandidate] | None = None,
) -> tuple[list[TrunkPortCandidate], list[TrunkPortCandidate]]:
    """Split candidates into those that fit the profile and those that don't.

    Ports already using the profile set the PoE expectation. When nobody uses
    it yet and the candidates disagree on PoE, the powered ports are kept and
    the unpowered ones are left for another suggestion. Mixed users impose no
    PoE expectation.

    Returns:
        (compatible, excluded), both in input order
    """
    users = users or []
    speed = profile.speed_constraint
    kept = [c for c in candidates if speed.accepts(c.speed)]

    if profile.forces_poe_off:
        kept = [c for c in kept if not c.poe_on]
    else:
        reference = users or kept
        states = {c.poe_on for c in reference}
        if len(states) == 1:
            expected = states.pop()
            kept = [c for c in kept if c.poe_on == expected]
        elif not users and states:
            kept = [c for c in kept if c.poe_on]

    return kept, _without(candidates, kept)


def fit_unused_profile(
    profile: PortProfile,
    candidates: list[TrunkPortCandidate],
    min_size: int = MIN_CLUSTER_SIZE,
) -> tuple[list[TrunkPortCandidate], list[TrunkPortCandidate], bool]:
    """Fit candidates to a profile nobody uses yet.

    Like filter_for_profile(), except that ports rejected only for their PoE
    state are folded back in when there are too few of them to form a group
    of their own. The profile then covers a mixed PoE group.

    Returns:
        (compatible, excluded, poe_mixed)
    """
    kept, excluded = filter_for_profile(profile, candidates)
    if profile.forces_poe_off or not kept:
        return kept, excluded, False

    speed = profile.speed_constraint
    poe_rejected = [c for c in excluded if speed.accepts(c.speed)]
    if not poe_rejected or len(poe_rejected) >= min_size:
        return kept, excluded, False

    folded_ids = {id(c) for c in kept + poe_rejected}
    folded = [c for c in candidates if id(c) in folded_ids]
    return folded, _without(candidates, folded), True


def profile_accepts_all(profile: PortProfile, ports: list[TrunkPortCandidate]) -> bool:
    """Check whether every port could move onto the profile as one group."""
    if not ports:
        return False
    if profile.forces_poe_off:
        if any(c.poe_on for c in ports):
            return False
    elif len({c.poe_on for c in ports}) > 1:
        return False
    speed = profile.speed_constraint
    return all(speed.accepts(c.speed) for c in ports)


def _split_by_speed(ports: list[TrunkPortCandidate], min_size: int) -> list[list[TrunkPortCandidate]]:
    if all(c.autoneg for c in ports):
        # autoneg ports adapt, any speed mix is one config
        return [list(ports)]

    by_speed: dict[int, list[TrunkPortCandidate]] = {}
    for candidate in ports:
        by_speed.setdefault(candidate.speed, []).append(candidate)

    groups = []
    leftover_autoneg = []
    for members in by_speed.values():
        if len(members) >= min_size:
            groups.append(members)
        else:
            leftover_autoneg.extend(c for c in members if c.autoneg)

    if len(leftover_autoneg) >= min_size:
        groups.append(leftover_autoneg)
    return groups


def regroup_compatible(
    ports: list[TrunkPortCandidate], min_size: int = MIN_CLUSTER_SIZE
) -> list[PortGroup]:
    """Regroup ports into sub-clusters that can each share one new profile.

    Ports are split by speed first, then by PoE. A PoE split only happens
    when both halves keep at least min_size ports; otherwise the group stays
    whole and is marked poe_mixed. Groups below min_size are dropped.
    """
    if not ports:
        return []

    groups = []
    for speed_group in _split_by_speed(ports, min_size):
        if len(speed_group) < min_size:
            continue
        powered = [c for c in speed_group if c.poe_on]
        unpowered = [c for c in speed_group if not c.poe_on]
        if powered and unpowered:
            if len(powered) >= min_size and len(unpowered) >= min_size:
                groups.append(PortGroup(powered))
                groups.append(PortGroup(unpowered))
            else:
                groups.append(PortGroup(speed_group, poe_mixed=True))
        else:
            groups.append(PortGroup(speed_group))
    return groups
