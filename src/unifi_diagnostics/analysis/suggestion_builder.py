"""Construction, naming and grading of consolidation suggestions."""

from dataclasses import dataclass
from unifi_diagnostics.analysis.compatibility import PortGroup, TrunkPortCandidate
from unifi_diagnostics.config import DiagnosticsThresholds
from unifi_diagnostics.models.findings import (
    ConsolidationSuggestion,
    PortReference,
    SuggestionSeverity,
    SuggestionType,
)
from unifi_diagnostics.models.profile import PortProfile


@dataclass(frozen=True)
class ClusterContext:
    """What every port of one equivalence class shares."""

    signature: frozenset[str]
    forward: str | None
    vlan_ids: tuple[str, ...]
    vlan_names: tuple[str, ...]
    allows_all: bool
    native_name: str | None = None


def format_port_list(ports: list[PortReference], limit: int) -> str:
    """'sw1 port 3, sw1 port 4 +2 more' style port list."""
    text = ', '.join(f'{p.device_name} port {p.port_idx}' for p in ports[:limit])
    if len(ports) > limit:
        text += f' +{len(ports) - limit} more'
    return text


def trunk_profile_name(context: ClusterContext, poe_on: bool) -> str:
    """Name for a new trunk profile.

    Up to three VLANs are named outright. Beyond that the shared native
    network names the profile, else the VLAN count does.
    """
    if context.allows_all:
        name = 'Trunk - All VLANs'
    elif len(context.vlan_names) <= 3:
        name = f'Trunk - {", ".join(sorted(context.vlan_names))}'
    elif context.native_name:
        name = f'Trunk - {context.native_name} Native'
    else:
        name = f'Trunk - {len(context.vlan_names)} VLANs'
    if poe_on:
        name += ' (PoE)'
    return name


class SuggestionBuilder:
    """Builds trunk consolidation suggestions with grading and text."""

    def __init__(self, thresholds: DiagnosticsThresholds | None = None):
        self.thresholds = thresholds or DiagnosticsThresholds()

    def grade(self, suggestion_type: SuggestionType, affected: int, not_yet_using: int) -> SuggestionSeverity:
        """Grade a suggestion by how many ports it touches."""
        if suggestion_type is SuggestionType.EXTEND_USAGE:
            if not_yet_using >= self.thresholds.extend_recommendation_ports:
                return SuggestionSeverity.RECOMMENDATION
            return SuggestionSeverity.INFO
        if affected >= self.thresholds.recommendation_ports:
            return SuggestionSeverity.RECOMMENDATION
        return SuggestionSeverity.INFO

    def _vlan_info(self, context: ClusterContext) -> str:
        if len(context.vlan_names) <= 5:
            return ', '.join(context.vlan_names)
        return f'{len(context.vlan_names)} VLANs'

    def _base(self, context: ClusterContext) -> dict:
        return {
            'category': 'trunk',
            'vlan_network_ids': list(context.vlan_ids),
            'vlan_names': list(context.vlan_names),
            'allows_all_vlans': context.allows_all,
        }

    def extend_usage(
        self,
        context: ClusterContext,
        profile: PortProfile,
        users: list[TrunkPortCandidate],
        newcomers: list[TrunkPortCandidate],
    ) -> ConsolidationSuggestion:
        """Some ports already use the profile; suggest moving the rest onto it."""
        new_refs = [c.reference() for c in newcomers]
        port_list = format_port_list(new_refs, self.thresholds.port_list_limit)
        return ConsolidationSuggestion(
            type=SuggestionType.EXTEND_USAGE,
            severity=self.grade(SuggestionType.EXTEND_USAGE, len(users) + len(newcomers), len(newcomers)),
            affected_ports=[c.reference() for c in users] + new_refs,
            ports_already_using=len(users),
            ports_without_profile=len(newcomers),
            matching_profile_id=profile.id,
            matching_profile_name=profile.name,
            recommendation=(
                f'Some ports with this configuration already use the "{profile.name}" profile. '
                f'Apply this profile to: {port_list} for consistent configuration.'
            ),
            **self._base(context),
        )

    def apply_existing(
        self,
        context: ClusterContext,
        profile: PortProfile,
        ports: list[TrunkPortCandidate],
        poe_mixed: bool = False,
    ) -> ConsolidationSuggestion:
        """A matching profile exists but none of these ports use it."""
        refs = [c.reference() for c in ports]
        port_list = format_port_list(refs, self.thresholds.port_list_limit)
        return ConsolidationSuggestion(
            type=SuggestionType.APPLY_EXISTING,
            severity=self.grade(SuggestionType.APPLY_EXISTING, len(ports), len(ports)),
            affected_ports=refs,
            ports_already_using=0,
            ports_without_profile=len(ports),
            matching_profile_id=profile.id,
            matching_profile_name=profile.name,
            poe_mixed=poe_mixed,
            recommendation=(
                f'Apply the existing "{profile.name}" profile to: {port_list} '
                'for consistent configuration and easier maintenance.'
            ),
            **self._base(context),
        )

    def create_new(self, context: ClusterContext, group: PortGroup) -> ConsolidationSuggestion:
        """No profile fits; suggest creating one for the group."""
        count = len(group.ports)
        return ConsolidationSuggestion(
            type=SuggestionType.CREATE_NEW,
            severity=self.grade(SuggestionType.CREATE_NEW, count, count),
            affected_ports=[c.reference() for c in group.ports],
            ports_already_using=0,
            ports_without_profile=count,
            suggested_profile_name=trunk_profile_name(context, group.any_poe_on),
            poe_mixed=group.poe_mixed,
            recommendation=(
                f'{count} trunk ports share identical VLAN configuration ({self._vlan_info(context)}). '
                'Create a port profile to ensure consistent configuration across all these ports '
                'and simplify future maintenance.'
            ),
            **self._base(context),
        )
