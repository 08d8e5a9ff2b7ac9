"""
Port profile consolidation suggestions.

Trunk ports carrying the same VLANs are grouped into equivalence classes
keyed by (VLAN signature, forward mode). Each class is then standardized
on, in order of preference:

1. profiles some of its ports already use (ExtendUsage),
2. an unused profile carrying the same VLANs (ApplyExisting),
3. a new profile per compatible sub-group (CreateNew).

Ports rejected by PoE or speed constraints in steps 1 and 2 go to the
FallbackSplitter. Only ports without a profile are ever suggested a change.
"""

from loguru import logger
from unifi_diagnostics.analysis.access_profiles import AccessProfileAnalyzer
from unifi_diagnostics.analysis.compatibility import (
    TrunkPortCandidate,
    filter_for_profile,
    fit_unused_profile,
    regroup_compatible,
)
from unifi_diagnostics.analysis.fallback_splitter import FallbackSplitter
from unifi_diagnostics.analysis.suggestion_builder import ClusterContext, SuggestionBuilder
from unifi_diagnostics.analysis.vlan_signature import VlanSignatureResolver
from unifi_diagnostics.config import DiagnosticsThresholds
from unifi_diagnostics.models.device import Device
from unifi_diagnostics.models.findings import ConsolidationSuggestion
from unifi_diagnostics.models.network import NetworkConfig
from unifi_diagnostics.models.profile import PortProfile


def collect_trunk_candidates(
    devices: list[Device], resolver: VlanSignatureResolver
) -> list[TrunkPortCandidate]:
    """Every trunk-candidate port in the snapshot, in device/port order."""
    candidates = []
    for device in devices:
        for port in device.port_table:
            config = resolver.effective(port)
            if not config.is_trunk_candidate:
                continue
            candidates.append(
                TrunkPortCandidate(
                    device=device,
                    port=port,
                    signature=resolver.signature_from_excluded(config.excluded_networkconf_ids),
                    config=config,
                    profile=resolver.profile_for(port),
                )
            )
    return candidates


def _shared_native_name(members: list[TrunkPortCandidate], resolver: VlanSignatureResolver) -> str | None:
    """Name of the native network every member shares, if there is one."""
    natives = {c.config.native_networkconf_id for c in members}
    if len(natives) != 1:
        return None
    network = resolver.network(natives.pop())
    return network.name if network is not None else None


class PortProfileClusterer:
    """Groups trunk ports into profile consolidation suggestions."""

    def __init__(self, thresholds: DiagnosticsThresholds | None = None):
        self.thresholds = thresholds or DiagnosticsThresholds()
        self.builder = SuggestionBuilder(self.thresholds)
        self.splitter = FallbackSplitter(self.builder)

    def cluster(
        self,
        devices: list[Device],
        profiles: list[PortProfile],
        networks: list[NetworkConfig],
        resolver: VlanSignatureResolver | None = None,
    ) -> list[ConsolidationSuggestion]:
        resolver = resolver or VlanSignatureResolver(profiles, networks)
        if not resolver.universe:
            logger.debug('No VLAN networks, skipping trunk profile clustering')
            return []

        classes: dict[tuple, list[TrunkPortCandidate]] = {}
        for candidate in collect_trunk_candidates(devices, resolver):
            key = (candidate.signature, candidate.config.forward)
            classes.setdefault(key, []).append(candidate)

        suggestions = []
        for (signature, forward), members in classes.items():
            if len(members) < self.thresholds.min_cluster_size:
                continue
            context = ClusterContext(
                signature=signature,
                forward=forward,
                vlan_ids=tuple(n.id for n in resolver.ordered(signature)),
                vlan_names=tuple(resolver.vlan_names(signature)),
                allows_all=signature == resolver.universe_ids,
                native_name=_shared_native_name(members, resolver),
            )
            matching = [
                p
                for p in profiles
                if resolver.profile_signature(p) == signature and p.forward == forward
            ]
            suggestions.extend(self._cluster_class(context, members, matching))

        logger.debug(
            f'Trunk clustering: {len(classes)} classes, {len(suggestions)} suggestions'
        )
        return suggestions

    def _cluster_class(
        self,
        context: ClusterContext,
        members: list[TrunkPortCandidate],
        matching: list[PortProfile],
    ) -> list[ConsolidationSuggestion]:
        matching_ids = {p.id for p in matching}
        users_by_profile: dict[str, list[TrunkPortCandidate]] = {}
        for candidate in members:
            if candidate.profile_id in matching_ids:
                users_by_profile.setdefault(candidate.profile_id, []).append(candidate)

        remaining = [c for c in members if c.profile is None]
        if not remaining:
            return []

        suggestions = []
        tried: set[str] = set()

        # 1. profiles the class already uses, in order of first use
        for profile_id, users in users_by_profile.items():
            if not remaining:
                break
            profile = next(p for p in matching if p.id == profile_id)
            tried.add(profile_id)
            compatible, remaining = filter_for_profile(profile, remaining, users)
            if compatible:
                suggestions.append(self.builder.extend_usage(context, profile, users, compatible))

        # 2. leftovers from in-use profiles
        if users_by_profile:
            if remaining:
                suggestions.extend(
                    self.splitter.split(context, remaining, matching, tried, users_by_profile)
                )
            return suggestions

        # 3. an unused profile carrying the same VLANs
        best = None
        best_fit: list[TrunkPortCandidate] = []
        best_rest: list[TrunkPortCandidate] = []
        best_mixed = False
        for profile in matching:
            compatible, rejected, poe_mixed = fit_unused_profile(
                profile, remaining, self.thresholds.min_cluster_size
            )
            if len(compatible) > len(best_fit):
                best, best_fit, best_rest, best_mixed = profile, compatible, rejected, poe_mixed

        if best is not None:
            tried.add(best.id)
            suggestions.append(
                self.builder.apply_existing(context, best, best_fit, poe_mixed=best_mixed)
            )
            suggestions.extend(
                self.splitter.split(context, best_rest, matching, tried, users_by_profile)
            )
            return suggestions

        # 4. nothing fits, suggest new profiles
        for group in regroup_compatible(remaining, self.thresholds.min_cluster_size):
            suggestions.append(self.builder.create_new(context, group))
        return suggestions


class PortProfileSuggestionAnalyzer:
    """All profile consolidation suggestions: trunk, disabled and access."""

    def __init__(self, thresholds: DiagnosticsThresholds | None = None):
        self.thresholds = thresholds or DiagnosticsThresholds()
        self.clusterer = PortProfileClusterer(self.thresholds)
        self.access = AccessProfileAnalyzer(self.thresholds)

    def analyze(
        self,
        devices: list[Device],
        profiles: list[PortProfile],
        networks: list[NetworkConfig],
    ) -> list[ConsolidationSuggestion]:
        resolver = VlanSignatureResolver(profiles, networks)
        suggestions = self.access.analyze(devices, profiles, networks, resolver)
        suggestions.extend(self.clusterer.cluster(devices, profiles, networks, resolver))
        logger.debug(f'Port profile analysis produced {len(suggestions)} suggestions')
        return suggestions
