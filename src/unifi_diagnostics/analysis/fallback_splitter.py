"""
Fallback handling for ports a profile match left behind.

When a class of identical-VLAN ports is matched to a profile, some of its
ports may fail the PoE or speed constraints of that profile. Those ports
first try another existing profile with the same VLANs; failing that they
are regrouped among themselves into new-profile suggestions.
"""

from loguru import logger
from unifi_diagnostics.analysis.compatibility import (
    TrunkPortCandidate,
    profile_accepts_all,
    regroup_compatible,
)
from unifi_diagnostics.analysis.suggestion_builder import ClusterContext, SuggestionBuilder
from unifi_diagnostics.models.findings import ConsolidationSuggestion
from unifi_diagnostics.models.profile import PortProfile


class FallbackSplitter:
    """Routes excluded ports to alternate profiles or new sub-clusters."""

    def __init__(self, builder: SuggestionBuilder):
        self.builder = builder

    @property
    def min_size(self) -> int:
        return self.builder.thresholds.min_cluster_size

    def split(
        self,
        context: ClusterContext,
        excluded: list[TrunkPortCandidate],
        matching_profiles: list[PortProfile],
        tried_ids: set[str],
        users_by_profile: dict[str, list[TrunkPortCandidate]],
    ) -> list[ConsolidationSuggestion]:
        """Suggest something for the excluded ports.

        Args:
            context: The equivalence class the ports came from
            excluded: Ports without a profile that the main match rejected
            matching_profiles: Profiles carrying the class's VLANs, in snapshot order
            tried_ids: Profiles already suggested for this class
            users_by_profile: Class members already on each profile
        """
        if not excluded:
            return []

        for profile in matching_profiles:
            if profile.id in tried_ids:
                continue
            if profile_accepts_all(profile, excluded):
                logger.debug(
                    f'{len(excluded)} excluded ports fit alternate profile "{profile.name}"'
                )
                users = users_by_profile.get(profile.id, [])
                if users:
                    return [self.builder.extend_usage(context, profile, users, excluded)]
                return [self.builder.apply_existing(context, profile, excluded)]

        suggestions = []
        for group in regroup_compatible(excluded, self.min_size):
            alternate = self._alternate_for(group.ports, matching_profiles, tried_ids)
            if alternate is not None:
                suggestions.append(self.builder.apply_existing(context, alternate, group.ports))
                continue
            if len(group) >= self.min_size:
                suggestions.append(self.builder.create_new(context, group))

        logger.debug(
            f'Regrouped {len(excluded)} excluded ports into {len(suggestions)} suggestions'
        )
        return suggestions

    def _alternate_for(self, ports, matching_profiles, tried_ids):
        for profile in matching_profiles:
            if profile.id in tried_ids:
                continue
            if profile_accepts_all(profile, ports):
                return profile
        return None
