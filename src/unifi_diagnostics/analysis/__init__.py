"""
Topology consistency and port profile consolidation analyzers.
"""

from unifi_diagnostics.analysis.access_profiles import AccessProfileAnalyzer
from unifi_diagnostics.analysis.compatibility import (
    PortGroup,
    TrunkPortCandidate,
    filter_for_profile,
    fit_unused_profile,
    profile_accepts_all,
    regroup_compatible,
)
from unifi_diagnostics.analysis.dot1x import Dot1xProfileAnalyzer
from unifi_diagnostics.analysis.fallback_splitter import FallbackSplitter
from unifi_diagnostics.analysis.port_rules import (
    DEFAULT_PORT_RULES,
    PortRuleAnalyzer,
    PortRuleInput,
    evaluate_port_rules,
)
from unifi_diagnostics.analysis.profile_suggestions import (
    PortProfileClusterer,
    PortProfileSuggestionAnalyzer,
)
from unifi_diagnostics.analysis.trunk_consistency import (
    TrunkConsistencyAnalyzer,
    detect_mismatches,
    grade_presence,
)
from unifi_diagnostics.analysis.trunk_links import discover_trunk_links, find_uplink_port
from unifi_diagnostics.analysis.vlan_signature import (
    EffectivePortConfig,
    VlanSignatureResolver,
    candidate_universe,
    resolve_effective,
    resolve_signature,
)


__all__ = [
    'AccessProfileAnalyzer',
    'DEFAULT_PORT_RULES',
    'Dot1xProfileAnalyzer',
    'EffectivePortConfig',
    'FallbackSplitter',
    'PortGroup',
    'PortProfileClusterer',
    'PortProfileSuggestionAnalyzer',
    'PortRuleAnalyzer',
    'PortRuleInput',
    'TrunkConsistencyAnalyzer',
    'TrunkPortCandidate',
    'VlanSignatureResolver',
    'candidate_universe',
    'detect_mismatches',
    'discover_trunk_links',
    'evaluate_port_rules',
    'filter_for_profile',
    'find_uplink_port',
    'fit_unused_profile',
    'grade_presence',
    'profile_accepts_all',
    'regroup_compatible',
    'resolve_effective',
    'resolve_signature',
]
