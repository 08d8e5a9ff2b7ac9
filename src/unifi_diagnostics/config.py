"""
Thresholds and analyzer toggles for the diagnostics engine.

The numeric thresholds are exposed as module constants so callers and tests
can refer to them by name; DiagnosticsThresholds bundles them for one run.
"""

from dataclasses import asdict, dataclass, field, fields
from unifi_diagnostics.utils.errors import DiagnosticsError, ErrorCodes

# Tagged VLAN count above which a trunk profile/port counts as a trunk/AP carrier
TRUNK_VLAN_THRESHOLD = 2

# Minimum ports before suggesting a shared disabled / unrestricted access profile
MIN_DISABLED_PORTS = 5
MIN_ACCESS_PORTS = 5

# Smallest group that may become its own profile
MIN_CLUSTER_SIZE = 2

# Severity thresholds
EXTEND_RECOMMENDATION_PORTS = 3
RECOMMENDATION_PORTS = 5

# Ports spelled out in recommendation text before "+N more"
SUGGESTION_PORT_LIST_LIMIT = 5


@dataclass
class DiagnosticsThresholds:
    """
    Numeric thresholds used by the analyzers, validated on creation.
    """
    trunk_vlan_threshold: int = TRUNK_VLAN_THRESHOLD
    min_disabled_ports: int = MIN_DISABLED_PORTS
    min_access_ports: int = MIN_ACCESS_PORTS
    min_cluster_size: int = MIN_CLUSTER_SIZE
    extend_recommendation_ports: int = EXTEND_RECOMMENDATION_PORTS
    recommendation_ports: int = RECOMMENDATION_PORTS
    port_list_limit: int = SUGGESTION_PORT_LIST_LIMIT

    def __post_init__(self):
        """Reject non-integer values, then clamp the rest to safe ranges."""
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise DiagnosticsError(
                    message=f'Threshold {f.name} must be an integer, got {value!r}',
                    error_code=ErrorCodes.INVALID_THRESHOLD,
                    suggestion=f'Use a whole number such as the default {f.default}',
                )

        self.trunk_vlan_threshold = max(0, min(self.trunk_vlan_threshold, 4094))
        self.min_disabled_ports = max(1, min(self.min_disabled_ports, 1000))
        self.min_access_ports = max(1, min(self.min_access_ports, 1000))
        # A one-port profile is never a consolidation
        self.min_cluster_size = max(MIN_CLUSTER_SIZE, min(self.min_cluster_size, 1000))
        self.extend_recommendation_ports = max(1, min(self.extend_recommendation_ports, 1000))
        self.recommendation_ports = max(1, min(self.recommendation_ports, 1000))
        self.port_list_limit = max(1, min(self.port_list_limit, 50))

    def to_dict(self) -> dict:
        """Export thresholds as a dictionary."""
        return asdict(self)


@dataclass
class DiagnosticsOptions:
    """
    Which analyzers to run, plus the thresholds they share.
    """
    run_trunk_consistency: bool = True
    run_port_profile_suggestions: bool = True
    run_dot1x_profiles: bool = True
    run_port_rules: bool = True
    thresholds: DiagnosticsThresholds = field(default_factory=DiagnosticsThresholds)
