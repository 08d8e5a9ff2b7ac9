"""Pydantic models for diagnostics findings."""

from datetime import datetime, timezone
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from typing import Literal


# =============================================================================
# Grades
# =============================================================================


class Confidence(str, Enum):
    """How likely a trunk mismatch is a misconfiguration."""

    HIGH = 'high'
    MEDIUM = 'medium'
    LOW = 'low'

    @property
    def rank(self) -> int:
        return {'low': 0, 'medium': 1, 'high': 2}[self.value]


class SuggestionType(str, Enum):
    """What a consolidation suggestion asks the operator to do."""

    EXTEND_USAGE = 'extend_usage'  # some ports already use the matching profile
    APPLY_EXISTING = 'apply_existing'  # a matching profile exists, unused here
    CREATE_NEW = 'create_new'


class SuggestionSeverity(str, Enum):
    """Consolidation suggestion severity."""

    RECOMMENDATION = 'recommendation'
    INFO = 'info'


class DiagnosticSeverity(str, Enum):
    """Severity for 802.1X and port rule findings."""

    WARNING = 'warning'
    INFO = 'info'
    UNKNOWN = 'unknown'


# =============================================================================
# Trunk Consistency Models
# =============================================================================


class PortReference(BaseModel):
    """A port identified well enough to render without the snapshot."""

    model_config = ConfigDict(frozen=True)

    device_mac: str = Field(description='Device MAC address')
    device_name: str = Field(description='Device display name')
    port_idx: int = Field(description='Port index')
    port_name: str | None = Field(default=None, description='Port label')
    current_profile_id: str | None = Field(default=None, description='Assigned profile ID')
    current_profile_name: str | None = Field(default=None, description='Assigned profile name')

    @property
    def display(self) -> str:
        if self.port_name:
            return f'{self.device_name} port {self.port_idx} ({self.port_name})'
        return f'{self.device_name} port {self.port_idx}'


class TrunkLink(BaseModel):
    """A physical link between two trunk ports. Side A is the upstream device."""

    model_config = ConfigDict(frozen=True)

    device_a_mac: str = Field(description='Upstream device MAC')
    device_a_name: str = Field(description='Upstream device name')
    port_a: int = Field(description='Upstream port index')
    port_a_name: str | None = Field(default=None, description='Upstream port label')
    device_b_mac: str = Field(description='Downstream device MAC')
    device_b_name: str = Field(description='Downstream device name')
    port_b: int = Field(description='Downstream port index')
    port_b_name: str | None = Field(default=None, description='Downstream port label')
    vlans_a: frozenset[str] = Field(default_factory=frozenset, description='Network IDs on side A')
    vlans_b: frozenset[str] = Field(default_factory=frozenset, description='Network IDs on side B')

    @property
    def key(self) -> frozenset:
        """Undirected identity: the unordered pair of (mac, port) endpoints."""
        return frozenset(
            {(self.device_a_mac.lower(), self.port_a), (self.device_b_mac.lower(), self.port_b)}
        )


class VlanMismatch(BaseModel):
    """One network carried on one side of a trunk link but not the other."""

    model_config = ConfigDict(frozen=True)

    network_id: str = Field(description='Network config ID')
    network_name: str = Field(description='Network name')
    vlan: int = Field(description='VLAN tag')
    purpose: str | None = Field(default=None, description='Network purpose')
    missing_side: Literal['A', 'B'] = Field(description='Link side lacking the network')
    missing_device_name: str = Field(description='Device lacking the network')
    missing_port_idx: int = Field(description='Port lacking the network')
    presence: float = Field(description='Fraction of all trunk links carrying this network')
    confidence: Confidence = Field(description='Likelihood this is a mistake')


class MismatchIssue(BaseModel):
    """Asymmetric VLAN configuration across one trunk link."""

    model_config = ConfigDict(frozen=True)

    link: TrunkLink = Field(description='The link with differing VLANs')
    mismatches: list[VlanMismatch] = Field(description='Differing networks, ordered by tag')
    confidence: Confidence = Field(description='Highest confidence among mismatches')
    recommendation: str = Field(default='', description='Suggested fix')

    @property
    def missing_on_a(self) -> list[VlanMismatch]:
        return [m for m in self.mismatches if m.missing_side == 'A']

    @property
    def missing_on_b(self) -> list[VlanMismatch]:
        return [m for m in self.mismatches if m.missing_side == 'B']


# =============================================================================
# Profile Consolidation Models
# =============================================================================


class ConsolidationSuggestion(BaseModel):
    """A group of ports that could share one port profile."""

    model_config = ConfigDict(frozen=True)

    type: SuggestionType = Field(description='Suggested action')
    severity: SuggestionSeverity = Field(description='Suggestion severity')
    category: Literal['trunk', 'disabled', 'access'] = Field(
        default='trunk',
        description='Kind of ports grouped',
    )
    affected_ports: list[PortReference] = Field(description='Ports the suggestion covers')
    ports_already_using: int = Field(default=0, description='Ports already on the profile')
    ports_without_profile: int = Field(default=0, description='Ports that would change')
    matching_profile_id: str | None = Field(default=None, description='Existing profile ID')
    matching_profile_name: str | None = Field(default=None, description='Existing profile name')
    suggested_profile_name: str | None = Field(default=None, description='Name for a new profile')
    vlan_network_ids: list[str] = Field(default_factory=list, description='Networks carried')
    vlan_names: list[str] = Field(default_factory=list, description='Names of networks carried')
    allows_all_vlans: bool = Field(default=False, description='Carries the full VLAN universe')
    poe_mixed: bool = Field(default=False, description='Group mixes PoE on and off ports')
    recommendation: str = Field(default='', description='Suggested action text')

    @property
    def profile_name(self) -> str | None:
        return self.matching_profile_name or self.suggested_profile_name


# =============================================================================
# Port Rule / 802.1X Models
# =============================================================================


class Dot1xProfileIssue(BaseModel):
    """A trunk profile that should not run 802.1X in auto mode."""

    model_config = ConfigDict(frozen=True)

    profile_id: str = Field(description='Port profile ID')
    profile_name: str = Field(description='Port profile name')
    dot1x_ctrl: str | None = Field(default=None, description='Current 802.1X control')
    allows_all_vlans: bool = Field(description='Profile excludes nothing')
    vlan_count: int = Field(description='Allowed VLAN networks')
    vlan_names: list[str] = Field(default_factory=list, description='Allowed VLAN names')
    severity: DiagnosticSeverity = Field(default=DiagnosticSeverity.WARNING)
    recommendation: str = Field(default='', description='Suggested fix')


class PortFinding(BaseModel):
    """A single rule match against one port."""

    model_config = ConfigDict(frozen=True)

    rule_id: str = Field(description='Identifier of the rule that matched')
    severity: DiagnosticSeverity = Field(description='Finding severity')
    port: PortReference = Field(description='Port the finding applies to')
    message: str = Field(description='What was found')
    recommendation: str = Field(default='', description='Suggested fix')


# =============================================================================
# Run Result
# =============================================================================


class DiagnosticsResult(BaseModel):
    """Everything one diagnostics run produced."""

    model_config = ConfigDict(frozen=True)

    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description='When the run started',
    )
    duration_ms: float = Field(default=0.0, description='Run duration in milliseconds')
    trunk_links: list[TrunkLink] = Field(default_factory=list)
    trunk_issues: list[MismatchIssue] = Field(default_factory=list)
    profile_suggestions: list[ConsolidationSuggestion] = Field(default_factory=list)
    dot1x_issues: list[Dot1xProfileIssue] = Field(default_factory=list)
    port_findings: list[PortFinding] = Field(default_factory=list)
    errors: list[dict[str, str]] = Field(
        default_factory=list,
        description='Analyzer failures recorded instead of raised',
    )

    @property
    def warning_count(self) -> int:
        """High/medium trunk issues, recommendations, 802.1X issues, warning findings."""
        return (
            sum(1 for i in self.trunk_issues if i.confidence is not Confidence.LOW)
            + sum(
                1
                for s in self.profile_suggestions
                if s.severity is SuggestionSeverity.RECOMMENDATION
            )
            + len(self.dot1x_issues)
            + sum(1 for f in self.port_findings if f.severity is DiagnosticSeverity.WARNING)
        )

    @property
    def total_issue_count(self) -> int:
        return (
            len(self.trunk_issues)
            + len(self.profile_suggestions)
            + len(self.dot1x_issues)
            + len(self.port_findings)
        )

    @property
    def info_count(self) -> int:
        return self.total_issue_count - self.warning_count

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)
