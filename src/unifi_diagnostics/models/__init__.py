"""Typed snapshot and finding models."""

from unifi_diagnostics.models.device import Device, UplinkRef
from unifi_diagnostics.models.findings import (
    Confidence,
    ConsolidationSuggestion,
    DiagnosticSeverity,
    DiagnosticsResult,
    Dot1xProfileIssue,
    MismatchIssue,
    PortFinding,
    PortReference,
    SuggestionSeverity,
    SuggestionType,
    TrunkLink,
    VlanMismatch,
)
from unifi_diagnostics.models.network import NON_SWITCHED_PURPOSES, NetworkConfig
from unifi_diagnostics.models.port import PoEState, SwitchPort
from unifi_diagnostics.models.profile import PortProfile, SpeedConstraint
from unifi_diagnostics.models.snapshot import Snapshot


__all__ = [
    'Confidence',
    'ConsolidationSuggestion',
    'Device',
    'DiagnosticSeverity',
    'DiagnosticsResult',
    'Dot1xProfileIssue',
    'MismatchIssue',
    'NON_SWITCHED_PURPOSES',
    'NetworkConfig',
    'PoEState',
    'PortFinding',
    'PortProfile',
    'PortReference',
    'Snapshot',
    'SpeedConstraint',
    'SuggestionSeverity',
    'SuggestionType',
    'SwitchPort',
    'TrunkLink',
    'UplinkRef',
    'VlanMismatch',
]
