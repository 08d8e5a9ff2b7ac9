"""UniFi port diagnostics: trunk VLAN consistency and port profile consolidation."""

from unifi_diagnostics.config import DiagnosticsOptions, DiagnosticsThresholds
from unifi_diagnostics.engine import DiagnosticsEngine, run_diagnostics
from unifi_diagnostics.models import DiagnosticsResult, Snapshot
from unifi_diagnostics.utils.errors import DiagnosticsError, ErrorCodes


__version__ = '0.1.0'

__all__ = [
    'DiagnosticsEngine',
    'DiagnosticsError',
    'DiagnosticsOptions',
    'DiagnosticsResult',
    'DiagnosticsThresholds',
    'ErrorCodes',
    'Snapshot',
    'run_diagnostics',
]
