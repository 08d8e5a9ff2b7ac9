"""
Diagnostics engine: runs every enabled analyzer over one snapshot.

An analyzer that raises does not abort the run; the failure is logged and
recorded in DiagnosticsResult.errors and the remaining analyzers still run.
"""

import time
import uuid
from datetime import datetime, timezone
from unifi_diagnostics.analysis.dot1x import Dot1xProfileAnalyzer
from unifi_diagnostics.analysis.port_rules import PortRuleAnalyzer
from unifi_diagnostics.analysis.profile_suggestions import PortProfileSuggestionAnalyzer
from unifi_diagnostics.analysis.trunk_consistency import TrunkConsistencyAnalyzer
from unifi_diagnostics.config import DiagnosticsOptions
from unifi_diagnostics.models.findings import DiagnosticsResult
from unifi_diagnostics.models.snapshot import Snapshot
from unifi_diagnostics.utils.errors import DiagnosticsError, ErrorCodes
from unifi_diagnostics.utils.logging import get_logger, log_analyzer_finished, log_analyzer_started


class DiagnosticsEngine:
    """Runs trunk consistency, profile suggestion, 802.1X and port rule analysis."""

    def __init__(self, options: DiagnosticsOptions | None = None):
        self.options = options or DiagnosticsOptions()
        thresholds = self.options.thresholds
        self.trunk_analyzer = TrunkConsistencyAnalyzer()
        self.profile_analyzer = PortProfileSuggestionAnalyzer(thresholds)
        self.dot1x_analyzer = Dot1xProfileAnalyzer(thresholds)
        self.port_rule_analyzer = PortRuleAnalyzer(thresholds)

    def run(self, snapshot: Snapshot) -> DiagnosticsResult:
        """Analyze one snapshot.

        Args:
            snapshot: Devices, port profiles and networks from one poll

        Returns:
            All findings plus any analyzer failures
        """
        correlation_id = str(uuid.uuid4())
        log = get_logger(correlation_id)
        started_at = datetime.now(timezone.utc)
        start = time.perf_counter()
        log.info(
            f'Starting diagnostics: {len(snapshot.devices)} devices, '
            f'{len(snapshot.port_profiles)} profiles, {len(snapshot.networks)} networks'
        )

        devices = snapshot.devices
        profiles = snapshot.port_profiles
        networks = snapshot.networks
        errors: list[dict[str, str]] = []

        def guarded(name, func, default, count=len):
            log_analyzer_started(name, correlation_id)
            analyzer_start = time.perf_counter()
            try:
                result = func()
            except Exception as e:
                get_logger(correlation_id, name).exception(f'{name} analyzer failed: {e}')
                errors.append(
                    DiagnosticsError(
                        message=f'{name} analyzer failed: {e}',
                        error_code=ErrorCodes.ANALYZER_FAILED,
                        suggestion='Other analyzers still ran; results may be incomplete',
                    ).to_dict()
                )
                return default
            log_analyzer_finished(
                name, count(result), (time.perf_counter() - analyzer_start) * 1000, correlation_id
            )
            return result

        trunk_links, trunk_issues = [], []
        if self.options.run_trunk_consistency:
            trunk_links, trunk_issues = guarded(
                'Trunk consistency',
                lambda: self.trunk_analyzer.run(devices, profiles, networks),
                ([], []),
                count=lambda r: len(r[1]),
            )

        suggestions = []
        if self.options.run_port_profile_suggestions:
            suggestions = guarded(
                'Port profile suggestion',
                lambda: self.profile_analyzer.analyze(devices, profiles, networks),
                [],
            )

        dot1x_issues = []
        if self.options.run_dot1x_profiles:
            dot1x_issues = guarded(
                '802.1X profile',
                lambda: self.dot1x_analyzer.analyze(profiles, networks),
                [],
            )

        port_findings = []
        if self.options.run_port_rules:
            port_findings = guarded(
                'Port rule',
                lambda: self.port_rule_analyzer.analyze(devices, profiles, networks),
                [],
            )

        result = DiagnosticsResult(
            timestamp=started_at,
            duration_ms=(time.perf_counter() - start) * 1000,
            trunk_links=trunk_links,
            trunk_issues=trunk_issues,
            profile_suggestions=suggestions,
            dot1x_issues=dot1x_issues,
            port_findings=port_findings,
            errors=errors,
        )
        log.info(
            f'Diagnostics complete in {result.duration_ms:.1f}ms: '
            f'{result.total_issue_count} findings ({result.warning_count} warnings), '
            f'{len(errors)} analyzer errors'
        )
        return result


def run_diagnostics(snapshot: Snapshot, options: DiagnosticsOptions | None = None) -> DiagnosticsResult:
    """Run the diagnostics engine once with the given options."""
    return DiagnosticsEngine(options).run(snapshot)
