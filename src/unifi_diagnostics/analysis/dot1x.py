"""802.1X control checks for trunk port profiles."""

from loguru import logger
from unifi_diagnostics.analysis.vlan_signature import VlanSignatureResolver
from unifi_diagnostics.config import DiagnosticsThresholds
from unifi_diagnostics.models.findings import DiagnosticSeverity, Dot1xProfileIssue
from unifi_diagnostics.models.network import NetworkConfig
from unifi_diagnostics.models.profile import PortProfile


class Dot1xProfileAnalyzer:
    """Flags trunk/AP profiles left on 802.1X "auto".

    A profile that carries more than a couple of VLANs feeds switches or
    APs. With 802.1X control on auto, enabling 802.1X on the site cuts those
    devices off.
    """

    def __init__(self, thresholds: DiagnosticsThresholds | None = None):
        self.thresholds = thresholds or DiagnosticsThresholds()

    def analyze(
        self, profiles: list[PortProfile], networks: list[NetworkConfig]
    ) -> list[Dot1xProfileIssue]:
        resolver = VlanSignatureResolver(profiles, networks)
        if not resolver.universe:
            logger.debug('No VLAN networks found, skipping 802.1X analysis')
            return []

        issues = []
        for profile in profiles:
            if not profile.is_trunk_profile:
                continue

            allows_all = not profile.excluded_networkconf_ids
            allowed = resolver.profile_signature(profile)
            if not allows_all and len(allowed) <= self.thresholds.trunk_vlan_threshold:
                logger.debug(
                    f'Skipping profile "{profile.name}": only {len(allowed)} tagged VLANs'
                )
                continue

            dot1x_ctrl = profile.dot1x_ctrl or 'auto'
            if dot1x_ctrl.lower() != 'auto':
                continue

            vlan_desc = 'all VLANs' if allows_all else f'{len(allowed)} VLANs'
            issues.append(
                Dot1xProfileIssue(
                    profile_id=profile.id,
                    profile_name=profile.name,
                    dot1x_ctrl=dot1x_ctrl,
                    allows_all_vlans=allows_all,
                    vlan_count=len(allowed),
                    vlan_names=resolver.vlan_names(allowed),
                    severity=DiagnosticSeverity.WARNING,
                    recommendation=(
                        f'Profile "{profile.name}" allows {vlan_desc} (trunk/AP profile) but has '
                        '802.1X Control set to Auto. Set to "Force Authorized" to prevent losing '
                        'network fabric connectivity when 802.1X is enabled.'
                    ),
                )
            )
            logger.debug(f'802.1X issue: profile "{profile.name}" ({vlan_desc}) on auto')

        return issues
