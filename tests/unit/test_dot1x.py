"""Unit tests for the 802.1X trunk profile analyzer."""

import pytest
from unifi_diagnostics.analysis.dot1x import Dot1xProfileAnalyzer
from unifi_diagnostics.config import TRUNK_VLAN_THRESHOLD
from unifi_diagnostics.models import DiagnosticSeverity


@pytest.fixture
def five_vlans(make_network):
    return [make_network(f'v{i}', i * 10, f'Net{i}') for i in range(1, 6)]


class TestDot1xProfileAnalyzer:
    """Test 802.1X control checks."""

    def test_allow_all_on_auto(self, make_profile, five_vlans):
        """Test an allow-all trunk profile on auto is flagged."""
        issues = Dot1xProfileAnalyzer().analyze([make_profile('p', 'AP Trunk')], five_vlans)
        assert len(issues) == 1
        issue = issues[0]
        assert issue.allows_all_vlans is True
        assert issue.vlan_count == 5
        assert issue.dot1x_ctrl == 'auto'
        assert issue.severity is DiagnosticSeverity.WARNING
        assert 'allows all VLANs' in issue.recommendation
        assert 'Force Authorized' in issue.recommendation

    def test_exactly_threshold_not_flagged(self, make_profile, five_vlans):
        """Test exactly two allowed VLANs is not a trunk/AP profile."""
        profile = make_profile('p', excluded_networkconf_ids=['v1', 'v2', 'v3'])
        assert TRUNK_VLAN_THRESHOLD == 2
        assert Dot1xProfileAnalyzer().analyze([profile], five_vlans) == []

    def test_three_vlans_flagged(self, make_profile, five_vlans):
        """Test three allowed VLANs crosses the threshold."""
        profile = make_profile('p', excluded_networkconf_ids=['v1', 'v2'])
        issues = Dot1xProfileAnalyzer().analyze([profile], five_vlans)
        assert len(issues) == 1
        assert issues[0].vlan_count == 3
        assert issues[0].vlan_names == ['Net3', 'Net4', 'Net5']
        assert 'allows 3 VLANs' in issues[0].recommendation

    @pytest.mark.parametrize('ctrl', ['force_authorized', 'force_unauthorized', 'mac_based'])
    def test_non_auto_not_flagged(self, make_profile, five_vlans, ctrl):
        """Test profiles already off auto are fine."""
        assert Dot1xProfileAnalyzer().analyze([make_profile('p', dot1x_ctrl=ctrl)], five_vlans) == []

    def test_explicit_auto_flagged(self, make_profile, five_vlans):
        """Test an explicit AUTO setting is flagged case-insensitively."""
        issues = Dot1xProfileAnalyzer().analyze([make_profile('p', dot1x_ctrl='AUTO')], five_vlans)
        assert len(issues) == 1

    def test_non_trunk_profiles_ignored(self, make_profile, five_vlans):
        """Test access profiles are skipped."""
        profile = make_profile('p', forward='native', tagged_vlan_mgmt='block_all')
        assert Dot1xProfileAnalyzer().analyze([profile], five_vlans) == []

    def test_no_vlan_networks(self, make_profile, make_network):
        """Test no VLAN networks means no issues."""
        networks = [make_network('lan', None), make_network('wan', 5, purpose='wan')]
        assert Dot1xProfileAnalyzer().analyze([make_profile('p')], networks) == []
