"""Unit tests for Pydantic models."""

import pytest
from pydantic import ValidationError
from unifi_diagnostics.models import (
    Confidence,
    ConsolidationSuggestion,
    Device,
    DiagnosticSeverity,
    DiagnosticsResult,
    MismatchIssue,
    NetworkConfig,
    PortFinding,
    PortProfile,
    PortReference,
    PoEState,
    Snapshot,
    SpeedConstraint,
    SuggestionSeverity,
    SuggestionType,
    SwitchPort,
    TrunkLink,
)
from unifi_diagnostics.utils.errors import DiagnosticsError, ErrorCodes


class TestNetworkConfig:
    """Test NetworkConfig model."""

    def test_controller_field_names(self):
        """Test creating a network from controller JSON."""
        network = NetworkConfig.model_validate(
            {'_id': 'abc', 'name': 'Staff', 'vlan': 10, 'purpose': 'corporate'}
        )
        assert network.id == 'abc'
        assert network.vlan == 10
        assert network.is_vlan_network is True

    def test_blank_vlan_is_untagged(self):
        """Test empty-string VLAN tag normalizes to None."""
        network = NetworkConfig.model_validate({'_id': 'lan', 'name': 'Default', 'vlan': ''})
        assert network.vlan is None
        assert network.is_vlan_network is False

    @pytest.mark.parametrize('purpose', ['wan', 'site-vpn', 'remote-user-vpn', 'vpn-client', 'WAN'])
    def test_non_switched_purposes(self, purpose):
        """Test WAN and VPN networks never count as VLAN networks."""
        network = NetworkConfig(_id='n', name='n', vlan=50, purpose=purpose)
        assert network.is_vlan_network is False

    def test_zero_and_negative_tags(self):
        """Test tag 0 and negative tags are not VLAN-bearing."""
        assert NetworkConfig(_id='a', vlan=0).is_vlan_network is False
        assert NetworkConfig(_id='b', vlan=-1).is_vlan_network is False

    def test_display_name(self):
        """Test display name includes the tag."""
        assert NetworkConfig(_id='a', name='IoT', vlan=30).display_name == 'IoT (VLAN 30)'
        assert NetworkConfig(_id='b', name='Default').display_name == 'Default'


class TestSwitchPort:
    """Test SwitchPort model."""

    def test_defaults(self):
        """Test minimal port defaults."""
        port = SwitchPort(port_idx=3)
        assert port.autoneg is True
        assert port.speed == 0
        assert port.excluded_networkconf_ids is None
        assert port.port_security_mac_address == []
        assert port.has_mac_restriction is False

    def test_null_lists_normalize(self):
        """Test null MAC list and speed from the controller normalize."""
        port = SwitchPort.model_validate(
            {'port_idx': 1, 'port_security_mac_address': None, 'speed': None}
        )
        assert port.port_security_mac_address == []
        assert port.speed == 0

    def test_mac_restriction(self):
        """Test MAC restriction detection."""
        assert SwitchPort(port_idx=1, port_security_enabled=True).has_mac_restriction is True
        assert SwitchPort(
            port_idx=1, port_security_mac_address=['aa:bb:cc:00:00:01']
        ).has_mac_restriction is True

    def test_display_label(self):
        """Test display label with and without a name."""
        assert SwitchPort(port_idx=5, name='AP Lobby').display_label == 'AP Lobby (port 5)'
        assert SwitchPort(port_idx=5).display_label == 'Port 5'

    def test_frozen(self):
        """Test ports are immutable."""
        port = SwitchPort(port_idx=1)
        with pytest.raises(ValidationError):
            port.speed = 1000


class TestPoEState:
    """Test PoEState enum."""

    def test_only_enabled_is_on(self):
        """Test disabled and unsupported both count as off."""
        assert PoEState.ENABLED.is_on is True
        assert PoEState.DISABLED.is_on is False
        assert PoEState.UNSUPPORTED.is_on is False


class TestPortProfile:
    """Test PortProfile model."""

    def test_trunk_profile(self):
        """Test trunk profile detection."""
        assert PortProfile(_id='p', forward='customize', tagged_vlan_mgmt='custom').is_trunk_profile
        assert not PortProfile(_id='p', forward='native', tagged_vlan_mgmt='block_all').is_trunk_profile

    def test_forces_poe_off(self):
        """Test PoE off detection."""
        assert PortProfile(_id='p', poe_mode='off').forces_poe_off is True
        assert PortProfile(_id='p', poe_mode='auto').forces_poe_off is False
        assert PortProfile(_id='p').forces_poe_off is False

    def test_speed_constraint(self):
        """Test the speed constraint a profile imposes."""
        assert PortProfile(_id='p').speed_constraint == SpeedConstraint(autoneg=True)
        assert PortProfile(_id='p', autoneg=True, speed=1000).speed_constraint.autoneg is True
        forced = PortProfile(_id='p', autoneg=False, speed=10000).speed_constraint
        assert forced == SpeedConstraint(autoneg=False, speed=10000)


class TestSpeedConstraint:
    """Test SpeedConstraint."""

    def test_autoneg_accepts_any_speed(self):
        """Test autoneg accepts every link speed."""
        constraint = SpeedConstraint(autoneg=True)
        assert all(constraint.accepts(s) for s in (0, 100, 1000, 2500, 10000))

    def test_forced_speed_exact_match(self):
        """Test a forced speed only accepts that speed."""
        constraint = SpeedConstraint(autoneg=False, speed=10000)
        assert constraint.accepts(10000) is True
        assert constraint.accepts(2500) is False

    def test_forced_without_speed(self):
        """Test forced mode with no speed accepts nothing."""
        assert SpeedConstraint(autoneg=False).accepts(1000) is False


class TestDevice:
    """Test Device model."""

    @pytest.mark.parametrize(
        'code,expected',
        [('usw', 'switch'), ('uap', 'ap'), ('udm', 'gateway'), ('ugw', 'gateway'),
         ('uxg', 'gateway'), ('ucg', 'gateway'), ('switch', 'switch'), ('ubb', 'other'), (None, 'other')],
    )
    def test_type_normalization(self, code, expected):
        """Test controller type codes map to device kinds."""
        device = Device(mac='aa:bb:cc:dd:ee:ff', type=code)
        assert device.type == expected

    def test_null_port_table(self):
        """Test null port table becomes empty."""
        device = Device.model_validate({'mac': 'aa:bb:cc:dd:ee:ff', 'port_table': None})
        assert device.port_table == []
        assert device.port(1) is None

    def test_flat_uplink_fields(self):
        """Test uplink given as flat fields."""
        device = Device.model_validate(
            {'mac': 'aa:bb:cc:dd:ee:02', 'uplink_mac': 'aa:bb:cc:dd:ee:01', 'uplink_remote_port': 24}
        )
        assert device.uplink.uplink_mac == 'aa:bb:cc:dd:ee:01'
        assert device.uplink.uplink_remote_port == 24

    def test_nested_uplink(self):
        """Test uplink given as nested dict."""
        device = Device.model_validate(
            {'mac': 'aa:bb:cc:dd:ee:02',
             'uplink': {'uplink_mac': 'aa:bb:cc:dd:ee:01', 'uplink_remote_port': 8}}
        )
        assert device.uplink.uplink_remote_port == 8

    def test_port_lookup(self):
        """Test port lookup by index."""
        device = Device(mac='m', port_table=[SwitchPort(port_idx=1), SwitchPort(port_idx=2)])
        assert device.port(2).port_idx == 2
        assert device.port(9) is None
        assert device.port(None) is None

    def test_display_name(self):
        """Test display name falls back to MAC."""
        assert Device(mac='aa:bb', name='Core').display_name == 'Core'
        assert Device(mac='aa:bb').display_name == 'aa:bb'


class TestSnapshot:
    """Test Snapshot model."""

    def test_from_controller(self):
        """Test building a snapshot from raw controller records."""
        snapshot = Snapshot.from_controller(
            devices=[
                {
                    'mac': 'aa:bb:cc:dd:ee:01',
                    'name': 'Core',
                    'type': 'usw',
                    'port_table': [{'port_idx': 1, 'forward': 'customize', 'tagged_vlan_mgmt': 'custom'}],
                },
                {'mac': 'aa:bb:cc:dd:ee:02', 'name': 'Lobby AP', 'type': 'uap', 'port_table': None},
            ],
            port_profiles=[{'_id': 'p1', 'name': 'Trunk', 'forward': 'customize'}],
            networks=[{'_id': 'n1', 'name': 'Staff', 'vlan': 10, 'purpose': 'corporate'}],
        )
        assert len(snapshot.devices) == 2
        assert [d.name for d in snapshot.switches] == ['Core']
        assert snapshot.port_profiles[0].id == 'p1'

    def test_empty_collections(self):
        """Test empty collections are valid."""
        snapshot = Snapshot.from_controller([], [], [])
        assert snapshot.devices == []

    def test_missing_collection_raises(self):
        """Test a None collection is a contract violation."""
        with pytest.raises(DiagnosticsError) as exc_info:
            Snapshot.from_controller(None, [], [])
        assert exc_info.value.error_code == ErrorCodes.INVALID_SNAPSHOT

    def test_malformed_record_raises(self):
        """Test a record missing a required field."""
        with pytest.raises(DiagnosticsError):
            Snapshot.from_controller([{'name': 'no mac'}], [], [])


class TestFindings:
    """Test finding models."""

    def _link(self, a_mac='aa:01', a_port=24, b_mac='aa:02', b_port=1):
        return TrunkLink(
            device_a_mac=a_mac, device_a_name='A', port_a=a_port,
            device_b_mac=b_mac, device_b_name='B', port_b=b_port,
        )

    def test_trunk_link_key_is_undirected(self):
        """Test reversed links share a key."""
        forward = self._link()
        reverse = self._link(a_mac='AA:02', a_port=1, b_mac='aa:01', b_port=24)
        assert forward.key == reverse.key

    def test_confidence_rank(self):
        """Test confidence ordering."""
        assert Confidence.HIGH.rank > Confidence.MEDIUM.rank > Confidence.LOW.rank

    def test_port_reference_display(self):
        """Test port reference rendering."""
        ref = PortReference(device_mac='m', device_name='Core', port_idx=3, port_name='AP')
        assert ref.display == 'Core port 3 (AP)'

    def test_result_counts(self):
        """Test warning/info counting across finding kinds."""
        ref = PortReference(device_mac='m', device_name='Core', port_idx=3)
        result = DiagnosticsResult(
            trunk_issues=[
                MismatchIssue(link=self._link(), mismatches=[], confidence=Confidence.HIGH),
                MismatchIssue(link=self._link(), mismatches=[], confidence=Confidence.LOW),
            ],
            profile_suggestions=[
                ConsolidationSuggestion(
                    type=SuggestionType.CREATE_NEW,
                    severity=SuggestionSeverity.RECOMMENDATION,
                    affected_ports=[ref],
                ),
                ConsolidationSuggestion(
                    type=SuggestionType.CREATE_NEW,
                    severity=SuggestionSeverity.INFO,
                    affected_ports=[ref],
                ),
            ],
            port_findings=[
                PortFinding(rule_id='r', severity=DiagnosticSeverity.INFO, port=ref, message='m'),
            ],
        )
        assert result.total_issue_count == 5
        assert result.warning_count == 2
        assert result.info_count == 3
        assert result.has_errors is False
