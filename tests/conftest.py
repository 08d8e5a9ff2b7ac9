"""Shared pytest fixtures: small snapshot builders."""

import pytest
from unifi_diagnostics.models import Device, NetworkConfig, PortProfile, SwitchPort


@pytest.fixture
def make_network():
    """Build a NetworkConfig from a few fields."""

    def _make(network_id: str, vlan: int | None, name: str | None = None, purpose: str = 'corporate'):
        return NetworkConfig(
            _id=network_id,
            name=name or network_id,
            vlan=vlan,
            purpose=purpose,
        )

    return _make


@pytest.fixture
def networks(make_network) -> list[NetworkConfig]:
    """Three VLAN networks plus an untagged LAN and a WAN."""
    return [
        make_network('lan', None, 'Default'),
        make_network('vlan10', 10, 'Staff'),
        make_network('vlan20', 20, 'Guest', 'guest'),
        make_network('vlan30', 30, 'IoT'),
        make_network('wan1', 100, 'Internet', 'wan'),
    ]


@pytest.fixture
def make_port():
    """Build a SwitchPort, trunk-configured unless told otherwise."""

    def _make(port_idx: int, **fields):
        data = {
            'port_idx': port_idx,
            'forward': 'customize',
            'tagged_vlan_mgmt': 'custom',
            'excluded_networkconf_ids': [],
        }
        data.update(fields)
        return SwitchPort(**data)

    return _make


@pytest.fixture
def make_switch():
    """Build a switch Device with the given ports."""

    def _make(mac: str, name: str, ports: list[SwitchPort], uplink_mac: str | None = None,
              uplink_port: int | None = None):
        data = {'mac': mac, 'name': name, 'model': 'USW-24-PoE', 'type': 'usw', 'port_table': ports}
        if uplink_mac:
            data['uplink'] = {'uplink_mac': uplink_mac, 'uplink_remote_port': uplink_port}
        return Device(**data)

    return _make


@pytest.fixture
def make_profile():
    """Build a trunk PortProfile unless told otherwise."""

    def _make(profile_id: str, name: str | None = None, **fields):
        data = {
            '_id': profile_id,
            'name': name or profile_id,
            'forward': 'customize',
            'tagged_vlan_mgmt': 'custom',
            'excluded_networkconf_ids': [],
        }
        data.update(fields)
        return PortProfile(**data)

    return _make


# Pytest markers for test organization
def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line('markers', 'slow: marks tests that take longer than 5 seconds')
    config.addinivalue_line('markers', 'integration: marks tests that run the whole engine')
