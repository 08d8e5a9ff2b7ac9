"""Switch port model as reported in a device's port table."""

from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, field_validator


class PoEState(str, Enum):
    """Power delivery state of a port."""

    ENABLED = 'enabled'
    DISABLED = 'disabled'  # capable, switched off
    UNSUPPORTED = 'unsupported'

    @property
    def is_on(self) -> bool:
        """Disabled and unsupported both mean "no power" for grouping."""
        return self is PoEState.ENABLED


class SwitchPort(BaseModel):
    """Switch port with its configuration and link status."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    port_idx: int = Field(description='Port index (1-based)')
    name: str | None = Field(default=None, description='Port name/label')
    forward: str | None = Field(
        default=None,
        description='Forward mode (all, native, customize, disabled)',
    )
    tagged_vlan_mgmt: str | None = Field(
        default=None,
        description='Tagged VLAN management (auto, block_all, custom)',
    )
    native_networkconf_id: str | None = Field(default=None, description='Native network ID')
    excluded_networkconf_ids: list[str] | None = Field(
        default=None,
        description='Networks blocked on this trunk (None or empty = allow all)',
    )
    portconf_id: str | None = Field(default=None, description='Assigned port profile ID')

    port_poe: bool = Field(default=False, description='Port hardware supports PoE')
    poe_enable: bool | None = Field(default=None, description='PoE currently enabled')
    poe_mode: str | None = Field(default=None, description='PoE mode (off, auto, pasv24, passthrough)')

    speed: int = Field(default=0, description='Current link speed in Mbps')
    autoneg: bool = Field(default=True, description='Speed auto-negotiation enabled')
    up: bool = Field(default=False, description='Port link status (up/down)')
    is_uplink: bool = Field(default=False, description='Port is the device uplink')
    media: str | None = Field(default=None, description='Media type (GE, SFP+, ...)')

    port_security_enabled: bool = Field(default=False, description='MAC restriction enabled')
    port_security_mac_address: list[str] = Field(
        default_factory=list,
        description='Allowed MAC addresses',
    )

    @field_validator('port_security_mac_address', mode='before')
    @classmethod
    def _none_to_empty(cls, value):
        return value or []

    @field_validator('speed', mode='before')
    @classmethod
    def _none_speed(cls, value):
        return value or 0

    @property
    def has_mac_restriction(self) -> bool:
        """Check if the port restricts which devices may connect."""
        return self.port_security_enabled or bool(self.port_security_mac_address)

    @property
    def display_label(self) -> str:
        """Get display label for port."""
        if self.name:
            return f'{self.name} (port {self.port_idx})'
        return f'Port {self.port_idx}'
