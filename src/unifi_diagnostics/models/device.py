"""Device model for UniFi network devices."""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import Literal
from unifi_diagnostics.models.port import SwitchPort


# Controller device type codes
DEVICE_TYPE_CODES = {
    'usw': 'switch',
    'ugw': 'gateway',
    'udm': 'gateway',
    'uxg': 'gateway',
    'ucg': 'gateway',
    'usg': 'gateway',
    'uap': 'ap',
}


class UplinkRef(BaseModel):
    """Where a device uplinks: the parent's MAC and the parent's port index."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    uplink_mac: str | None = Field(default=None, description='MAC of the upstream device')
    uplink_remote_port: int | None = Field(
        default=None,
        description='Port index on the upstream device',
    )


class Device(BaseModel):
    """UniFi network device.

    Represents switches, access points and gateways along with their
    port tables.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    mac: str = Field(description='MAC address (primary identifier)')
    name: str = Field(default='', description='Device name')
    model: str = Field(default='', description='Hardware model (e.g., USW-Pro-48-PoE)')
    type: Literal['switch', 'gateway', 'ap', 'other'] = Field(
        default='other',
        description='Device type',
    )
    port_table: list[SwitchPort] = Field(default_factory=list, description='Ports in index order')
    uplink: UplinkRef | None = Field(default=None, description='Upstream reference')

    @field_validator('type', mode='before')
    @classmethod
    def _normalize_type(cls, value):
        if value is None:
            return 'other'
        value = str(value).lower()
        if value in ('switch', 'gateway', 'ap', 'other'):
            return value
        return DEVICE_TYPE_CODES.get(value, 'other')

    @field_validator('port_table', mode='before')
    @classmethod
    def _none_to_empty(cls, value):
        return value or []

    @model_validator(mode='before')
    @classmethod
    def _uplink_from_flat_fields(cls, data):
        # Controller payloads carry the uplink as a nested dict under 'uplink'
        # whose keys are uplink_mac / uplink_remote_port; flat keys are accepted too.
        if isinstance(data, dict) and data.get('uplink') is None and data.get('uplink_mac'):
            data = dict(data)
            data['uplink'] = {
                'uplink_mac': data.pop('uplink_mac'),
                'uplink_remote_port': data.pop('uplink_remote_port', None),
            }
        return data

    def port(self, port_idx: int | None) -> SwitchPort | None:
        """Get the port with the given index, or None."""
        if port_idx is None:
            return None
        for port in self.port_table:
            if port.port_idx == port_idx:
                return port
        return None

    @property
    def display_name(self) -> str:
        """Get display name, falling back to MAC if name is empty."""
        return self.name if self.name else self.mac
