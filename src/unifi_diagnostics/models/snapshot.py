"""A single point-in-time poll of the controller."""

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from typing import Any
from unifi_diagnostics.models.device import Device
from unifi_diagnostics.models.network import NetworkConfig
from unifi_diagnostics.models.profile import PortProfile
from unifi_diagnostics.utils.errors import DiagnosticsError, ErrorCodes


class Snapshot(BaseModel):
    """Devices, port profiles and networks captured together."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    devices: list[Device] = Field(default_factory=list, description='Devices with port tables')
    port_profiles: list[PortProfile] = Field(default_factory=list, description='Port profiles')
    networks: list[NetworkConfig] = Field(default_factory=list, description='Network definitions')

    @classmethod
    def from_controller(
        cls,
        devices: list[dict[str, Any]],
        port_profiles: list[dict[str, Any]],
        networks: list[dict[str, Any]],
    ) -> 'Snapshot':
        """Build a snapshot from raw controller records.

        Args:
            devices: stat/device records
            port_profiles: rest/portconf records
            networks: rest/networkconf records

        Raises:
            DiagnosticsError: If a collection is missing or a record is malformed
        """
        try:
            return cls.model_validate(
                {'devices': devices, 'port_profiles': port_profiles, 'networks': networks}
            )
        except ValidationError as e:
            raise DiagnosticsError(
                message=f'Controller snapshot failed validation: {e.error_count()} error(s)',
                error_code=ErrorCodes.INVALID_SNAPSHOT,
                suggestion='Pass device, port profile and network lists (use [] when empty)',
            ) from e

    @property
    def switches(self) -> list[Device]:
        return [d for d in self.devices if d.type == 'switch']
