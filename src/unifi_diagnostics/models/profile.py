"""Port profile model (reusable port configuration templates)."""

from dataclasses import dataclass
from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True)
class SpeedConstraint:
    """Speed requirement a config places on a port.

    autoneg=True accepts any current link speed. A forced speed only accepts
    ports currently linked at exactly that speed.
    """

    autoneg: bool = True
    speed: int | None = None

    def accepts(self, current_speed: int) -> bool:
        if self.autoneg:
            return True
        if self.speed is None:
            return False
        return self.speed == current_speed


class PortProfile(BaseModel):
    """Port profile from the controller's portconf table.

    Any field left unset defers to the port's own setting.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(alias='_id', description='Port profile ID')
    name: str = Field(default='', description='Profile name')
    forward: str | None = Field(default=None, description='Forward mode')
    tagged_vlan_mgmt: str | None = Field(default=None, description='Tagged VLAN management mode')
    native_networkconf_id: str | None = Field(default=None, description='Native network ID')
    excluded_networkconf_ids: list[str] | None = Field(
        default=None,
        description='Networks blocked by this profile (None = not set, [] = allow all)',
    )
    poe_mode: str | None = Field(default=None, description='PoE mode (off, auto, ...)')
    autoneg: bool | None = Field(default=None, description='Speed auto-negotiation')
    speed: int | None = Field(default=None, description='Forced speed in Mbps')
    port_security_enabled: bool | None = Field(default=None, description='MAC restriction enabled')
    dot1x_ctrl: str | None = Field(
        default=None,
        description='802.1X control (auto, force_authorized, force_unauthorized, mac_based)',
    )
    isolation: bool | None = Field(default=None, description='Port isolation')

    @property
    def is_trunk_profile(self) -> bool:
        """Check if profile carries a custom set of tagged VLANs."""
        return self.forward == 'customize' and self.tagged_vlan_mgmt == 'custom'

    @property
    def forces_poe_off(self) -> bool:
        return (self.poe_mode or '').lower() == 'off'

    @property
    def speed_constraint(self) -> SpeedConstraint:
        """Speed requirement this profile imposes on the ports using it."""
        if self.autoneg is False:
            return SpeedConstraint(autoneg=False, speed=self.speed)
        if self.autoneg is None and self.speed:
            return SpeedConstraint(autoneg=False, speed=self.speed)
        return SpeedConstraint(autoneg=True, speed=None)
