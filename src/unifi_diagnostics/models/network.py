"""Network configuration model (VLAN definitions)."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Purposes whose networks never ride a switch trunk
NON_SWITCHED_PURPOSES = frozenset({'wan', 'site-vpn', 'remote-user-vpn', 'vpn-client'})


class NetworkConfig(BaseModel):
    """Network definition from the controller's networkconf table."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(alias='_id', description='Network config ID')
    name: str = Field(default='', description='Network name')
    vlan: int | None = Field(default=None, description='802.1Q tag (None or 0 = untagged)')
    purpose: str | None = Field(
        default=None,
        description='Network purpose (corporate, guest, vlan-only, wan, site-vpn, ...)',
    )
    enabled: bool = Field(default=True, description='Network enabled')

    @field_validator('vlan', mode='before')
    @classmethod
    def _blank_vlan(cls, value):
        if value == '':
            return None
        return value

    @property
    def is_vlan_network(self) -> bool:
        """True if this network carries a real tag and can appear on switch ports."""
        if not self.vlan or self.vlan <= 0:
            return False
        return (self.purpose or '').lower() not in NON_SWITCHED_PURPOSES

    @property
    def display_name(self) -> str:
        """Get display name with VLAN tag."""
        if self.vlan:
            return f'{self.name} (VLAN {self.vlan})'
        return self.name
