"""OVHcloud provider. Key-based: requires ``access_key`` and ``secret_key``."""
from __future__ import annotations

from cloud_providers.base import BaseProvider, CloudSubnet, Credentials, ProviderType
from cloud_providers.context import Context
from cloud_providers.errors import ProviderUnavailable


class OVHProvider(BaseProvider):
    provider_type = ProviderType.OVH
    display_name = "OVH"
    required_fields = ("access_key", "secret_key")
    regions = (
        "GRA1",
        "GRA3",
        "GRA5",
        "GRA7",
        "SBG1",
        "SBG3",
        "SBG5",
        "BHS1",
        "BHS3",
        "BHS5",
        "DE1",
        "UK1",
        "WAW1",
        "SGP1",
        "SYD1",
    )

    def _fetch(self, ctx: Context, credentials: Credentials) -> list[CloudSubnet]:
        raise ProviderUnavailable(
            "OVH subnet fetching not yet implemented", provider_type=self.provider_type
        )
