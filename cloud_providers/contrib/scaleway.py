"""Scaleway provider. Key-based: requires ``access_key`` and ``secret_key``."""
from __future__ import annotations

from cloud_providers.base import BaseProvider, CloudSubnet, Credentials, ProviderType
from cloud_providers.context import Context
from cloud_providers.errors import ProviderUnavailable


class ScalewayProvider(BaseProvider):
    provider_type = ProviderType.SCALEWAY
    display_name = "Scaleway"
    required_fields = ("access_key", "secret_key")
    regions = (
        "fr-par-1",
        "fr-par-2",
        "fr-par-3",
        "nl-ams-1",
        "nl-ams-2",
        "pl-waw-1",
        "pl-waw-2",
    )

    def _fetch(self, ctx: Context, credentials: Credentials) -> list[CloudSubnet]:
        raise ProviderUnavailable(
            "Scaleway subnet fetching not yet implemented", provider_type=self.provider_type
        )
