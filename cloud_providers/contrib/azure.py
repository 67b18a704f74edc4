"""Microsoft Azure provider. Token-based: requires ``token``."""
from __future__ import annotations

from cloud_providers.base import BaseProvider, CloudSubnet, Credentials, ProviderType
from cloud_providers.context import Context
from cloud_providers.errors import ProviderUnavailable


class AzureProvider(BaseProvider):
    provider_type = ProviderType.AZURE
    display_name = "Microsoft Azure"
    required_fields = ("token",)
    regions = (
        "eastus",
        "eastus2",
        "westus",
        "westus2",
        "westus3",
        "centralus",
        "northeurope",
        "westeurope",
        "francecentral",
        "uksouth",
        "ukwest",
        "germanywestcentral",
        "southeastasia",
        "eastasia",
        "australiaeast",
        "australiasoutheast",
        "japaneast",
        "japanwest",
        "koreacentral",
        "canadacentral",
        "brazilsouth",
    )

    def _fetch(self, ctx: Context, credentials: Credentials) -> list[CloudSubnet]:
        raise ProviderUnavailable(
            "Azure subnet fetching not yet implemented", provider_type=self.provider_type
        )
