"""Google Cloud Platform provider. Token-based: requires ``token``."""
from __future__ import annotations

from cloud_providers.base import BaseProvider, CloudSubnet, Credentials, ProviderType
from cloud_providers.context import Context
from cloud_providers.errors import ProviderUnavailable


class GCPProvider(BaseProvider):
    provider_type = ProviderType.GCP
    display_name = "Google Cloud Platform"
    required_fields = ("token",)
    regions = (
        "us-central1",
        "us-east1",
        "us-east4",
        "us-west1",
        "us-west2",
        "us-west3",
        "us-west4",
        "europe-west1",
        "europe-west2",
        "europe-west3",
        "europe-west4",
        "europe-west6",
        "europe-north1",
        "asia-east1",
        "asia-east2",
        "asia-northeast1",
        "asia-northeast2",
        "asia-northeast3",
        "asia-south1",
        "asia-southeast1",
        "asia-southeast2",
        "australia-southeast1",
        "southamerica-east1",
    )

    def _fetch(self, ctx: Context, credentials: Credentials) -> list[CloudSubnet]:
        raise ProviderUnavailable(
            "GCP subnet fetching not yet implemented", provider_type=self.provider_type
        )
