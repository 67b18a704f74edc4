"""Amazon Web Services provider.

Key-based: requires ``access_key`` and ``secret_key``. Subnet discovery
through this provider is not wired to the EC2 API yet; reconciliation of
AWS networks goes through ``cloud_providers.aws_ec2.Ec2NetworkLister``.
"""
from __future__ import annotations

from cloud_providers.base import BaseProvider, CloudSubnet, Credentials, ProviderType
from cloud_providers.context import Context
from cloud_providers.errors import ProviderUnavailable


class AWSProvider(BaseProvider):
    provider_type = ProviderType.AWS
    display_name = "Amazon Web Services"
    required_fields = ("access_key", "secret_key")
    regions = (
        "us-east-1",
        "us-east-2",
        "us-west-1",
        "us-west-2",
        "eu-west-1",
        "eu-west-2",
        "eu-west-3",
        "eu-central-1",
        "ap-southeast-1",
        "ap-southeast-2",
        "ap-northeast-1",
        "ap-northeast-2",
        "sa-east-1",
        "ca-central-1",
    )

    def _fetch(self, ctx: Context, credentials: Credentials) -> list[CloudSubnet]:
        raise ProviderUnavailable(
            "AWS subnet fetching not yet implemented", provider_type=self.provider_type
        )
