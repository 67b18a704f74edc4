"""AWS EC2 network listing for reconciliation.

``Ec2NetworkLister`` implements the ``NetworkLister`` contract for one AWS
region using boto3. Only read-only calls are made (DescribeVpcs,
DescribeSubnets). Static keys are used when supplied; otherwise boto3's
default credential chain applies (environment, instance role, IRSA, ...).
"""
from __future__ import annotations

import logging

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError, NoCredentialsError

from .base import LeafSubnet, Network, ProviderType
from .context import Context
from .errors import AuthenticationFailed, ProviderUnavailable, RateLimited
from .sync import compute_utilization

logger = logging.getLogger("cloud_providers.aws_ec2")

# AWS reserves the first four addresses and the last one of every subnet.
AWS_RESERVED_IPS = 5

_AUTH_ERROR_CODES = {
    "AuthFailure",
    "UnauthorizedOperation",
    "InvalidClientTokenId",
    "SignatureDoesNotMatch",
    "ExpiredToken",
}
_THROTTLE_ERROR_CODES = {"RequestLimitExceeded", "Throttling", "ThrottlingException"}


class Ec2NetworkLister:
    """List VPCs and subnets of one region."""

    def __init__(
        self,
        region: str,
        access_key_id: str = "",
        secret_access_key: str = "",
        session: boto3.session.Session | None = None,
        timeout: float = 30,
    ):
        self.region = region
        if session is None:
            if access_key_id and secret_access_key:
                logger.info("Using static credentials for AWS authentication in region: %s", region)
                session = boto3.session.Session(
                    aws_access_key_id=access_key_id,
                    aws_secret_access_key=secret_access_key,
                    region_name=region,
                )
            else:
                logger.info("Using default credential chain for AWS authentication in region: %s", region)
                session = boto3.session.Session(region_name=region)
        self._client = session.client(
            "ec2",
            region_name=region,
            config=Config(
                connect_timeout=timeout,
                read_timeout=timeout,
                retries={"max_attempts": 3, "mode": "standard"},
            ),
        )

    # ── NetworkLister contract ────────────────────────────────────────

    def list_networks(self, ctx: Context) -> list[Network]:
        networks = []
        for vpc in self._describe_all(ctx, "describe_vpcs", "Vpcs"):
            vpc_id = vpc.get("VpcId", "")
            tags = _safe_tags(vpc.get("Tags"))
            networks.append(
                Network(
                    id=vpc_id,
                    cidr=vpc.get("CidrBlock", ""),
                    name=tags.get("Name") or vpc_id,
                    region=self.region,
                    is_default=bool(vpc.get("IsDefault", False)),
                    tags=tags,
                )
            )
        return networks

    def list_leaf_subnets(self, ctx: Context) -> list[LeafSubnet]:
        subnets = []
        for subnet in self._describe_all(ctx, "describe_subnets", "Subnets"):
            subnet_id = subnet.get("SubnetId", "")
            tags = _safe_tags(subnet.get("Tags"))
            subnets.append(
                LeafSubnet(
                    id=subnet_id,
                    cidr=subnet.get("CidrBlock", ""),
                    name=tags.get("Name") or subnet_id,
                    parent_id=subnet.get("VpcId", ""),
                    region=self.region,
                    availability_zone=subnet.get("AvailabilityZone", ""),
                    is_public=bool(subnet.get("MapPublicIpOnLaunch", False)),
                    tags=tags,
                )
            )
        return subnets

    def get_utilization(self, ctx: Context, subnet_id: str) -> float:
        ctx.raise_if_done()
        response = self._call("describe_subnets", SubnetIds=[subnet_id])
        subnets = response.get("Subnets", [])
        if not subnets:
            raise ProviderUnavailable(f"subnet {subnet_id} not found", provider_type=ProviderType.AWS)

        subnet = subnets[0]
        return compute_utilization(
            subnet.get("CidrBlock", ""),
            int(subnet.get("AvailableIpAddressCount", 0)),
            AWS_RESERVED_IPS,
        )

    def validate_credentials(self, ctx: Context) -> None:
        ctx.raise_if_done()
        # AWS requires MaxResults >= 5
        self._call("describe_vpcs", MaxResults=5)

    # ── Helpers ───────────────────────────────────────────────────────

    def _describe_all(self, ctx: Context, operation: str, key: str) -> list[dict]:
        items: list[dict] = []
        try:
            paginator = self._client.get_paginator(operation)
            for page in paginator.paginate():
                ctx.raise_if_done()
                items.extend(page.get(key, []))
        except (ClientError, BotoCoreError) as exc:
            raise _translate(exc, operation) from exc
        return items

    def _call(self, operation: str, **kwargs) -> dict:
        try:
            return getattr(self._client, operation)(**kwargs)
        except (ClientError, BotoCoreError) as exc:
            raise _translate(exc, operation) from exc


def _safe_tags(tag_list) -> dict[str, str]:
    """Convert AWS ``[{"Key": k, "Value": v}]`` tags to a plain dict."""
    if not tag_list:
        return {}
    return {t.get("Key", ""): t.get("Value", "") for t in tag_list if "Key" in t}


def _translate(exc: Exception, operation: str) -> Exception:
    if isinstance(exc, NoCredentialsError):
        return AuthenticationFailed(f"no AWS credentials available for {operation}")
    if isinstance(exc, ClientError):
        code = exc.response.get("Error", {}).get("Code", "")
        if code in _AUTH_ERROR_CODES:
            return AuthenticationFailed(f"{operation}: {code}")
        if code in _THROTTLE_ERROR_CODES:
            return RateLimited(f"{operation}: {code}")
    return ProviderUnavailable(f"{operation} failed", provider_type=ProviderType.AWS, cause=exc)
