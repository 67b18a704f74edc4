"""Base classes and data contracts for cloud providers.

This module defines the cloud provider plugin interface. It is free of
Django dependencies so that provider authors can develop and test
providers without installing the IPAM service.

A provider is any object satisfying the ``CloudProvider`` protocol:

    - ``get_name()``                    human-readable provider name
    - ``get_type()``                    registry key, e.g. ``"aws"``
    - ``fetch_subnets(ctx, creds)``     every subnet visible to the credentials
    - ``get_regions()``                 static region list, no I/O
    - ``validate_credentials(creds)``   cheap, local shape check

``BaseProvider`` implements the parts every provider shares (type check,
required-field check, name/type/regions from class attributes) so that a
concrete provider only has to implement ``_fetch``.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Protocol, runtime_checkable

from .context import Context
from .errors import (
    CloudProviderError,
    InvalidCredentials,
    ProviderTypeMismatch,
    ProviderUnavailable,
)

logger = logging.getLogger("cloud_providers")


class ProviderType:
    """Identifiers of the built-in providers.

    Provider types are plain strings; third-party providers may use any
    value not already taken.
    """

    AWS = "aws"
    AZURE = "azure"
    GCP = "gcp"
    SCALEWAY = "scaleway"
    OVH = "ovh"

    BUILTIN = (AWS, AZURE, GCP, SCALEWAY, OVH)


class ResourceType:
    VPC = "vpc"
    SUBNET = "subnet"


LOCATION_TYPE_CLOUD = "cloud"


# ── Data contracts ────────────────────────────────────────────────────


@dataclass
class Credentials:
    """
    Credentials for one provider.

    The union of the fields any provider needs. Key-based providers
    validate ``access_key``/``secret_key``; token-based providers validate
    ``token``. Never persisted by this package.
    """

    provider_type: str
    access_key: str = ""
    secret_key: str = ""
    token: str = ""
    region: str = ""
    extra: dict[str, str] = field(default_factory=dict)

    def __repr__(self) -> str:
        return (
            f"Credentials(provider_type={self.provider_type!r}, region={self.region!r}, "
            f"access_key={'***' if self.access_key else ''!r})"
        )


@dataclass
class CloudSubnet:
    """A subnet as reported by a provider. Ephemeral, not the inventory record."""

    cidr: str
    name: str = ""
    region: str = ""
    account_id: str = ""
    vpc_id: str = ""
    tags: dict[str, str] = field(default_factory=dict)

    def as_dict(self) -> dict:
        return {
            "cidr": self.cidr,
            "name": self.name,
            "region": self.region,
            "account_id": self.account_id,
            "vpc_id": self.vpc_id,
            "tags": dict(self.tags),
        }


@dataclass
class Network:
    """A parent-level network (VPC or equivalent) from a native listing call."""

    id: str
    cidr: str
    name: str = ""
    region: str = ""
    is_default: bool = False
    tags: dict[str, str] = field(default_factory=dict)


@dataclass
class LeafSubnet:
    """A leaf subnet from a native listing call. ``parent_id`` is the VPC id."""

    id: str
    cidr: str
    name: str = ""
    parent_id: str = ""
    region: str = ""
    availability_zone: str = ""
    is_public: bool = False
    tags: dict[str, str] = field(default_factory=dict)


@dataclass
class CloudInfo:
    provider: str
    region: str = ""
    account_id: str = ""
    resource_type: str = ""
    vpc_id: str = ""
    subnet_id: str = ""


@dataclass
class Utilization:
    utilization_percent: float
    last_updated: datetime
    total_ips: int | None = None
    allocated_ips: int | None = None


@dataclass
class SubnetRecord:
    """
    The inventory's representation of a subnet, as exchanged with a
    ``SubnetRepository``. The repository owns storage; this is the
    shape the reconciler reads and writes.
    """

    cidr: str
    name: str = ""
    id: str = ""
    location: str = ""
    location_type: str = ""
    cloud_info: CloudInfo | None = None
    utilization: Utilization | None = None
    parent_id: str = ""
    tags: dict[str, str] = field(default_factory=dict)
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class SyncResult:
    """Summary statistics returned after a reconciliation run."""

    networks_found: int = 0
    subnets_found: int = 0
    created: int = 0
    updated: int = 0
    skipped: int = 0
    errors: list[str] = field(default_factory=list)

    def merge(self, other: SyncResult) -> None:
        self.networks_found += other.networks_found
        self.subnets_found += other.subnets_found
        self.created += other.created
        self.updated += other.updated
        self.skipped += other.skipped
        self.errors.extend(other.errors)

    def as_dict(self) -> dict:
        return {
            "networks_found": self.networks_found,
            "subnets_found": self.subnets_found,
            "created": self.created,
            "updated": self.updated,
            "skipped": self.skipped,
            "errors": list(self.errors),
        }


# ── Provider contract ─────────────────────────────────────────────────


@runtime_checkable
class CloudProvider(Protocol):
    """The capability set every registered provider must satisfy."""

    def get_name(self) -> str: ...

    def get_type(self) -> str: ...

    def fetch_subnets(self, ctx: Context, credentials: Credentials) -> list[CloudSubnet]: ...

    def get_regions(self) -> list[str]: ...

    def validate_credentials(self, credentials: Credentials) -> None: ...


class BaseProvider(ABC):
    """
    Convenience base for cloud providers.

    Subclasses set these class attributes:
        - ``provider_type``       registry key, e.g. ``"aws"``
        - ``display_name``        e.g. ``"Amazon Web Services"``
        - ``regions``             static region list
        - ``required_fields``     ``Credentials`` attributes that must be non-empty

    and implement ``_fetch(ctx, credentials)``. ``fetch_subnets`` validates
    the credentials, checks the context, and wraps any non-cancellation
    failure in ``ProviderUnavailable``.

    Example::

        class ExampleCloudProvider(BaseProvider):
            provider_type = "example"
            display_name = "Example Cloud"
            regions = ["eu-1"]
            required_fields = ("token",)

            def _fetch(self, ctx, credentials):
                client = ExampleSDK(token=credentials.token)
                return [
                    CloudSubnet(cidr=n.cidr, name=n.name, region=n.region)
                    for n in client.networks(timeout=ctx.remaining())
                ]
    """

    provider_type: str = ""
    display_name: str = ""
    regions: tuple[str, ...] = ()
    required_fields: tuple[str, ...] = ()

    def __init__(self):
        self.logger = logging.getLogger(f"cloud_providers.{self.provider_type or 'provider'}")

    def get_name(self) -> str:
        return self.display_name or self.provider_type

    def get_type(self) -> str:
        return self.provider_type

    def get_regions(self) -> list[str]:
        return list(self.regions)

    def validate_credentials(self, credentials: Credentials) -> None:
        """Raise ``InvalidCredentials`` unless the credentials fit this provider."""
        if credentials.provider_type != self.provider_type:
            raise ProviderTypeMismatch(self.provider_type, credentials.provider_type)

        missing = [name for name in self.required_fields if not getattr(credentials, name, "")]
        if missing:
            raise InvalidCredentials(
                f"{self.provider_type}: missing required credential field(s): {', '.join(missing)}"
            )

    def fetch_subnets(self, ctx: Context, credentials: Credentials) -> list[CloudSubnet]:
        self.validate_credentials(credentials)
        ctx.raise_if_done()
        try:
            return self._fetch(ctx, credentials)
        except CloudProviderError:
            # OperationCancelled, AuthenticationFailed, etc. keep their kind.
            raise
        except Exception as exc:
            raise ProviderUnavailable(
                "subnet fetch failed", provider_type=self.provider_type, cause=exc
            ) from exc

    @abstractmethod
    def _fetch(self, ctx: Context, credentials: Credentials) -> list[CloudSubnet]:
        """Return every subnet visible to ``credentials``. Called after validation."""
        ...

    def metadata(self) -> dict:
        """Return a metadata dict describing this provider."""
        return {
            "type": self.get_type(),
            "name": self.get_name(),
            "regions": self.get_regions(),
            "required_fields": list(self.required_fields),
            "class": f"{type(self).__module__}.{type(self).__name__}",
        }

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.provider_type}>"
