"""Cloud Providers: pluggable cloud network sources for the IPAM service.

This package defines the cloud provider contract, ships stub providers
for the supported clouds, and implements the registry fan-out and the
reconciliation of cloud networks into the subnet inventory. It has no
Django dependency.

For provider authors:

    from cloud_providers import BaseProvider, CloudSubnet

    class MyCloudProvider(BaseProvider):
        provider_type = "mycloud"
        display_name = "My Cloud"
        regions = ("region-1",)
        required_fields = ("token",)

        def _fetch(self, ctx, credentials):
            return [CloudSubnet(cidr="10.0.0.0/24", name="default")]

Register via entry point in your package's pyproject.toml::

    [project.entry-points."cloud_providers"]
    mycloud = "my_package.provider:MyCloudProvider"

For the IPAM service (consumer):

    from cloud_providers import Context, Credentials, build_default_registry

    registry = build_default_registry()
    results, errors = registry.fetch_subnets_from_all_providers(
        Context(timeout=30),
        {"aws": Credentials("aws", access_key="...", secret_key="...")},
    )
"""

from .base import (
    BaseProvider,
    CloudInfo,
    CloudProvider,
    CloudSubnet,
    Credentials,
    LeafSubnet,
    Network,
    ProviderType,
    ResourceType,
    SubnetRecord,
    SyncResult,
    Utilization,
)
from .context import Context
from .errors import (
    AuthenticationFailed,
    CloudProviderError,
    DuplicateProvider,
    InvalidCredentials,
    NilProvider,
    OperationCancelled,
    ProviderNotFound,
    ProviderTypeMismatch,
    ProviderUnavailable,
    RateLimited,
    SyncError,
)
from .registry import ProviderRegistry, build_default_registry
from .sync import NetworkLister, Reconciler, SubnetNotFound, SubnetRepository, compute_utilization

__all__ = [
    "AuthenticationFailed",
    "BaseProvider",
    "CloudInfo",
    "CloudProvider",
    "CloudProviderError",
    "CloudSubnet",
    "Context",
    "Credentials",
    "DuplicateProvider",
    "InvalidCredentials",
    "LeafSubnet",
    "Network",
    "NetworkLister",
    "NilProvider",
    "OperationCancelled",
    "ProviderNotFound",
    "ProviderRegistry",
    "ProviderType",
    "ProviderTypeMismatch",
    "ProviderUnavailable",
    "RateLimited",
    "Reconciler",
    "ResourceType",
    "SubnetNotFound",
    "SubnetRecord",
    "SubnetRepository",
    "SyncError",
    "SyncResult",
    "Utilization",
    "build_default_registry",
    "compute_utilization",
]

__version__ = "0.1.0"
