"""Built-in cloud providers shipped with the package."""

from .aws import AWSProvider
from .azure import AzureProvider
from .gcp import GCPProvider
from .ovh import OVHProvider
from .scaleway import ScalewayProvider

BUILTIN_PROVIDERS = (
    AWSProvider,
    AzureProvider,
    GCPProvider,
    ScalewayProvider,
    OVHProvider,
)

__all__ = [
    "AWSProvider",
    "AzureProvider",
    "BUILTIN_PROVIDERS",
    "GCPProvider",
    "OVHProvider",
    "ScalewayProvider",
]
