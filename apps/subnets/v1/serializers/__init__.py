from .cloud_provider import (
    CloudProviderSerializer,
    CloudSubnetSerializer,
    CredentialsSerializer,
    FetchAllSerializer,
)
from .subnet import SubnetSerializer
from .sync_run import SyncRequestSerializer, SyncRunSerializer

__all__ = [
    'CloudProviderSerializer',
    'CloudSubnetSerializer',
    'CredentialsSerializer',
    'FetchAllSerializer',
    'SubnetSerializer',
    'SyncRequestSerializer',
    'SyncRunSerializer',
]
