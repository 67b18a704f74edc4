from .cloud_provider import CloudProviderViewSet
from .subnet import SubnetViewSet
from .sync_run import SyncRunViewSet

__all__ = [
    'CloudProviderViewSet',
    'SubnetViewSet',
    'SyncRunViewSet',
]
