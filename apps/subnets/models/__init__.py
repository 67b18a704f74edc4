from .subnet import LocationType, Subnet
from .sync_run import SyncRun

__all__ = [
    "LocationType",
    "Subnet",
    "SyncRun",
]
