"""
SyncRun viewset: read-only list/detail.

Sync runs are created exclusively through the cloud-provider ``sync``
and ``utilization`` actions or by the periodic tasks.

GET  /api/v1/sync-runs/        → list all runs (filterable)
GET  /api/v1/sync-runs/{id}/   → detail
"""
from rest_framework.mixins import ListModelMixin, RetrieveModelMixin
from rest_framework.viewsets import GenericViewSet

from apps.subnets.models import SyncRun
from apps.subnets.v1.serializers import SyncRunSerializer


class SyncRunViewSet(ListModelMixin, RetrieveModelMixin, GenericViewSet):
    """
    Filtering examples:
        ?status=running
        ?provider=aws
        ?kind=utilization
    """

    queryset = SyncRun.objects.all()
    serializer_class = SyncRunSerializer
    filterset_fields = ["status", "provider", "region", "kind"]
    search_fields = ["provider", "task_uuid"]
    ordering_fields = ["started_at", "completed_at", "status"]
