from rest_framework import serializers

from apps.subnets.models import SyncRun


class SyncRunSerializer(serializers.ModelSerializer):
    duration_seconds = serializers.SerializerMethodField(
        help_text="Elapsed seconds from start to completion (null if still running).",
    )

    class Meta:
        model = SyncRun
        fields = [
            "id",
            "provider",
            "region",
            "kind",
            "status",
            "started_at",
            "completed_at",
            "task_uuid",
            "networks_found",
            "subnets_found",
            "subnets_created",
            "subnets_updated",
            "subnets_skipped",
            "errors",
            "error_message",
            "result_traceback",
            "duration_seconds",
        ]
        read_only_fields = fields  # sync runs are created via the cloud-provider actions, not directly

    def get_duration_seconds(self, obj) -> float | None:
        if obj.completed_at and obj.started_at:
            return (obj.completed_at - obj.started_at).total_seconds()
        return None


class SyncRequestSerializer(serializers.Serializer):
    """Optional body of the sync and utilization actions."""

    region = serializers.CharField(required=False, allow_blank=True, default="")
