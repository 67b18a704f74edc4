"""
Cloud synchronisation tracking.

Each ``SyncRun`` records one reconciliation (or utilization refresh) of
a cloud provider into the subnet inventory: when it ran, what it found,
and what it changed.
"""

import uuid

from django.db import models


class SyncRun(models.Model):
    """
    A record of a single synchronisation run against a cloud provider.

    The task_uuid field links this record to a dispatcherd background task.
    Per-subnet failures that did not abort the run are kept in ``errors``
    and leave the run ``partial``; a failed listing call marks it ``failed``.
    """

    class Status(models.TextChoices):
        PENDING = "pending", "Pending"
        RUNNING = "running", "Running"
        COMPLETED = "completed", "Completed"
        PARTIAL = "partial", "Partial (some subnets failed)"
        FAILED = "failed", "Failed"
        CANCELED = "canceled", "Canceled"

    class Kind(models.TextChoices):
        FULL = "full", "Full Sync"
        UTILIZATION = "utilization", "Utilization Refresh"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    provider = models.CharField(max_length=32, db_index=True)
    region = models.CharField(
        max_length=64,
        blank=True,
        default="",
        help_text="Region to sync. Empty means every configured region.",
    )
    kind = models.CharField(max_length=16, choices=Kind.choices, default=Kind.FULL)
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.PENDING)

    started_at = models.DateTimeField(auto_now_add=True)
    completed_at = models.DateTimeField(null=True, blank=True)

    # === Dispatcherd Task Tracking ===
    task_uuid = models.CharField(
        max_length=64,
        blank=True,
        default="",
        db_index=True,
        help_text="UUID of the dispatcherd background task running this sync.",
    )

    # Sync statistics
    networks_found = models.IntegerField(default=0)
    subnets_found = models.IntegerField(default=0)
    subnets_created = models.IntegerField(default=0)
    subnets_updated = models.IntegerField(default=0)
    subnets_skipped = models.IntegerField(default=0)

    # Error tracking
    errors = models.JSONField(default=list, blank=True)
    error_message = models.TextField(blank=True, default="")
    result_traceback = models.TextField(
        blank=True,
        default="",
        help_text="Python traceback if the task failed with an exception.",
    )

    class Meta:
        ordering = ["-started_at"]
        indexes = [
            models.Index(fields=["provider", "-started_at"], name="syncrun_provider_started_idx"),
            models.Index(fields=["status"], name="syncrun_status_idx"),
        ]

    def __str__(self):
        return f"{self.provider} {self.kind} @ {self.started_at} [{self.status}]"

    @property
    def is_terminal(self) -> bool:
        """Whether this run has reached a final state."""
        return self.status in (
            self.Status.COMPLETED,
            self.Status.FAILED,
            self.Status.CANCELED,
            self.Status.PARTIAL,
        )

    @classmethod
    def active_for(cls, provider: str):
        """The pending or running run of ``provider``, if any."""
        return cls.objects.filter(
            provider=provider,
            status__in=[cls.Status.PENDING, cls.Status.RUNNING],
        ).first()

    def record_result(self, result) -> None:
        """Copy a ``SyncResult`` onto this run (not saved)."""
        self.networks_found = result.networks_found
        self.subnets_found = result.subnets_found
        self.subnets_created = result.created
        self.subnets_updated = result.updated
        self.subnets_skipped = result.skipped
        self.errors = list(result.errors)
