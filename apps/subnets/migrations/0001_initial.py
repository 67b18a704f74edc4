"""Initial schema for the subnet inventory and cloud sync runs."""

import uuid

import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Subnet",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(blank=True, default="", max_length=255)),
                (
                    "cidr",
                    models.CharField(
                        help_text="CIDR block, e.g. 10.0.1.0/24. One record per CIDR.",
                        max_length=43,
                        unique=True,
                    ),
                ),
                ("location", models.CharField(blank=True, default="", max_length=255)),
                ("location_type", models.CharField(blank=True, default="", max_length=32)),
                ("cloud_provider", models.CharField(blank=True, db_index=True, default="", max_length=32)),
                ("cloud_region", models.CharField(blank=True, default="", max_length=64)),
                ("cloud_account_id", models.CharField(blank=True, default="", max_length=64)),
                (
                    "cloud_resource_type",
                    models.CharField(
                        blank=True,
                        choices=[("vpc", "VPC"), ("subnet", "Subnet")],
                        default="",
                        max_length=16,
                    ),
                ),
                ("cloud_vpc_id", models.CharField(blank=True, db_index=True, default="", max_length=128)),
                ("cloud_subnet_id", models.CharField(blank=True, default="", max_length=128)),
                ("utilization_percent", models.FloatField(blank=True, null=True)),
                ("utilization_total_ips", models.IntegerField(blank=True, null=True)),
                ("utilization_allocated_ips", models.IntegerField(blank=True, null=True)),
                ("utilization_updated_at", models.DateTimeField(blank=True, null=True)),
                ("tags", models.JSONField(blank=True, default=dict)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(default=django.utils.timezone.now)),
                (
                    "parent",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="children",
                        to="subnets.subnet",
                    ),
                ),
            ],
            options={
                "ordering": ["cidr"],
                "indexes": [
                    models.Index(fields=["cloud_provider", "cloud_resource_type"], name="subnet_cloud_provider_idx"),
                    models.Index(fields=["location_type"], name="subnet_location_type_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="SyncRun",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("provider", models.CharField(db_index=True, max_length=32)),
                (
                    "region",
                    models.CharField(
                        blank=True,
                        default="",
                        help_text="Region to sync. Empty means every configured region.",
                        max_length=64,
                    ),
                ),
                (
                    "kind",
                    models.CharField(
                        choices=[("full", "Full Sync"), ("utilization", "Utilization Refresh")],
                        default="full",
                        max_length=16,
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("running", "Running"),
                            ("completed", "Completed"),
                            ("partial", "Partial (some subnets failed)"),
                            ("failed", "Failed"),
                            ("canceled", "Canceled"),
                        ],
                        default="pending",
                        max_length=16,
                    ),
                ),
                ("started_at", models.DateTimeField(auto_now_add=True)),
                ("completed_at", models.DateTimeField(blank=True, null=True)),
                (
                    "task_uuid",
                    models.CharField(
                        blank=True,
                        db_index=True,
                        default="",
                        help_text="UUID of the dispatcherd background task running this sync.",
                        max_length=64,
                    ),
                ),
                ("networks_found", models.IntegerField(default=0)),
                ("subnets_found", models.IntegerField(default=0)),
                ("subnets_created", models.IntegerField(default=0)),
                ("subnets_updated", models.IntegerField(default=0)),
                ("subnets_skipped", models.IntegerField(default=0)),
                ("errors", models.JSONField(blank=True, default=list)),
                ("error_message", models.TextField(blank=True, default="")),
                (
                    "result_traceback",
                    models.TextField(
                        blank=True,
                        default="",
                        help_text="Python traceback if the task failed with an exception.",
                    ),
                ),
            ],
            options={
                "ordering": ["-started_at"],
                "indexes": [
                    models.Index(fields=["provider", "-started_at"], name="syncrun_provider_started_idx"),
                    models.Index(fields=["status"], name="syncrun_status_idx"),
                ],
            },
        ),
    ]
