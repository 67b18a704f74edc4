"""
Subnet inventory model.

A ``Subnet`` is one CIDR block known to the IPAM service. Records are
created by hand through the API or by cloud synchronisation; the latter
fills the ``cloud_*`` and ``utilization_*`` columns and links each cloud
subnet to the record of its VPC through ``parent``.
"""

import uuid

from django.db import models
from django.utils import timezone


class LocationType(models.TextChoices):
    DATACENTER = "datacenter", "Datacenter"
    SITE = "site", "Site"
    CLOUD = "cloud", "Cloud"


class Subnet(models.Model):
    class CloudResourceType(models.TextChoices):
        VPC = "vpc", "VPC"
        SUBNET = "subnet", "Subnet"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255, blank=True, default="")
    cidr = models.CharField(
        max_length=43,
        unique=True,
        help_text="CIDR block, e.g. 10.0.1.0/24. One record per CIDR.",
    )
    location = models.CharField(max_length=255, blank=True, default="")
    location_type = models.CharField(max_length=32, blank=True, default="")

    parent = models.ForeignKey(
        "self",
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="children",
    )

    # === Cloud information (empty for non-cloud records) ===
    cloud_provider = models.CharField(max_length=32, blank=True, default="", db_index=True)
    cloud_region = models.CharField(max_length=64, blank=True, default="")
    cloud_account_id = models.CharField(max_length=64, blank=True, default="")
    cloud_resource_type = models.CharField(
        max_length=16,
        choices=CloudResourceType.choices,
        blank=True,
        default="",
    )
    cloud_vpc_id = models.CharField(max_length=128, blank=True, default="", db_index=True)
    cloud_subnet_id = models.CharField(max_length=128, blank=True, default="")

    # === Utilization ===
    utilization_percent = models.FloatField(null=True, blank=True)
    utilization_total_ips = models.IntegerField(null=True, blank=True)
    utilization_allocated_ips = models.IntegerField(null=True, blank=True)
    utilization_updated_at = models.DateTimeField(null=True, blank=True)

    tags = models.JSONField(default=dict, blank=True)

    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ["cidr"]
        indexes = [
            models.Index(fields=["cloud_provider", "cloud_resource_type"], name="subnet_cloud_provider_idx"),
            models.Index(fields=["location_type"], name="subnet_location_type_idx"),
        ]

    def __str__(self):
        return f"{self.name or self.cidr} ({self.cidr})"

    @property
    def is_cloud(self) -> bool:
        return bool(self.cloud_provider)
