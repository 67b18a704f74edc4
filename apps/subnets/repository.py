"""Django ORM implementation of the reconciler's ``SubnetRepository``.

Converts between ``Subnet`` rows and ``cloud_providers.SubnetRecord``
dataclasses so the reconciler never touches the ORM. Each call is its
own database round trip; there is no transaction spanning a sync run.
"""
from __future__ import annotations

import logging

from django.core.exceptions import ValidationError

from cloud_providers import CloudInfo, SubnetNotFound, SubnetRecord, Utilization

from apps.subnets.models import Subnet

logger = logging.getLogger("apps.subnets.repository")


def to_record(subnet: Subnet) -> SubnetRecord:
    cloud_info = None
    if subnet.cloud_provider:
        cloud_info = CloudInfo(
            provider=subnet.cloud_provider,
            region=subnet.cloud_region,
            account_id=subnet.cloud_account_id,
            resource_type=subnet.cloud_resource_type,
            vpc_id=subnet.cloud_vpc_id,
            subnet_id=subnet.cloud_subnet_id,
        )

    utilization = None
    if subnet.utilization_percent is not None:
        utilization = Utilization(
            utilization_percent=subnet.utilization_percent,
            last_updated=subnet.utilization_updated_at,
            total_ips=subnet.utilization_total_ips,
            allocated_ips=subnet.utilization_allocated_ips,
        )

    return SubnetRecord(
        id=str(subnet.pk),
        name=subnet.name,
        cidr=subnet.cidr,
        location=subnet.location,
        location_type=subnet.location_type,
        cloud_info=cloud_info,
        utilization=utilization,
        parent_id=str(subnet.parent_id) if subnet.parent_id else "",
        tags=dict(subnet.tags or {}),
        created_at=subnet.created_at,
        updated_at=subnet.updated_at,
    )


def apply_record(subnet: Subnet, record: SubnetRecord) -> Subnet:
    """Copy ``record`` onto ``subnet`` in place (not saved)."""
    subnet.name = record.name
    subnet.cidr = record.cidr
    subnet.location = record.location
    subnet.location_type = record.location_type
    subnet.parent_id = record.parent_id or None
    subnet.tags = dict(record.tags)

    info = record.cloud_info
    subnet.cloud_provider = info.provider if info else ""
    subnet.cloud_region = info.region if info else ""
    subnet.cloud_account_id = info.account_id if info else ""
    subnet.cloud_resource_type = info.resource_type if info else ""
    subnet.cloud_vpc_id = info.vpc_id if info else ""
    subnet.cloud_subnet_id = info.subnet_id if info else ""

    usage = record.utilization
    subnet.utilization_percent = usage.utilization_percent if usage else None
    subnet.utilization_total_ips = usage.total_ips if usage else None
    subnet.utilization_allocated_ips = usage.allocated_ips if usage else None
    subnet.utilization_updated_at = usage.last_updated if usage else None

    if record.created_at is not None:
        subnet.created_at = record.created_at
    if record.updated_at is not None:
        subnet.updated_at = record.updated_at
    return subnet


class DjangoSubnetRepository:
    """``SubnetRepository`` backed by the ``Subnet`` model."""

    def get_subnet_by_cidr(self, cidr: str) -> SubnetRecord:
        try:
            return to_record(Subnet.objects.get(cidr=cidr))
        except Subnet.DoesNotExist:
            raise SubnetNotFound(cidr) from None

    def create_subnet(self, subnet: SubnetRecord) -> SubnetRecord:
        row = apply_record(Subnet(), subnet)
        row.save(force_insert=True)
        logger.debug("Created subnet %s (%s)", row.pk, row.cidr)
        return to_record(row)

    def update_subnet(self, subnet_id: str, subnet: SubnetRecord) -> SubnetRecord:
        try:
            row = Subnet.objects.get(pk=subnet_id)
        except (Subnet.DoesNotExist, ValidationError):
            raise SubnetNotFound(subnet_id) from None
        apply_record(row, subnet)
        row.save()
        return to_record(row)

    def list_subnets(self, cloud_provider: str | None = None) -> list[SubnetRecord]:
        qs = Subnet.objects.all()
        if cloud_provider is not None:
            qs = qs.filter(cloud_provider=cloud_provider)
        return [to_record(row) for row in qs]
