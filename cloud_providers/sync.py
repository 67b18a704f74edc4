"""Reconciliation of cloud network topology into the subnet inventory.

A ``Reconciler`` is bound to one provider type, one ``NetworkLister``
(the provider's native listing calls) and one ``SubnetRepository`` (the
inventory). A full run lists parent networks first, then leaf subnets,
matching each against the inventory by CIDR:

    parents   known CIDR  → skipped
              new CIDR    → created as ``resource_type=vpc``
    leaves    known CIDR  → updated in place (cloud info, location, tags, parent)
              new CIDR    → utilization fetched (best effort), created as ``subnet``

Per-record failures are collected in the returned ``SyncResult`` and never
abort the run; only a failed listing call does (``SyncError``).

Records whose cloud resource disappeared upstream are left untouched.
Each record is one read followed by one write with no compare-and-swap,
so two runs over the same provider at the same time can race on a CIDR.
"""
from __future__ import annotations

import ipaddress
import logging
from datetime import datetime, timezone
from typing import Callable, Protocol

from .base import (
    LOCATION_TYPE_CLOUD,
    CloudInfo,
    LeafSubnet,
    Network,
    ResourceType,
    SubnetRecord,
    SyncResult,
    Utilization,
)
from .context import Context
from .errors import SyncError

logger = logging.getLogger("cloud_providers.sync")


class SubnetNotFound(LookupError):
    """Raised by a repository when no subnet matches the lookup."""


class SubnetRepository(Protocol):
    """The inventory persistence boundary. Each call is independent."""

    def get_subnet_by_cidr(self, cidr: str) -> SubnetRecord:
        """Return the record for ``cidr`` or raise ``SubnetNotFound``."""
        ...

    def create_subnet(self, subnet: SubnetRecord) -> SubnetRecord: ...

    def update_subnet(self, subnet_id: str, subnet: SubnetRecord) -> SubnetRecord: ...

    def list_subnets(self, cloud_provider: str | None = None) -> list[SubnetRecord]: ...


class NetworkLister(Protocol):
    """Native listing calls for one provider account/region."""

    region: str

    def list_networks(self, ctx: Context) -> list[Network]: ...

    def list_leaf_subnets(self, ctx: Context) -> list[LeafSubnet]: ...

    def get_utilization(self, ctx: Context, subnet_id: str) -> float: ...

    def validate_credentials(self, ctx: Context) -> None: ...


def compute_utilization(cidr: str, available: int, reserved: int) -> float:
    """
    Percentage of addressable IPs in ``cidr`` that are in use.

    ``total = 2**(32 - prefix) - reserved``; ``used = total - available``.
    Returns 0.0 when ``total <= 0``.

    >>> compute_utilization("10.0.0.0/24", 251, 5)
    0.0
    """
    prefix = ipaddress.ip_network(cidr, strict=False).prefixlen
    total = (1 << (32 - prefix)) - reserved
    if total <= 0:
        return 0.0
    used = total - available
    return used / total * 100


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Reconciler:
    """
    Merge one provider's networks and subnets into the inventory.

    Args:
        provider_type: Value written to ``cloud_info.provider``, e.g. ``"aws"``.
        lister: Native listing collaborator for one account/region.
        repository: Inventory persistence.
        clock: Returns the current time; injectable for tests.
    """

    def __init__(
        self,
        provider_type: str,
        lister: NetworkLister,
        repository: SubnetRepository,
        clock: Callable[[], datetime] = _now,
    ):
        self.provider_type = provider_type
        self.lister = lister
        self.repository = repository
        self.clock = clock

    @property
    def region(self) -> str:
        return getattr(self.lister, "region", "")

    # ── Full sync ─────────────────────────────────────────────────────

    def sync_all(self, ctx: Context) -> SyncResult:
        """Parents then leaves. Raises ``SyncError`` if a listing call fails."""
        logger.info("Starting full %s synchronization for region: %s", self.provider_type, self.region)
        result = self.sync_networks(ctx)
        result.merge(self.sync_subnets(ctx))
        logger.info(
            "Completed %s synchronization for region %s: %s",
            self.provider_type,
            self.region,
            result.as_dict(),
        )
        return result

    # ── Step 1: parent networks ───────────────────────────────────────

    def sync_networks(self, ctx: Context) -> SyncResult:
        result = SyncResult()
        try:
            networks = self.lister.list_networks(ctx)
        except Exception as exc:
            raise SyncError("networks", self.provider_type, exc) from exc

        result.networks_found = len(networks)
        logger.info("Found %d networks in %s %s", len(networks), self.provider_type, self.region)

        for network in networks:
            ctx.raise_if_done()
            try:
                if self._find_by_cidr(network.cidr) is not None:
                    logger.debug("Network %s (%s) already in inventory, skipping", network.id, network.cidr)
                    result.skipped += 1
                    continue

                now = self.clock()
                self.repository.create_subnet(
                    SubnetRecord(
                        name=f"VPC-{network.name or network.id}",
                        cidr=network.cidr,
                        location=network.region,
                        location_type=LOCATION_TYPE_CLOUD,
                        cloud_info=CloudInfo(
                            provider=self.provider_type,
                            region=network.region,
                            resource_type=ResourceType.VPC,
                            vpc_id=network.id,
                        ),
                        tags=dict(network.tags),
                        created_at=now,
                        updated_at=now,
                    )
                )
                result.created += 1
                logger.info("Synchronized network %s (%s)", network.id, network.cidr)
            except Exception as exc:
                result.errors.append(f"network {network.id} ({network.cidr}): {exc}")
                logger.exception("Failed to create network %s in inventory", network.id)

        return result

    # ── Step 2: leaf subnets ──────────────────────────────────────────

    def sync_subnets(self, ctx: Context) -> SyncResult:
        result = SyncResult()
        try:
            subnets = self.lister.list_leaf_subnets(ctx)
        except Exception as exc:
            raise SyncError("subnets", self.provider_type, exc) from exc

        result.subnets_found = len(subnets)
        logger.info("Found %d subnets in %s %s", len(subnets), self.provider_type, self.region)

        for leaf in subnets:
            ctx.raise_if_done()
            try:
                existing = self._find_by_cidr(leaf.cidr)
                if existing is not None:
                    self._update_existing(existing, leaf)
                    result.updated += 1
                else:
                    self._create_leaf(ctx, leaf)
                    result.created += 1
            except Exception as exc:
                result.errors.append(f"subnet {leaf.id} ({leaf.cidr}): {exc}")
                logger.exception("Failed to synchronize subnet %s", leaf.id)

        return result

    def _update_existing(self, record: SubnetRecord, leaf: LeafSubnet) -> None:
        record.cloud_info = self._leaf_cloud_info(leaf)
        record.location = leaf.region
        record.location_type = LOCATION_TYPE_CLOUD
        record.updated_at = self.clock()

        parent = self.find_parent_network(leaf.parent_id)
        # A subnet spanning its whole VPC shares the VPC record's CIDR.
        if parent is not None and parent.id != record.id:
            record.parent_id = parent.id

        if leaf.tags:
            record.tags = dict(leaf.tags)

        self.repository.update_subnet(record.id, record)
        logger.info("Updated subnet %s (%s) with %s information", leaf.id, leaf.cidr, self.provider_type)

    def _create_leaf(self, ctx: Context, leaf: LeafSubnet) -> None:
        try:
            percent = self.lister.get_utilization(ctx, leaf.id)
        except Exception as exc:
            logger.warning("Failed to get utilization for subnet %s: %s", leaf.id, exc)
            percent = 0.0

        now = self.clock()
        parent = self.find_parent_network(leaf.parent_id)
        self.repository.create_subnet(
            SubnetRecord(
                name=leaf.name or leaf.id,
                cidr=leaf.cidr,
                location=leaf.region,
                location_type=LOCATION_TYPE_CLOUD,
                cloud_info=self._leaf_cloud_info(leaf),
                utilization=Utilization(utilization_percent=percent, last_updated=now),
                parent_id=parent.id if parent is not None else "",
                tags=dict(leaf.tags),
                created_at=now,
                updated_at=now,
            )
        )
        logger.info("Synchronized subnet %s (%s)", leaf.id, leaf.cidr)

    def _leaf_cloud_info(self, leaf: LeafSubnet) -> CloudInfo:
        return CloudInfo(
            provider=self.provider_type,
            region=leaf.region,
            resource_type=ResourceType.SUBNET,
            vpc_id=leaf.parent_id,
            subnet_id=leaf.id,
        )

    # ── Utilization refresh ───────────────────────────────────────────

    def update_utilization(self, ctx: Context) -> SyncResult:
        """Re-fetch utilization for every leaf subnet of this provider."""
        logger.info("Updating utilization for %s subnets in region: %s", self.provider_type, self.region)
        result = SyncResult()

        for record in self.repository.list_subnets(cloud_provider=self.provider_type):
            ctx.raise_if_done()
            info = record.cloud_info
            if info is None or not info.subnet_id:
                continue
            if self.region and info.region and info.region != self.region:
                continue

            try:
                percent = self.lister.get_utilization(ctx, info.subnet_id)
                now = self.clock()
                record.utilization = Utilization(utilization_percent=percent, last_updated=now)
                record.updated_at = now
                self.repository.update_subnet(record.id, record)
                result.updated += 1
                logger.info("Updated utilization for subnet %s: %.2f%%", info.subnet_id, percent)
            except Exception as exc:
                result.errors.append(f"subnet {info.subnet_id}: {exc}")
                logger.warning("Failed to update utilization for subnet %s: %s", info.subnet_id, exc)

        return result

    # ── Lookups ───────────────────────────────────────────────────────

    def find_parent_network(self, vpc_id: str) -> SubnetRecord | None:
        """The local vpc-typed record of this provider whose ``vpc_id`` matches."""
        if not vpc_id:
            return None
        for record in self.repository.list_subnets(cloud_provider=self.provider_type):
            info = record.cloud_info
            if info is not None and info.resource_type == ResourceType.VPC and info.vpc_id == vpc_id:
                return record
        return None

    def _find_by_cidr(self, cidr: str) -> SubnetRecord | None:
        try:
            return self.repository.get_subnet_by_cidr(cidr)
        except SubnetNotFound:
            return None
