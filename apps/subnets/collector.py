"""Collector: Django integration layer for cloud providers.

This module bridges the external ``cloud_providers`` package (which has
no Django dependency) with the subnet inventory.

It handles:
    - Registry initialization with Django settings filters
    - Building ``NetworkLister`` collaborators per provider and region
      from settings
    - Credential resolution from API payloads
    - Running a full sync or a utilization refresh for a ``SyncRun``

Provider plugins never import Django; the reconciler talks to the
database only through ``DjangoSubnetRepository``.
"""
from __future__ import annotations

import logging
from typing import Callable

from django.apps import apps as django_apps
from django.conf import settings

from cloud_providers import (
    Context,
    Credentials,
    NetworkLister,
    ProviderNotFound,
    ProviderRegistry,
    ProviderType,
    ProviderUnavailable,
    Reconciler,
    SyncError,
    SyncResult,
    build_default_registry,
)

from apps.subnets.repository import DjangoSubnetRepository

logger = logging.getLogger("apps.subnets.collector")


# ── Registry setup ────────────────────────────────────────────────────


def build_registry() -> ProviderRegistry:
    """
    Build a provider registry and apply the Django settings filters.

    Settings:
        CLOUD_PROVIDERS_DISABLED: list of provider types to unregister
    """
    registry = build_default_registry()
    registry.apply_filter(disabled=list(getattr(settings, "CLOUD_PROVIDERS_DISABLED", None) or []))
    return registry


def get_registry() -> ProviderRegistry:
    """The registry owned by the subnets app config."""
    return django_apps.get_app_config("subnets").registry


def cloud_enabled() -> bool:
    return bool(getattr(settings, "CLOUD_PROVIDERS_ENABLED", False))


# ── Network listers ───────────────────────────────────────────────────


def _aws_listers() -> list[NetworkLister]:
    from cloud_providers.aws_ec2 import Ec2NetworkLister

    if not getattr(settings, "CLOUD_AWS_ENABLED", False):
        return []

    timeout = getattr(settings, "CLOUD_PROVIDER_FETCH_TIMEOUT", 30)
    listers = []
    for entry in getattr(settings, "CLOUD_AWS_REGIONS", None) or []:
        region = entry.get("region", "")
        if not region:
            logger.warning("Skipping AWS region entry without a region: %s", entry)
            continue
        listers.append(
            Ec2NetworkLister(
                region,
                access_key_id=entry.get("access_key_id", ""),
                secret_access_key=entry.get("secret_access_key", ""),
                timeout=timeout,
            )
        )
    return listers


LISTER_FACTORIES: dict[str, Callable[[], list[NetworkLister]]] = {
    ProviderType.AWS: _aws_listers,
}
"""Provider types that support reconciliation, mapped to their lister factory."""


def get_listers(provider_type: str, region: str = "") -> list[NetworkLister]:
    """
    Build the listers configured for ``provider_type``, optionally one region.

    Raises:
        ProviderNotFound: If the provider is not registered.
        ProviderUnavailable: If the provider has no sync support or no
            configured region matches.
    """
    if provider_type not in get_registry():
        raise ProviderNotFound(provider_type)

    factory = LISTER_FACTORIES.get(provider_type)
    if factory is None:
        raise ProviderUnavailable(
            f"{provider_type} synchronization not yet implemented", provider_type=provider_type
        )

    listers = factory()
    if region:
        listers = [lister for lister in listers if lister.region == region]
    if not listers:
        where = f"region {region}" if region else "any region"
        raise ProviderUnavailable(
            f"no {provider_type} sync configured for {where}", provider_type=provider_type
        )
    return listers


def sync_configured(provider_type: str) -> bool:
    """Whether ``provider_type`` has at least one lister configured."""
    try:
        return bool(get_listers(provider_type))
    except (ProviderNotFound, ProviderUnavailable):
        return False


def configured_providers() -> list[str]:
    """Registered provider types with sync configured, sorted."""
    return [key for key in sorted(get_registry().list_providers()) if sync_configured(key)]


# ── Credential resolution ─────────────────────────────────────────────


def resolve_credentials(provider_type: str, data: dict) -> Credentials:
    """Build ``Credentials`` for ``provider_type`` from a validated payload."""
    return Credentials(
        provider_type=data.get("provider_type") or provider_type,
        access_key=data.get("access_key", ""),
        secret_key=data.get("secret_key", ""),
        token=data.get("token", ""),
        region=data.get("region", ""),
        extra=dict(data.get("extra") or {}),
    )


def fetch_context() -> Context:
    """Context bounded by ``CLOUD_PROVIDER_FETCH_TIMEOUT`` for on-demand fetches."""
    return Context(timeout=float(getattr(settings, "CLOUD_PROVIDER_FETCH_TIMEOUT", 30)))


# ── Sync execution ────────────────────────────────────────────────────


def _run_per_region(sync_run, operation: Callable[[Reconciler, Context], SyncResult], ctx: Context) -> SyncResult:
    listers = get_listers(sync_run.provider, sync_run.region)
    repository = DjangoSubnetRepository()
    result = SyncResult()
    failures: list[SyncError] = []

    for lister in listers:
        reconciler = Reconciler(sync_run.provider, lister, repository)
        try:
            result.merge(operation(reconciler, ctx))
        except SyncError as exc:
            logger.error("Sync of %s region %s failed: %s", sync_run.provider, lister.region, exc)
            failures.append(exc)
            result.errors.append(f"region {lister.region}: {exc}")

    if failures and len(failures) == len(listers):
        raise failures[0]
    return result


def run_sync(sync_run, ctx: Context | None = None) -> SyncResult:
    """
    Execute a full reconciliation for a ``SyncRun``.

    Every configured region of the run's provider is synced in turn (or
    only ``sync_run.region`` when set). A region whose listing fails is
    recorded in the result's errors; the run fails only when every
    region does.
    """
    logger.info("Running full sync of %s (run=%s)", sync_run.provider, sync_run.pk)
    return _run_per_region(sync_run, lambda r, c: r.sync_all(c), ctx or Context.background())


def run_utilization_refresh(sync_run, ctx: Context | None = None) -> SyncResult:
    """Refresh utilization of every linked cloud subnet of the run's provider."""
    logger.info("Refreshing utilization of %s (run=%s)", sync_run.provider, sync_run.pk)
    return _run_per_region(sync_run, lambda r, c: r.update_utilization(c), ctx or Context.background())
