"""Dispatcherd task definitions for cloud synchronisation."""
import logging
import traceback

import django
from django.conf import settings
from django.utils import timezone
from dispatcherd.publish import task

from cloud_providers import Context

from apps.subnets.dispatcher import SUBNETS_CHANNEL

logger = logging.getLogger('apps.subnets.tasks')


def _ensure_django():
    try:
        django.setup()
    except RuntimeError:
        pass


@task(queue=SUBNETS_CHANNEL)
def run_sync(sync_run_id: str) -> dict:
    """Execute a full cloud sync run as a background task."""
    from apps.subnets import collector

    return _execute(sync_run_id, collector.run_sync)


@task(queue=SUBNETS_CHANNEL)
def run_utilization_refresh(sync_run_id: str) -> dict:
    """Execute a utilization refresh run as a background task."""
    from apps.subnets import collector

    return _execute(sync_run_id, collector.run_utilization_refresh)


@task(queue=SUBNETS_CHANNEL)
def sync_all_providers() -> dict:
    """Periodic full sync of every provider with sync configured."""
    from apps.subnets import collector

    return _run_for_all_providers('full', collector.run_sync)


@task(queue=SUBNETS_CHANNEL)
def refresh_all_utilization() -> dict:
    """Periodic utilization refresh of every provider with sync configured."""
    from apps.subnets import collector

    return _run_for_all_providers('utilization', collector.run_utilization_refresh)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _run_for_all_providers(kind: str, operation) -> dict:
    _ensure_django()
    from apps.subnets import collector
    from apps.subnets.models import SyncRun

    if not collector.cloud_enabled():
        logger.info('Cloud providers disabled -- skipping periodic %s sync', kind)
        return {'skipped': True}

    outcome = {}
    for provider in collector.configured_providers():
        if SyncRun.active_for(provider) is not None:
            logger.info('Sync already in progress for %s -- skipping', provider)
            outcome[provider] = {'skipped': True}
            continue
        run = SyncRun.objects.create(provider=provider, kind=kind)
        outcome[provider] = _execute(str(run.pk), operation)
    return outcome


def _execute(sync_run_id: str, operation) -> dict:
    _ensure_django()
    from apps.subnets.models import SyncRun

    try:
        run = SyncRun.objects.get(pk=sync_run_id)
    except SyncRun.DoesNotExist:
        logger.error('SyncRun %s not found', sync_run_id)
        return {'error': f'SyncRun {sync_run_id} not found'}

    if run.is_terminal:
        logger.warning('SyncRun %s already %s -- skipping', run.pk, run.status)
        return {'skipped': True, 'status': run.status}

    run.status = SyncRun.Status.RUNNING
    run.save(update_fields=['status'])
    logger.info('Starting %s sync for provider %s (run=%s)', run.kind, run.provider, run.pk)

    try:
        result = operation(run, _run_context())
        run.record_result(result)
        run.status = SyncRun.Status.PARTIAL if result.errors else SyncRun.Status.COMPLETED
        run.completed_at = timezone.now()
        run.save(update_fields=[
            'status', 'completed_at', 'errors',
            'networks_found', 'subnets_found', 'subnets_created',
            'subnets_updated', 'subnets_skipped',
        ])
        logger.info('SyncRun %s %s: %s', run.pk, run.status, result.as_dict())
        return result.as_dict()
    except Exception as exc:
        run.status = SyncRun.Status.FAILED
        run.completed_at = timezone.now()
        run.error_message = str(exc)[:2000]
        run.result_traceback = traceback.format_exc()[:8000]
        run.save(update_fields=['status', 'completed_at', 'error_message', 'result_traceback'])
        logger.exception('SyncRun %s failed', run.pk)
        return {'error': str(exc)}


def _run_context() -> Context:
    """Deadline for a whole run. Settings: DISPATCHER_TASK_TIMEOUT (seconds, None for no limit)"""
    return Context(timeout=getattr(settings, 'DISPATCHER_TASK_TIMEOUT', None))
