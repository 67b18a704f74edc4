"""
Dispatcherd configuration for the ipam-service.

Builds the dispatcherd config from the ``DISPATCHER_CONFIG`` setting
(whose pg_notify conninfo ``apps/settings/database.py`` derives from
the DB_* settings) plus the worker pool and schedule settings of this
app. The pg_notify channel ``ipam_tasks`` is used for all sync dispatch.

When cloud providers are enabled, dispatcherd's ``ScheduledProducer``
submits the periodic full sync every ``CLOUD_SYNC_INTERVAL`` seconds and
the utilization refresh every ``CLOUD_UTILIZATION_INTERVAL`` seconds.

Usage:
    Called once from SubnetsConfig.ready() so that both the web process
    (publisher) and the dispatcher worker process share the same config.

    # Publishing a task (from a viewset or management command):
    from dispatcherd.publish import submit_task
    from apps.subnets.tasks import run_sync
    submit_task(run_sync, kwargs={"sync_run_id": str(run.id)})
"""

import copy
import logging

from django.conf import settings
from dispatcherd.config import is_setup, setup

logger = logging.getLogger("apps.subnets.dispatcher")

SUBNETS_CHANNEL = "ipam_tasks"

SYNC_ALL_TASK = "apps.subnets.tasks.sync_all_providers"
REFRESH_UTILIZATION_TASK = "apps.subnets.tasks.refresh_all_utilization"


def get_task_schedule() -> dict:
    """Periodic tasks for the ScheduledProducer, empty when cloud sync is off."""
    if not getattr(settings, "CLOUD_PROVIDERS_ENABLED", False):
        return {}
    return {
        SYNC_ALL_TASK: {"schedule": int(settings.CLOUD_SYNC_INTERVAL)},
        REFRESH_UTILIZATION_TASK: {"schedule": int(settings.CLOUD_UTILIZATION_INTERVAL)},
    }


def get_dispatcher_config() -> dict:
    """Return the full dispatcherd config dictionary."""
    config = copy.deepcopy(dict(settings.DISPATCHER_CONFIG))

    pg_notify = config["brokers"]["pg_notify"]
    pg_notify["channels"] = [SUBNETS_CHANNEL]
    pg_notify["default_publish_channel"] = SUBNETS_CHANNEL
    pg_notify.setdefault("max_connection_idle_seconds", 30)

    config.setdefault("service", {})["pool_kwargs"] = {
        "min_workers": getattr(settings, "DISPATCHER_MIN_WORKERS", 1),
        "max_workers": getattr(settings, "DISPATCHER_MAX_WORKERS", 4),
    }

    producers = {"ControlProducer": {}}
    schedule = get_task_schedule()
    if schedule:
        producers["ScheduledProducer"] = {"task_schedule": schedule}
    config["producers"] = producers
    return config


def setup_dispatcher() -> None:
    """Configure dispatcherd from Django settings.  Safe to call multiple times."""
    if is_setup():
        return

    config = get_dispatcher_config()
    setup(config)
    logger.info(
        "dispatcherd configured: channel=%s scheduled=%s",
        SUBNETS_CHANNEL,
        ", ".join(config["producers"].get("ScheduledProducer", {}).get("task_schedule", {})) or "none",
    )
