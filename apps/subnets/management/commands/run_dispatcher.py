"""
Management command to start the dispatcherd background task service.

Usage:
    python manage.py run_dispatcher

This starts the asyncio-based dispatcherd service that listens on the
``ipam_tasks`` pg_notify channel, executes sync tasks in a subprocess
worker pool and, when cloud providers are enabled, schedules the
periodic full sync and utilization refresh.
"""

import logging

from django.core.management.base import BaseCommand
from dispatcherd import run_service
from dispatcherd.config import settings as dispatcher_settings

from apps.subnets.dispatcher import SUBNETS_CHANNEL, setup_dispatcher

logger = logging.getLogger("apps.subnets.dispatcher")


class Command(BaseCommand):
    help = "Start the dispatcherd background task worker for cloud synchronisation."

    def add_arguments(self, parser):
        parser.add_argument(
            "--max-workers",
            type=int,
            default=None,
            help="Override the maximum number of worker subprocesses (default: from config).",
        )

    def handle(self, *args, **options):
        # Normally already done by SubnetsConfig.ready()
        setup_dispatcher()

        if options["max_workers"]:
            dispatcher_settings.service["pool_kwargs"]["max_workers"] = options["max_workers"]

        # Force-import the tasks module so @task decorators register
        import apps.subnets.tasks  # noqa: F401

        self.stdout.write(self.style.SUCCESS(f"Starting dispatcherd worker for {SUBNETS_CHANNEL} channel..."))
        run_service()
