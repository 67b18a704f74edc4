"""Management command: run a cloud sync inline, without the dispatcher.

Usage:
    python manage.py sync_cloud_provider aws
    python manage.py sync_cloud_provider aws --region eu-west-1
    python manage.py sync_cloud_provider aws --utilization
"""
import json

from django.core.management.base import BaseCommand, CommandError

from cloud_providers import CloudProviderError

from apps.subnets import collector
from apps.subnets.models import SyncRun
from apps.subnets.tasks import run_sync, run_utilization_refresh


class Command(BaseCommand):
    help = "Synchronize one cloud provider into the subnet inventory and print the result."

    def add_arguments(self, parser):
        parser.add_argument("provider_type", help="Registered provider type, e.g. aws")
        parser.add_argument(
            "--region",
            default="",
            help="Only sync this region (default: every configured region).",
        )
        parser.add_argument(
            "--utilization",
            action="store_true",
            help="Refresh utilization of known subnets instead of a full sync.",
        )

    def handle(self, *args, **options):
        provider_type = options["provider_type"]
        region = options["region"]

        try:
            collector.get_listers(provider_type, region)
        except CloudProviderError as exc:
            raise CommandError(str(exc))

        if SyncRun.active_for(provider_type):
            raise CommandError(f"A sync is already in progress for {provider_type}.")

        kind = SyncRun.Kind.UTILIZATION if options["utilization"] else SyncRun.Kind.FULL
        run = SyncRun.objects.create(provider=provider_type, region=region, kind=kind)
        fn = run_utilization_refresh if options["utilization"] else run_sync

        result = fn(str(run.pk))
        run.refresh_from_db()

        self.stdout.write(json.dumps(result, indent=2))
        if run.status == SyncRun.Status.FAILED:
            raise CommandError(f"Sync run {run.pk} failed: {run.error_message}")
        style = self.style.SUCCESS if run.status == SyncRun.Status.COMPLETED else self.style.WARNING
        self.stdout.write(style(f"Sync run {run.pk} {run.status}"))
