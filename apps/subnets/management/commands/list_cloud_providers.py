"""Management command: list registered cloud providers.

Usage:
    python manage.py list_cloud_providers
    python manage.py list_cloud_providers --regions
    python manage.py list_cloud_providers --format=json
    python manage.py list_cloud_providers --format=yml
"""
from __future__ import annotations

import json

import yaml
from django.core.management.base import BaseCommand

from apps.subnets import collector


class Command(BaseCommand):
    help = "List registered cloud providers and whether sync is configured for them"

    def add_arguments(self, parser):
        parser.add_argument(
            "--regions",
            action="store_true",
            help="Show the full region list of each provider",
        )
        parser.add_argument(
            "--format",
            choices=["text", "json", "yml"],
            default="text",
            help="Output format (default: text)",
        )

    def handle(self, **options):
        providers = collector.get_registry().describe()
        for info in providers:
            info["sync_configured"] = collector.sync_configured(info["type"])

        if options["format"] == "json":
            self.stdout.write(json.dumps(providers, indent=2))
            return
        if options["format"] == "yml":
            self.stdout.write(yaml.safe_dump(providers, default_flow_style=False, sort_keys=False))
            return

        if not providers:
            self.stdout.write(self.style.WARNING("No cloud providers registered."))
            return

        enabled = "enabled" if collector.cloud_enabled() else "disabled"
        self.stdout.write(self.style.MIGRATE_HEADING(
            f"Registered Cloud Providers ({len(providers)}), cloud sync {enabled}"
        ))
        for info in providers:
            self._print_provider(info, show_regions=options["regions"])

    def _print_provider(self, info: dict, show_regions: bool = False):
        self.stdout.write(self.style.SUCCESS(f"\n  {info['name']}  [{info['type']}]"))
        self.stdout.write(f"  Regions: {len(info['regions'])}")
        if show_regions:
            self.stdout.write(f"    {', '.join(info['regions'])}")
        if info["sync_configured"]:
            self.stdout.write(self.style.SUCCESS("  Sync: configured"))
        else:
            self.stdout.write("  Sync: not configured")
