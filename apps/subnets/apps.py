import logging

from django.apps import AppConfig

logger = logging.getLogger("apps.subnets")


class SubnetsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.subnets"
    label = "subnets"
    verbose_name = "Subnet Inventory"

    registry = None
    """The process's ``ProviderRegistry``, built from settings in ``ready()``."""

    def ready(self):
        from apps.subnets.collector import build_registry
        from apps.subnets.dispatcher import setup_dispatcher

        self.registry = build_registry()

        # Configure dispatcherd so that both the web process (publisher)
        # and the worker process use the same pg_notify settings.
        setup_dispatcher()
