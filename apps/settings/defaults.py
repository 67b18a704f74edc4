"""
Top level settings file for all apps.

The settings here overrides any setting previously loaded
from the `ipam_service.settings`.
"""

extra_applications = [
    "django_filters",
]
"""Extra applications added after the project applications."""

project_applications = [
    "apps.core",
    "apps.subnets",
]
"""List of applications from the apps/ folder."""


INSTALLED_APPS = [
    "dynaconf_merge_unique",  # DO NOT REMOVE THIS
    *project_applications,
    *extra_applications,
]
"""Final state of the INSTALLED_APPS that will merge with the rest of the settings."""

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [
        "rest_framework.authentication.SessionAuthentication",
        "rest_framework.authentication.BasicAuthentication",
    ],
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.IsAuthenticated",
    ],
    "UNAUTHENTICATED_USER": None,
    "UNAUTHENTICATED_TOKEN": None,
    "DEFAULT_FILTER_BACKENDS": [
        "django_filters.rest_framework.DjangoFilterBackend",
        "rest_framework.filters.SearchFilter",
        "rest_framework.filters.OrderingFilter",
    ],
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
        "rest_framework.renderers.BrowsableAPIRenderer",
    ],
    "DEFAULT_PAGINATION_CLASS": "rest_framework.pagination.PageNumberPagination",
    "PAGE_SIZE": 25,
}
"""REST framework settings."""

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "default",
    },
}
CSRF_TRUSTED_ORIGINS = []

# Dispatcher configuration for dispatcherd (pg_notify broker)
# The conninfo string is overridden at runtime by apps/settings/database.py
# based on IPAM_SERVICE_DB_* environment variables.
DISPATCHER_CONFIG = {
    "version": 2,
    "service": {
        "main_kwargs": {"node_id": "ipam-service-a"},
        "process_manager_kwargs": {},
    },
    "brokers": {
        "pg_notify": {
            "config": {
                "conninfo": (
                    "dbname=ipam_db user=ipam password=ipam123 "
                    "host=127.0.0.1 port=5432 application_name=dispatcher_ipam_service"
                )
            },
            "sync_connection_factory": "dispatcherd.brokers.pg_notify.connection_saver",
            "channels": ["ipam_tasks"],
            "default_publish_channel": "ipam_tasks",
        },
        "socket": {"socket_path": "ipam_service_dispatcher.sock"},
    },
    "publish": {"default_control_broker": "socket", "default_broker": "pg_notify"},
}
