"""
Production environment settings.

This file is loaded when IPAM_SERVICE_MODE=production and serves three purposes:

1. ZERO OUT SENSITIVE INFORMATION
   All sensitive settings (passwords, keys, secrets) are explicitly set to empty
   strings here, even if they already default to empty. These values MUST be
   provided via environment variables or external config.

2. SET PRODUCTION-APPROPRIATE DEFAULTS
   DEBUG is off and the browsable API is not rendered.

3. VALIDATE IMPORTANT SETTINGS
   Each critical setting has a corresponding Dynaconf Validator that runs at
   startup. If any required setting is missing or invalid, the application
   will fail to start with a clear error message.

Usage:
   export IPAM_SERVICE_MODE=production
   export IPAM_SERVICE_SECRET_KEY=your-secret-key
   export IPAM_SERVICE_DB_HOST=postgres.example.com
   export IPAM_SERVICE_DB_PASSWORD=your-db-password
   python manage.py runserver

Validators are registered in ipam_service/settings.py right after loading.
"""

from dynaconf import Validator

validators = []

# =============================================================================
# Django Core
# =============================================================================

DEBUG = False
validators.append(
    Validator(
        "DEBUG",
        eq=False,
        messages={"operations": "DEBUG must be False in production."},
    ),
)

SECRET_KEY = ""
validators.append(
    Validator(
        "SECRET_KEY",
        must_exist=True,
        ne="",
        messages={"operations": "SECRET_KEY must be set and not empty."},
    ),
)

REST_FRAMEWORK__DEFAULT_RENDERER_CLASSES = [
    "rest_framework.renderers.JSONRenderer",
]

# =============================================================================
# Database Credentials
# =============================================================================

DB_HOST = ""
validators.append(
    Validator(
        "DB_HOST",
        must_exist=True,
        ne="",
        messages={"operations": "DB_HOST must be set."},
    ),
)

DB_PASSWORD = ""
validators.append(
    Validator(
        "DB_PASSWORD",
        must_exist=True,
        ne="",
        messages={"operations": "DB_PASSWORD must be set."},
    ),
)

# =============================================================================
# Cloud Providers
# =============================================================================

validators.append(
    Validator(
        "CLOUD_SYNC_INTERVAL",
        "CLOUD_UTILIZATION_INTERVAL",
        "CLOUD_PROVIDER_FETCH_TIMEOUT",
        gt=0,
        is_type_of=int,
        messages={"operations": "{name} must be a positive number of seconds."},
    ),
)
validators.append(
    Validator(
        "CLOUD_AWS_REGIONS",
        condition=lambda regions: all(r.get("region") for r in regions),
        when=Validator("CLOUD_AWS_ENABLED", eq=True),
        messages={"condition": "Every CLOUD_AWS_REGIONS entry needs a 'region'."},
    ),
)
