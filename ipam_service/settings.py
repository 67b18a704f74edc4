"""
Django settings for ipam_service.

Framework defaults live here. Everything else is layered on top by
Dynaconf, see `apps/settings/__init__.py` for the loading order and
the merging markers available to the settings files.
"""

import os
import sys
from pathlib import Path

import dynaconf

BASE_DIR = Path(__file__).resolve().parent.parent

SERVICE_NAME = "ipam_service"
MODE = os.environ.get("IPAM_SERVICE_MODE", "development")

SECRET_KEY = "django-insecure-change-me"
DEBUG = False
ALLOWED_HOSTS = ["*"]

INSTALLED_APPS = [
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "rest_framework",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "ipam_service.urls"
WSGI_APPLICATION = "ipam_service.wsgi.application"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "db.sqlite3",
    }
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True
STATIC_URL = "static/"

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "%(asctime)s %(levelname)s %(name)s %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": "INFO",
    },
    "loggers": {
        "django": {"handlers": ["console"], "level": "INFO", "propagate": False},
        "ipam_service": {"handlers": ["console"], "level": "INFO", "propagate": False},
        "cloud_providers": {"handlers": ["console"], "level": "INFO", "propagate": False},
        "apps": {"handlers": ["console"], "level": "INFO", "propagate": False},
    },
}

# Dynaconf: load the layered settings files and IPAM_SERVICE_ env vars.
# Keep this block at the bottom of the file.
DYNACONF = dynaconf.DjangoDynaconf(
    __name__,
    ENVVAR_PREFIX_FOR_DYNACONF="IPAM_SERVICE",
    ENVIRONMENTS_FOR_DYNACONF=False,
    LOAD_DOTENV_FOR_DYNACONF=False,
    ROOT_PATH_FOR_DYNACONF=str(BASE_DIR),
    SETTINGS_FILE_FOR_DYNACONF=[
        "apps/settings/defaults.py",
        "apps/core/settings.py",
        "apps/subnets/settings.py",
        f"apps/settings/{MODE}.py",
        "settings.local.py",
        "/etc/ipam_service/settings.yaml",
    ],
)

if MODE == "production":
    from apps.settings.production import validators

    DYNACONF.validators.register(*validators)
    DYNACONF.validators.validate()

if DYNACONF.get("DB_HOST"):
    from apps.settings.database import override_database_settings

    override_database_settings(DYNACONF)
    DYNACONF.populate_obj(sys.modules[__name__])
