"""Database configuration hook for the IPAM service.

This module provides the `override_database_settings` function that maps
simple DB_* settings (loaded by Dynaconf from IPAM_SERVICE_DB_* env vars)
into Django's DATABASES dict with PostgreSQL as the backend.

Loading order (in ipam_service/settings.py):
  1. Framework defaults define DATABASES with a sqlite3 fallback
  2. Dynaconf loads IPAM_SERVICE_DB_* env vars as DB_HOST, DB_PORT, etc.
  3. When DB_HOST is set, this function constructs DATABASES["default"]
     from those DB_* settings, switching the engine to PostgreSQL, and
     points the dispatcherd pg_notify broker at the same database.

Environment variables:
  IPAM_SERVICE_DB_HOST         (enables PostgreSQL)
  IPAM_SERVICE_DB_PORT         (default: 5432)
  IPAM_SERVICE_DB_NAME         (default: ipam_db)
  IPAM_SERVICE_DB_USER         (default: ipam)
  IPAM_SERVICE_DB_PASSWORD     (required in production)
  IPAM_SERVICE_DB_SSLMODE      (default: allow)
  IPAM_SERVICE_DB_SSLCERT      (default: "")
  IPAM_SERVICE_DB_SSLKEY       (default: "")
  IPAM_SERVICE_DB_SSLROOTCERT  (default: "")
"""

from dynaconf import Dynaconf


def build_conninfo(loaded_settings: Dynaconf, application_name: str) -> str:
    """libpq connection string for the configured database."""
    parts = [
        f"dbname={loaded_settings.get('DB_NAME', 'ipam_db')}",
        f"user={loaded_settings.get('DB_USER', 'ipam')}",
    ]
    password = loaded_settings.get("DB_PASSWORD", "")
    if password:
        parts.append(f"password={password}")
    parts.append(f"host={loaded_settings.get('DB_HOST', '127.0.0.1')}")
    parts.append(f"port={loaded_settings.get('DB_PORT', 5432)}")
    parts.append(f"application_name={application_name}")
    return " ".join(parts)


def override_database_settings(loaded_settings: Dynaconf) -> None:
    """Build PostgreSQL DATABASES from DB_* settings loaded by Dynaconf."""
    databases = loaded_settings.get("DATABASES", {})

    pg_options = {
        "sslmode": loaded_settings.get("DB_SSLMODE", default="allow"),
        "sslcert": loaded_settings.get("DB_SSLCERT", default=""),
        "sslkey": loaded_settings.get("DB_SSLKEY", default=""),
        "sslrootcert": loaded_settings.get("DB_SSLROOTCERT", default=""),
    }

    databases["default"] = {
        "ENGINE": "django.db.backends.postgresql",
        "HOST": loaded_settings.get("DB_HOST", "127.0.0.1"),
        "PORT": loaded_settings.get("DB_PORT", 5432),
        "USER": loaded_settings.get("DB_USER", "ipam"),
        "PASSWORD": loaded_settings.get("DB_PASSWORD", ""),
        "NAME": loaded_settings.get("DB_NAME", "ipam_db"),
        "OPTIONS": pg_options,
    }

    config = loaded_settings.get("DISPATCHER_CONFIG", None)
    if config and "brokers" in config and "pg_notify" in config["brokers"]:
        app_name = loaded_settings.get("DB_APP_NAME", "dispatcher_ipam_service")
        config["brokers"]["pg_notify"]["config"].update(
            {"conninfo": build_conninfo(loaded_settings, app_name)}
        )
        dispatcher_node_id = loaded_settings.get("DISPATCHER_NODE_ID", default="")
        if dispatcher_node_id:
            config["service"]["main_kwargs"]["node_id"] = dispatcher_node_id
        loaded_settings.update(
            {"DATABASES": databases, "DISPATCHER_CONFIG": config},
            loader_identifier="settings:override_database_settings",
        )
    else:
        loaded_settings.update(
            {"DATABASES": databases},
            loader_identifier="settings:override_database_settings",
        )
