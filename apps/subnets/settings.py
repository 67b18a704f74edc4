"""
Subnets app settings.

These are loaded by the dynaconf framework in the order defined in
ipam_service/settings.py. They can be overridden by environment variables
prefixed with IPAM_SERVICE_.

Example overrides:
    IPAM_SERVICE_CLOUD_PROVIDERS_ENABLED=true
    IPAM_SERVICE_CLOUD_SYNC_INTERVAL=600
    IPAM_SERVICE_CLOUD_PROVIDERS_DISABLED='@json ["ovh"]'
    IPAM_SERVICE_CLOUD_AWS_REGIONS='@json [{"region": "eu-west-1"}]'
"""

# Master switch for cloud synchronisation (API dispatch and periodic sync)
CLOUD_PROVIDERS_ENABLED = False

# Periodic full sync of every configured provider, in seconds
CLOUD_SYNC_INTERVAL = 300

# Periodic utilization refresh, in seconds
CLOUD_UTILIZATION_INTERVAL = 900

# Deadline for an on-demand subnet fetch through the API, in seconds
CLOUD_PROVIDER_FETCH_TIMEOUT = 30

# Provider types removed from the registry at startup, e.g. ["ovh"]
CLOUD_PROVIDERS_DISABLED = []

# AWS sync: one entry per region. Keys may be left empty to use the
# default boto3 credential chain (environment, instance role, IRSA).
# CLOUD_AWS_ENABLED turns AWS sync off without clearing the region list;
# it has no effect unless CLOUD_PROVIDERS_ENABLED is also set.
CLOUD_AWS_ENABLED = False
CLOUD_AWS_REGIONS = [
    # {"region": "us-east-1", "access_key_id": "", "secret_access_key": ""},
]

# Dispatcherd worker pool settings (used by apps/subnets/dispatcher.py)
DISPATCHER_MAX_WORKERS = 4
DISPATCHER_MIN_WORKERS = 1

# Deadline for a single sync or utilization run, in seconds
DISPATCHER_TASK_TIMEOUT = 3600
