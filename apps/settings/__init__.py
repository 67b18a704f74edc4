"""
This is the initialization for the apps.settings module.
don't declare settings here, declare the settings in one of
the following places:

Read Only (overridable)

- `ipam_service/settings.py` - Framework defaults

Editable:

- `apps/settings/defaults.py` - Defaults for the whole project
- `apps/core/settings.py` - Core settings
- `apps/subnets/settings.py` - Subnet inventory and cloud provider settings
- `apps/settings/{mode}.py` - Settings specific to the current `IPAM_SERVICE_MODE`
- `settings.local.py` - For local settings (git ignored)
- `/etc/ipam_service/settings.yaml` - for prod environment overrides
- `IPAM_SERVICE_` prefixed environment variables

Declaring Settings:

To merge with previously defined setting use any Dynaconf merging markers:

`@merge`, `@merge_unique`, `@insert` on string values and
`dynaconf_merge` or `dynaconf_merge_unique` on data structures.

Examples:

```python
INSTALLED_APPS = "@merge_unique new_app"
MIDDLEWARES = "@insert 1 my_second_middleware"
DATABASES__default__PORT = 1234
LOGGING__loggers = {
    "dynaconf_merge": True,
    "foobar": {...}
}
```

Cloud settings can be set from the environment, e.g.:

```
IPAM_SERVICE_CLOUD_PROVIDERS_ENABLED=true
IPAM_SERVICE_CLOUD_AWS_REGIONS='@json [{"region": "eu-west-1"}]'
```

"""

# Must be empty, declare your settings on a separate file.
