"""
URL configuration for ipam_service.

Loading order:

1. `apps/urls.py` - service-level and priority patterns
2. `apps/core/urls.py` - ping and health
3. `apps/subnets/urls.py` - the v1 API
"""

from django.urls import include, path

urlpatterns = [
    path("", include("apps.urls")),
    path("", include("apps.core.urls")),
    path("", include("apps.subnets.urls")),
]
