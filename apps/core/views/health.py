from django.conf import settings
from django.db import connections
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView


class HealthView(APIView):
    """
    Health check endpoint to verify service health.

    Checks database connectivity and reports whether cloud provider
    synchronisation is enabled along with the registered provider types.
    """

    permission_classes = [AllowAny]
    authentication_classes = []

    def get(self, request):
        health_status: dict = {"status": "healthy", "checks": {}}

        # Database check
        for alias in getattr(settings, "HEALTH_CHECK_DATABASES", ["default"]):
            key = "database" if alias == "default" else f"database:{alias}"
            try:
                connections[alias].ensure_connection()
                health_status["checks"][key] = "ok"
            except Exception as e:
                health_status["status"] = "unhealthy"
                health_status["checks"][key] = f"error: {str(e)}"

        # Cloud providers are informational, they never make the service unhealthy
        from apps.subnets.collector import get_registry

        health_status["checks"]["cloud_providers"] = {
            "enabled": bool(getattr(settings, "CLOUD_PROVIDERS_ENABLED", False)),
            "registered": sorted(get_registry().list_providers()),
        }

        http_status = (
            status.HTTP_200_OK if health_status["status"] == "healthy" else status.HTTP_503_SERVICE_UNAVAILABLE
        )

        return Response(health_status, status=http_status)
