"""Cloud provider viewset: API over the cloud provider registry.

The registry lives in the ``cloud_providers`` package, which is external
to this Django app. This viewset exposes it through the REST API.

Endpoints:

    GET  /api/v1/cloud-providers/
        Registered providers and whether cloud sync is enabled.

    GET  /api/v1/cloud-providers/{type}/
        One provider.

    POST /api/v1/cloud-providers/{type}/fetch/
        Fetch the subnets visible to the posted credentials.

    POST /api/v1/cloud-providers/fetch-all/
        Fetch from every provider that has credentials in the body,
        concurrently.

    POST /api/v1/cloud-providers/{type}/sync/
    POST /api/v1/cloud-providers/{type}/utilization/
        Create a SyncRun and dispatch it to the dispatcherd worker.
"""
from __future__ import annotations

import logging

from django.utils import timezone
from dispatcherd.publish import submit_task
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from cloud_providers import (
    InvalidCredentials,
    OperationCancelled,
    ProviderNotFound,
    ProviderUnavailable,
)

from apps.subnets import collector
from apps.subnets.models import SyncRun
from apps.subnets.v1.serializers import (
    CloudProviderSerializer,
    CloudSubnetSerializer,
    CredentialsSerializer,
    FetchAllSerializer,
    SyncRequestSerializer,
    SyncRunSerializer,
)

logger = logging.getLogger("apps.subnets.views")


def error_response(exc: Exception) -> Response:
    """Map a cloud provider error to an HTTP response."""
    if isinstance(exc, ProviderNotFound):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, InvalidCredentials):
        code = status.HTTP_400_BAD_REQUEST
    elif isinstance(exc, OperationCancelled):
        code = status.HTTP_504_GATEWAY_TIMEOUT
    else:
        code = status.HTTP_503_SERVICE_UNAVAILABLE
    return Response({"detail": str(exc)}, status=code)


class CloudProviderViewSet(ViewSet):
    """
    API for the cloud provider registry.

    Provider data comes from the in-memory registry owned by the subnets
    app config (``apps.subnets.collector.get_registry()``).
    """

    lookup_field = "provider_type"
    lookup_value_regex = r"[a-zA-Z0-9_-]+"

    def _describe(self, provider) -> dict:
        key = provider.get_type()
        return {
            "type": key,
            "name": provider.get_name(),
            "regions": provider.get_regions(),
            "sync_configured": collector.sync_configured(key),
        }

    def list(self, request):
        """List registered providers with the cloud sync status."""
        registry = collector.get_registry()
        providers = [registry.get_provider(key) for key in sorted(registry.list_providers())]
        serializer = CloudProviderSerializer([self._describe(p) for p in providers], many=True)
        return Response({"enabled": collector.cloud_enabled(), "providers": serializer.data})

    def retrieve(self, request, provider_type=None):
        try:
            provider = collector.get_registry().get_provider(provider_type)
        except ProviderNotFound as exc:
            return error_response(exc)
        return Response(CloudProviderSerializer(self._describe(provider)).data)

    @action(detail=True, methods=["post"], url_path="fetch", url_name="fetch")
    def fetch(self, request, provider_type=None):
        """
        Fetch subnets from one provider with the posted credentials.

        Response: 200 with the subnet list; 404 for an unknown provider,
        400 for unusable credentials, 503 when the provider fails.
        """
        input_serializer = CredentialsSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)
        credentials = collector.resolve_credentials(provider_type, input_serializer.validated_data)

        registry = collector.get_registry()
        try:
            subnets = registry.fetch_subnets_from_provider(collector.fetch_context(), provider_type, credentials)
        except ProviderUnavailable as exc:
            # Surface credential problems as such, not as an outage.
            if isinstance(exc.cause, (InvalidCredentials, OperationCancelled)):
                return error_response(exc.cause)
            return error_response(exc)
        except ProviderNotFound as exc:
            return error_response(exc)

        return Response(
            {"provider": provider_type, "subnets": CloudSubnetSerializer(subnets, many=True).data}
        )

    @action(detail=False, methods=["post"], url_path="fetch-all", url_name="fetch-all")
    def fetch_all(self, request):
        """
        Fetch from every provider with credentials in the body.

        Response: 200 with ``results`` and ``errors`` keyed by provider type.
        """
        input_serializer = FetchAllSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)
        credentials_by_type = {
            key: collector.resolve_credentials(key, data)
            for key, data in input_serializer.validated_data["credentials"].items()
        }

        results, errors = collector.get_registry().fetch_subnets_from_all_providers(
            collector.fetch_context(), credentials_by_type
        )
        return Response(
            {
                "results": {
                    key: CloudSubnetSerializer(subnets, many=True).data
                    for key, subnets in sorted(results.items())
                },
                "errors": {key: str(exc) for key, exc in sorted(errors.items())},
            }
        )

    @action(detail=True, methods=["post"], url_path="sync", url_name="sync")
    def sync(self, request, provider_type=None):
        """
        Trigger an async full sync of this provider into the subnet inventory.

        Creates a SyncRun record in ``pending`` state, submits a dispatcherd
        task via pg_notify, and returns the run immediately so the caller
        can poll for status.

        Request body (optional):
            {"region": "us-east-1"}    // empty = every configured region

        Response: 202 Accepted with the SyncRun representation.
        """
        return self._dispatch(request, provider_type, SyncRun.Kind.FULL)

    @action(detail=True, methods=["post"], url_path="utilization", url_name="utilization")
    def utilization(self, request, provider_type=None):
        """Trigger an async utilization refresh. Same contract as ``sync``."""
        return self._dispatch(request, provider_type, SyncRun.Kind.UTILIZATION)

    def _dispatch(self, request, provider_type: str, kind: str) -> Response:
        if not collector.cloud_enabled():
            return Response(
                {"detail": "Cloud provider integration is disabled."},
                status=status.HTTP_503_SERVICE_UNAVAILABLE,
            )

        input_serializer = SyncRequestSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)
        region = input_serializer.validated_data["region"]

        try:
            collector.get_listers(provider_type, region)
        except (ProviderNotFound, ProviderUnavailable) as exc:
            return error_response(exc)

        # Check for an already-running sync of this provider
        active = SyncRun.active_for(provider_type)
        if active:
            return Response(
                {
                    "detail": "A sync is already in progress for this provider.",
                    "sync_run": SyncRunSerializer(active).data,
                },
                status=status.HTTP_409_CONFLICT,
            )

        run = SyncRun.objects.create(provider=provider_type, region=region, kind=kind)

        task_uuid = _submit_sync_task(run)
        if task_uuid:
            run.task_uuid = task_uuid
            run.save(update_fields=["task_uuid"])

        return Response(SyncRunSerializer(run).data, status=status.HTTP_202_ACCEPTED)


def _submit_sync_task(run: SyncRun) -> str:
    """Submit the sync task to dispatcherd.  Returns the task UUID or empty string."""
    from apps.subnets.tasks import run_sync, run_utilization_refresh

    fn = run_utilization_refresh if run.kind == SyncRun.Kind.UTILIZATION else run_sync
    try:
        body, _queue = submit_task(fn, kwargs={"sync_run_id": str(run.id)})
    except Exception:
        logger.exception("Failed to submit dispatcherd task for run %s, marking as failed", run.id)
        run.status = SyncRun.Status.FAILED
        run.completed_at = timezone.now()
        run.error_message = "Failed to submit task to dispatcherd. Is the dispatcher worker running?"
        run.save(update_fields=["status", "completed_at", "error_message"])
        return ""

    task_uuid = body.get("uuid", "")
    logger.info("Dispatched %s task %s for run %s", run.kind, task_uuid, run.id)
    return task_uuid
