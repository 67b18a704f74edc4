"""Router configuration for subnets v1 API."""
from rest_framework.routers import DefaultRouter

from apps.subnets.v1.viewsets import CloudProviderViewSet, SubnetViewSet, SyncRunViewSet

router = DefaultRouter()

router.register(r'subnets', SubnetViewSet, basename='subnet')
router.register(r'cloud-providers', CloudProviderViewSet, basename='cloudprovider')
router.register(r'sync-runs', SyncRunViewSet, basename='syncrun')
