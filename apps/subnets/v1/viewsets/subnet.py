"""Subnet viewset: the IPAM subnet inventory.

Records are created by hand or by cloud synchronisation. Synced records
can be edited like any other; the next sync rewrites their cloud fields.
"""
from django_filters import rest_framework as filters
from rest_framework.viewsets import ModelViewSet

from apps.subnets.models import Subnet
from apps.subnets.v1.serializers import SubnetSerializer


class SubnetFilter(filters.FilterSet):
    cidr_contains = filters.CharFilter(field_name="cidr", lookup_expr="startswith")
    is_cloud = filters.BooleanFilter(method="filter_is_cloud")
    utilization_min = filters.NumberFilter(field_name="utilization_percent", lookup_expr="gte")
    utilization_max = filters.NumberFilter(field_name="utilization_percent", lookup_expr="lte")

    class Meta:
        model = Subnet
        fields = [
            "cidr",
            "location",
            "location_type",
            "cloud_provider",
            "cloud_region",
            "cloud_resource_type",
            "cloud_vpc_id",
            "parent",
        ]

    def filter_is_cloud(self, queryset, name, value):
        if value:
            return queryset.exclude(cloud_provider="")
        return queryset.filter(cloud_provider="")


class SubnetViewSet(ModelViewSet):
    queryset = Subnet.objects.select_related("parent").all()
    serializer_class = SubnetSerializer
    filterset_class = SubnetFilter
    search_fields = ["name", "cidr", "location", "cloud_vpc_id", "cloud_subnet_id"]
    ordering_fields = ["cidr", "name", "utilization_percent", "created_at", "updated_at"]
