import ipaddress

from django.utils import timezone
from rest_framework import serializers

from apps.subnets.models import Subnet


class SubnetSerializer(serializers.ModelSerializer):
    cloud_info = serializers.SerializerMethodField()
    utilization = serializers.SerializerMethodField()

    class Meta:
        model = Subnet
        fields = [
            "id",
            "name",
            "cidr",
            "location",
            "location_type",
            "parent",
            "cloud_provider",
            "cloud_region",
            "cloud_account_id",
            "cloud_resource_type",
            "cloud_vpc_id",
            "cloud_subnet_id",
            "cloud_info",
            "utilization_percent",
            "utilization_total_ips",
            "utilization_allocated_ips",
            "utilization_updated_at",
            "utilization",
            "tags",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]

    def validate_cidr(self, value):
        try:
            return str(ipaddress.ip_network(value, strict=False))
        except ValueError as exc:
            raise serializers.ValidationError(str(exc))

    def validate_tags(self, value):
        if not isinstance(value, dict) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in value.items()
        ):
            raise serializers.ValidationError("Tags must be a mapping of strings to strings.")
        return value

    def validate_utilization_percent(self, value):
        if value is not None and not 0 <= value <= 100:
            raise serializers.ValidationError("Utilization must be between 0 and 100.")
        return value

    def validate(self, attrs):
        parent = attrs.get("parent")
        if parent is not None and self.instance is not None and parent.pk == self.instance.pk:
            raise serializers.ValidationError({"parent": "A subnet cannot be its own parent."})
        return attrs

    def update(self, instance, validated_data):
        validated_data["updated_at"] = timezone.now()
        return super().update(instance, validated_data)

    def get_cloud_info(self, obj) -> dict | None:
        if not obj.cloud_provider:
            return None
        return {
            "provider": obj.cloud_provider,
            "region": obj.cloud_region,
            "account_id": obj.cloud_account_id,
            "resource_type": obj.cloud_resource_type,
            "vpc_id": obj.cloud_vpc_id,
            "subnet_id": obj.cloud_subnet_id,
        }

    def get_utilization(self, obj) -> dict | None:
        if obj.utilization_percent is None:
            return None
        return {
            "utilization_percent": obj.utilization_percent,
            "total_ips": obj.utilization_total_ips,
            "allocated_ips": obj.utilization_allocated_ips,
            "last_updated": obj.utilization_updated_at,
        }
