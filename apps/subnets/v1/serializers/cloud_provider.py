"""Serializers for the cloud provider registry (not model-backed)."""
from rest_framework import serializers


class CloudProviderSerializer(serializers.Serializer):
    type = serializers.CharField(read_only=True)
    name = serializers.CharField(read_only=True)
    regions = serializers.ListField(child=serializers.CharField(), read_only=True)
    sync_configured = serializers.BooleanField(read_only=True)


class CredentialsSerializer(serializers.Serializer):
    """
    Credentials for one fetch. Never stored.

    ``provider_type`` defaults to the provider addressed by the URL.
    """

    provider_type = serializers.CharField(required=False, allow_blank=True, default="")
    access_key = serializers.CharField(required=False, allow_blank=True, default="")
    secret_key = serializers.CharField(required=False, allow_blank=True, default="", write_only=True)
    token = serializers.CharField(required=False, allow_blank=True, default="", write_only=True)
    region = serializers.CharField(required=False, allow_blank=True, default="")
    extra = serializers.DictField(child=serializers.CharField(), required=False, default=dict)


class FetchAllSerializer(serializers.Serializer):
    credentials = serializers.DictField(
        child=CredentialsSerializer(),
        help_text="Credentials keyed by provider type. Providers without an entry are skipped.",
    )


class CloudSubnetSerializer(serializers.Serializer):
    cidr = serializers.CharField()
    name = serializers.CharField()
    region = serializers.CharField()
    account_id = serializers.CharField()
    vpc_id = serializers.CharField()
    tags = serializers.DictField(child=serializers.CharField())
