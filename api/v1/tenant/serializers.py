"""
Serializers for Tenant API endpoints.
"""

from rest_framework import serializers


class ActivateLicenseRequestSerializer(serializers.Serializer):
    """Serializer for activate license request."""

    license_key = serializers.CharField(required=True, max_length=64, trim_whitespace=True)


class ActivationResultSerializer(serializers.Serializer):
    """Serializer for ActivationResultDTO."""

    tenant_id = serializers.UUIDField()
    license_key = serializers.CharField()
    duration_days = serializers.IntegerField()
    activated_at = serializers.DateTimeField()
    expires_at = serializers.DateTimeField()
    message = serializers.CharField()


class AccessStatusSerializer(serializers.Serializer):
    """Serializer for AccessStatusDTO."""

    tenant_id = serializers.UUIDField()
    status = serializers.CharField()
    is_valid = serializers.BooleanField()
    days_remaining = serializers.IntegerField()
    message = serializers.CharField()
    warning = serializers.BooleanField()
    expires_at = serializers.DateTimeField(allow_null=True)
