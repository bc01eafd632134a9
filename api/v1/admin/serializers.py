"""
Serializers for Admin API endpoints.
"""

from rest_framework import serializers


class GenerateLicenseKeysRequestSerializer(serializers.Serializer):
    """Serializer for generate license keys request."""

    duration_days = serializers.IntegerField(required=True)
    quantity = serializers.IntegerField(required=False, default=1)
    created_by = serializers.CharField(required=False, allow_blank=True, default="", max_length=255)
    assigned_tenant_id = serializers.UUIDField(required=False, allow_null=True, default=None)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True, default=None)


class LicenseKeySerializer(serializers.Serializer):
    """Serializer for LicenseKeyDTO."""

    id = serializers.UUIDField()
    key_code = serializers.CharField()
    duration_days = serializers.IntegerField()
    status = serializers.CharField()
    assigned_tenant_id = serializers.UUIDField(allow_null=True)
    created_by = serializers.CharField()
    notes = serializers.CharField(allow_null=True)
    created_at = serializers.DateTimeField()


class GenerateLicenseKeysResponseSerializer(serializers.Serializer):
    """Serializer for generate license keys response."""

    keys = LicenseKeySerializer(many=True)
    count = serializers.IntegerField()


class LicenseKeyStatisticsSerializer(serializers.Serializer):
    """Serializer for LicenseKeyStatisticsDTO."""

    total = serializers.IntegerField()
    total_days = serializers.IntegerField()
    by_status = serializers.DictField(child=serializers.IntegerField())


class LicenseKeyListSerializer(serializers.Serializer):
    """Serializer for license key listings."""

    keys = LicenseKeySerializer(many=True)
    statistics = LicenseKeyStatisticsSerializer()


class RevokeLicenseKeyResponseSerializer(serializers.Serializer):
    """Serializer for revoke license key response."""

    id = serializers.UUIDField()
    key_code = serializers.CharField()
    status = serializers.CharField()
    already_revoked = serializers.BooleanField()
    ended_assignment_id = serializers.UUIDField(allow_null=True)


class ExpiringLicenseSerializer(serializers.Serializer):
    """Serializer for ExpiringLicenseDTO."""

    tenant_id = serializers.UUIDField()
    tenant_name = serializers.CharField()
    tenant_email = serializers.EmailField()
    key_code = serializers.CharField()
    expires_at = serializers.DateTimeField()
    days_until_expiry = serializers.IntegerField()
