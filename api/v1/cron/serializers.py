"""
Serializers for Cron API endpoints.
"""

from rest_framework import serializers


class RunReminderScanRequestSerializer(serializers.Serializer):
    """Serializer for the reminder scan trigger."""

    dry_run = serializers.BooleanField(required=False, default=False)


class ReminderScanResultSerializer(serializers.Serializer):
    """Serializer for ReminderScanResultDTO."""

    total_checked = serializers.IntegerField()
    sent = serializers.IntegerField()
    failed = serializers.IntegerField()
    skipped = serializers.IntegerField()
    dry_run = serializers.BooleanField()


class RunReminderScanResponseSerializer(serializers.Serializer):
    """Serializer for the reminder scan response."""

    success = serializers.BooleanField()
    message = serializers.CharField()
    result = ReminderScanResultSerializer()
    purged = serializers.IntegerField()
