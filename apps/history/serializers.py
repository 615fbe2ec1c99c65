from rest_framework import serializers
from .models import HistoryEntry, HistoryType


class HistoryEntrySerializer(serializers.ModelSerializer):
    """History row as returned to dashboards (camelCase keys)."""

    userId = serializers.UUIDField(source='user_id', read_only=True, allow_null=True)
    teamMember = serializers.CharField(source='team_member', read_only=True)
    clearanceId = serializers.CharField(source='clearance_id', read_only=True)

    class Meta:
        model = HistoryEntry
        fields = [
            'id',
            'type',
            'userId',
            'teamMember',
            'code',
            'country',
            'comments',
            'clearanceId',
            'date',
        ]
        read_only_fields = fields


class HistoryCreateSerializer(serializers.Serializer):
    """Input for POST /api/history/."""

    type = serializers.ChoiceField(choices=HistoryType.choices)
    code = serializers.CharField(max_length=10)
    userId = serializers.UUIDField(required=False, allow_null=True)
    teamMember = serializers.CharField(max_length=200, required=False, allow_blank=True)
    country = serializers.CharField(max_length=100, required=False, allow_blank=True)
    comments = serializers.CharField(required=False, allow_blank=True)
    clearanceId = serializers.CharField(max_length=100, required=False, allow_blank=True)
    date = serializers.DateTimeField(required=False, allow_null=True)


class HistoryFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for history listing.

    Query Parameters:
        type (str): generated, submitted or cleared
        userId (UUID): Only entries recorded for this user
        limit (int): Page size, clamped to the configured maximum;
            zero or non-numeric values fall back to the default
    """

    type = serializers.CharField(required=False, allow_blank=True)
    userId = serializers.UUIDField(required=False)
    limit = serializers.CharField(required=False, allow_blank=True)
