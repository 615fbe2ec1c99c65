from rest_framework import serializers

from apps.accounts.models import UserType
from .models import TicketPool


# =============================================================================
# Input Serializers
# =============================================================================

class ImportItemSerializer(serializers.Serializer):
    """One code to import. Format is checked by the allocator, not here."""

    code = serializers.CharField(allow_blank=True)
    pool = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class ImportRequestSerializer(serializers.Serializer):
    items = ImportItemSerializer(many=True, required=False)


class DeleteRequestSerializer(serializers.Serializer):
    codes = serializers.ListField(
        child=serializers.CharField(allow_blank=True),
        required=False
    )


class ClaimNextRequestSerializer(serializers.Serializer):
    """
    Input for POST /api/tickets/next/.

    Fields:
        userType (str): HSV or OSV; defaults to the claimant's own type
        userId (UUID): Claim on behalf of another user (admins only)
        teamMember (str): Name recorded in the history log
        country (str): Country recorded in the history log
    """

    userType = serializers.ChoiceField(choices=UserType.choices, required=False)
    userId = serializers.UUIDField(required=False, allow_null=True)
    teamMember = serializers.CharField(max_length=200, required=False, allow_blank=True)
    country = serializers.CharField(max_length=100, required=False, allow_blank=True)


class ConsumeRequestSerializer(serializers.Serializer):
    code = serializers.CharField(allow_blank=True)
    userId = serializers.UUIDField(required=False, allow_null=True)


class AppendRequestSerializer(serializers.Serializer):
    code = serializers.CharField(allow_blank=True)
    teamMember = serializers.CharField(max_length=200, required=False, allow_blank=True)
    comments = serializers.CharField(required=False, allow_blank=True)
    clearanceId = serializers.CharField(max_length=100, required=False, allow_blank=True)


class CountFilterSerializer(serializers.Serializer):
    pool = serializers.ChoiceField(choices=TicketPool.choices, required=False)


class CsvUploadSerializer(serializers.Serializer):
    file = serializers.FileField()


# =============================================================================
# Output Serializers
# =============================================================================

class PoolCountsSerializer(serializers.Serializer):
    HSV = serializers.IntegerField()
    OSV = serializers.IntegerField()
    Common = serializers.IntegerField()


class PoolCodesSerializer(serializers.Serializer):
    HSV = serializers.ListField(child=serializers.CharField())
    OSV = serializers.ListField(child=serializers.CharField())
    Common = serializers.ListField(child=serializers.CharField())


class AvailableResponseSerializer(serializers.Serializer):
    available = serializers.ListField(child=serializers.CharField())
    counts = PoolCountsSerializer()
    byPool = PoolCodesSerializer()


class ClaimNextResponseSerializer(serializers.Serializer):
    code = serializers.CharField()
    pool = serializers.CharField()
    availableCount = serializers.IntegerField()


class ConsumeResponseSerializer(serializers.Serializer):
    removed = serializers.BooleanField()
    availableCount = serializers.IntegerField()
    reason = serializers.CharField(required=False)


class AppendResponseSerializer(serializers.Serializer):
    added = serializers.BooleanField()
    availableCount = serializers.IntegerField()
    reason = serializers.CharField(required=False)


class ErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField()
