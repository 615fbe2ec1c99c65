from rest_framework import status, serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.accounts.models import User

from .serializers import (
    HistoryEntrySerializer,
    HistoryCreateSerializer,
    HistoryFilterSerializer,
)
from .services import record_entry, list_entries


class HistoryListResponseSerializer(serializers.Serializer):
    items = HistoryEntrySerializer(many=True)


class HistoryCreatedResponseSerializer(serializers.Serializer):
    id = serializers.CharField()


def _list_history(request):
    filter_serializer = HistoryFilterSerializer(data=request.query_params)
    filter_serializer.is_valid(raise_exception=True)
    params = filter_serializer.validated_data

    entries = list_entries(
        entry_type=params.get('type') or None,
        user_id=params.get('userId'),
        limit=params.get('limit'),
    )
    return Response({'items': HistoryEntrySerializer(entries, many=True).data})


def _add_history(request):
    serializer = HistoryCreateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    user = None
    if data.get('userId'):
        user = User.objects.filter(id=data['userId']).first()
        if user is None:
            return Response({'error': 'unknown_user'}, status=status.HTTP_400_BAD_REQUEST)

    entry = record_entry(
        entry_type=data['type'],
        code=data['code'],
        user=user,
        team_member=data.get('teamMember', ''),
        country=data.get('country', ''),
        comments=data.get('comments', ''),
        clearance_id=data.get('clearanceId', ''),
        date=data.get('date'),
    )
    return Response({'id': str(entry.id)}, status=status.HTTP_201_CREATED)


@extend_schema(
    methods=['GET'],
    parameters=[
        OpenApiParameter('type', str, description='generated, submitted or cleared'),
        OpenApiParameter('userId', str, description='Filter by user ID'),
        OpenApiParameter('limit', int, description='Maximum rows (default 100, max 500)'),
    ],
    responses={200: HistoryListResponseSerializer},
    description="List history entries newest-first.",
    tags=['history'],
)
@extend_schema(
    methods=['POST'],
    request=HistoryCreateSerializer,
    responses={201: HistoryCreatedResponseSerializer},
    description="Append a history entry. Date defaults to now.",
    tags=['history'],
)
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def history(request):
    """List or append history entries."""
    if request.method == 'POST':
        return _add_history(request)
    return _list_history(request)
