from rest_framework import status, serializers
from rest_framework.decorators import api_view, permission_classes, parser_classes
from rest_framework.parsers import MultiPartParser, FormParser
from rest_framework.permissions import IsAdminUser, IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, inline_serializer

from apps.accounts.models import User

from .serializers import (
    ImportRequestSerializer,
    DeleteRequestSerializer,
    ClaimNextRequestSerializer,
    ConsumeRequestSerializer,
    AppendRequestSerializer,
    CountFilterSerializer,
    CsvUploadSerializer,
    AvailableResponseSerializer,
    ClaimNextResponseSerializer,
    ConsumeResponseSerializer,
    AppendResponseSerializer,
    ErrorResponseSerializer,
)
from .services import (
    import_tickets,
    delete_tickets,
    claim_next,
    claim_ticket,
    return_ticket,
    count_available,
    list_available,
    list_assigned,
    preferred_pools_for,
    is_valid_code,
    parse_ticket_csv,
    # Exceptions
    InvalidCodeFormatError,
    NotAvailableError,
    UnknownCodeError,
    NoTicketsAvailableError,
)


def _error(code, http_status):
    return Response({'error': code}, status=http_status)


def _resolve_claimant(request, user_id):
    """
    Return the user a claim is made for.

    Team users always claim for themselves; admins may name another user.
    Returns a Response instead when the request is not allowed.
    """
    if not user_id or user_id == request.user.id:
        return request.user
    if not request.user.is_staff:
        return _error('forbidden', status.HTTP_403_FORBIDDEN)

    user = User.objects.filter(id=user_id).first()
    if user is None:
        return _error('unknown_user', status.HTTP_400_BAD_REQUEST)
    return user


@extend_schema(
    request=ImportRequestSerializer,
    responses={
        200: inline_serializer('ImportResponse', {'inserted': serializers.IntegerField()}),
        400: ErrorResponseSerializer,
    },
    description="Insert codes as available. Existing codes are left untouched.",
    tags=['tickets'],
)
@api_view(['POST'])
@permission_classes([IsAdminUser])
def import_codes(request):
    """Bulk import codes (admin)."""
    serializer = ImportRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    items = serializer.validated_data.get('items') or []
    if not items:
        return _error('no_items', status.HTTP_400_BAD_REQUEST)
    if not any(is_valid_code(item['code']) for item in items):
        return _error('no_valid_items', status.HTTP_400_BAD_REQUEST)

    inserted = import_tickets(items=[(item['code'], item.get('pool')) for item in items])
    return Response({'inserted': inserted})


@extend_schema(
    request={'multipart/form-data': CsvUploadSerializer},
    responses={
        200: inline_serializer('CsvImportResponse', {
            'parsed': serializers.IntegerField(),
            'inserted': serializers.IntegerField(),
        }),
        400: ErrorResponseSerializer,
    },
    description="Import codes from a CSV file with one `code,pool` row per line.",
    tags=['tickets'],
)
@api_view(['POST'])
@permission_classes([IsAdminUser])
@parser_classes([MultiPartParser, FormParser])
def import_csv(request):
    """Bulk import codes from an uploaded CSV file (admin)."""
    serializer = CsvUploadSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        text = serializer.validated_data['file'].read().decode('utf-8-sig')
    except UnicodeDecodeError:
        return _error('invalid_file', status.HTTP_400_BAD_REQUEST)

    rows = parse_ticket_csv(text)
    if not rows:
        return _error('no_valid_items', status.HTTP_400_BAD_REQUEST)

    inserted = import_tickets(items=rows)
    return Response({'parsed': len(rows), 'inserted': inserted})


@extend_schema(
    request=DeleteRequestSerializer,
    responses={
        200: inline_serializer('DeleteResponse', {'deleted': serializers.IntegerField()}),
        400: ErrorResponseSerializer,
    },
    description="Delete codes that are currently available. Used codes are skipped.",
    tags=['tickets'],
)
@api_view(['POST'])
@permission_classes([IsAdminUser])
def delete_codes(request):
    """Delete available codes (admin)."""
    serializer = DeleteRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    codes = serializer.validated_data.get('codes') or []
    if not codes:
        return _error('no_codes', status.HTTP_400_BAD_REQUEST)

    return Response({'deleted': delete_tickets(codes=codes)})


@extend_schema(
    request=ClaimNextRequestSerializer,
    responses={
        200: ClaimNextResponseSerializer,
        404: ErrorResponseSerializer,
    },
    description="Claim the next available code, Common pool first, then the user's own pool.",
    tags=['tickets'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def next_code(request):
    """Claim the next available code."""
    serializer = ClaimNextRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    claimant = _resolve_claimant(request, data.get('userId'))
    if isinstance(claimant, Response):
        return claimant

    user_type = data.get('userType') or claimant.user_type

    try:
        ticket = claim_next(
            preferred_pools=preferred_pools_for(user_type),
            claimant=claimant,
            team_member=data.get('teamMember', ''),
            country=data.get('country', ''),
        )
    except NoTicketsAvailableError:
        return _error('no_tickets_available', status.HTTP_404_NOT_FOUND)

    return Response({
        'code': ticket.code,
        'pool': ticket.pool,
        'availableCount': count_available(),
    })


@extend_schema(
    request=ConsumeRequestSerializer,
    responses={
        200: ConsumeResponseSerializer,
        400: ErrorResponseSerializer,
    },
    description="Mark a specific code as used if it is available.",
    tags=['tickets'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def consume_code(request):
    """Claim a specific code."""
    serializer = ConsumeRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    claimant = _resolve_claimant(request, data.get('userId'))
    if isinstance(claimant, Response):
        return claimant

    try:
        claim_ticket(code=data['code'], claimant=claimant)
    except InvalidCodeFormatError:
        return _error('invalid_code', status.HTTP_400_BAD_REQUEST)
    except NotAvailableError:
        return Response({
            'removed': False,
            'reason': 'not_in_available',
            'availableCount': count_available(),
        })
    except UnknownCodeError:
        return Response({
            'removed': False,
            'reason': 'unknown_code',
            'availableCount': count_available(),
        })

    return Response({'removed': True, 'availableCount': count_available()})


@extend_schema(
    request=AppendRequestSerializer,
    responses={
        200: AppendResponseSerializer,
        400: ErrorResponseSerializer,
    },
    description=(
        "Return a code to the available pool. A clearanceId records the "
        "return as cleared, otherwise it is recorded as submitted."
    ),
    tags=['tickets'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def append_code(request):
    """Return a code to available."""
    serializer = AppendRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    try:
        result = return_ticket(
            code=data['code'],
            user=request.user,
            team_member=data.get('teamMember', ''),
            comments=data.get('comments', ''),
            clearance_id=data.get('clearanceId', ''),
        )
    except InvalidCodeFormatError:
        return _error('invalid_code', status.HTTP_400_BAD_REQUEST)
    except UnknownCodeError:
        return Response({
            'added': False,
            'reason': 'unknown_code',
            'availableCount': count_available(),
        })

    body = {'added': result.changed, 'availableCount': count_available()}
    if result.reason:
        body['reason'] = result.reason
    return Response(body)


@extend_schema(
    responses={200: AvailableResponseSerializer},
    description="List all available codes with per-pool counts.",
    tags=['tickets'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def available_codes(request):
    """List available codes grouped by pool."""
    inventory = list_available()
    return Response({
        'available': inventory.available,
        'counts': inventory.counts,
        'byPool': inventory.by_pool,
    })


@extend_schema(
    parameters=[CountFilterSerializer],
    responses={200: inline_serializer('CountResponse', {'count': serializers.IntegerField()})},
    description="Count available codes, optionally for one pool.",
    tags=['tickets'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def count_codes(request):
    """Count available codes."""
    filter_serializer = CountFilterSerializer(data=request.query_params)
    filter_serializer.is_valid(raise_exception=True)
    return Response({'count': count_available(pool=filter_serializer.validated_data.get('pool'))})


@extend_schema(
    responses={200: inline_serializer('MyCodesResponse', {
        'codes': serializers.ListField(child=serializers.CharField()),
    })},
    description="Codes currently held by the authenticated user.",
    tags=['tickets'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def my_codes(request):
    """Codes the current user is holding."""
    tickets = list_assigned(user=request.user)
    return Response({'codes': [ticket.code for ticket in tickets]})
