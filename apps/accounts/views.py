from rest_framework import status, viewsets, serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAdminUser, IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.tokens import RefreshToken
from drf_spectacular.utils import extend_schema
from .models import User
from .serializers import (
    UserSerializer,
    UserCreateSerializer,
    UserUpdateSerializer,
    UserLoginSerializer,
)
from .services import (
    authenticate_user,
    create_team_user,
    update_team_user,
    delete_team_user,
    EmailAlreadyExistsError,
    InvalidCredentialsError,
    InactiveAccountError,
    InsufficientPermissionsError,
    UserNotFoundError,
)


# Response serializers for API documentation
class TokensResponseSerializer(serializers.Serializer):
    refresh = serializers.CharField()
    access = serializers.CharField()


class AuthResponseSerializer(serializers.Serializer):
    user = UserSerializer()
    tokens = TokensResponseSerializer()


class ErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField()


def _auth_response(user):
    refresh = RefreshToken.for_user(user)
    return Response({
        'user': UserSerializer(user).data,
        'tokens': {
            'refresh': str(refresh),
            'access': str(refresh.access_token),
        }
    })


def _login(request, require_staff):
    serializer = UserLoginSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        user = authenticate_user(
            email=serializer.validated_data['email'],
            password=serializer.validated_data['password'],
            require_staff=require_staff,
        )
    except InvalidCredentialsError:
        return Response({'error': 'invalid_credentials'}, status=status.HTTP_401_UNAUTHORIZED)
    except InactiveAccountError:
        return Response({'error': 'account_inactive'}, status=status.HTTP_403_FORBIDDEN)
    except InsufficientPermissionsError:
        return Response({'error': 'admin_required'}, status=status.HTTP_403_FORBIDDEN)

    return _auth_response(user)


@extend_schema(
    request=UserLoginSerializer,
    responses={
        200: AuthResponseSerializer,
        400: ErrorResponseSerializer,
        401: ErrorResponseSerializer,
        403: ErrorResponseSerializer,
    },
    description="Authenticate a team user and receive JWT tokens.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def login(request):
    """Login with email and password."""
    return _login(request, require_staff=False)


@extend_schema(
    request=UserLoginSerializer,
    responses={
        200: AuthResponseSerializer,
        401: ErrorResponseSerializer,
        403: ErrorResponseSerializer,
    },
    description="Authenticate an admin account and receive JWT tokens.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def admin_login(request):
    """Login restricted to staff accounts."""
    return _login(request, require_staff=True)


@extend_schema(
    responses={200: UserSerializer},
    description="Get the current authenticated user's profile.",
    tags=['auth'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def get_current_user(request):
    """Get current authenticated user profile."""
    return Response(UserSerializer(request.user).data)


class UserViewSet(viewsets.ViewSet):
    """
    Admin CRUD for team users.

    list: All users, newest first
    create: Create a team user
    retrieve: Get one user
    update / partial_update: Change name, email, password or type
    destroy: Delete a user
    """

    permission_classes = [IsAdminUser]
    lookup_value_regex = r'[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}'

    @extend_schema(responses={200: UserSerializer(many=True)}, tags=['users'])
    def list(self, request):
        users = User.objects.order_by('-created_at')
        return Response(UserSerializer(users, many=True).data)

    @extend_schema(
        request=UserCreateSerializer,
        responses={201: UserSerializer, 409: ErrorResponseSerializer},
        tags=['users'],
    )
    def create(self, request):
        serializer = UserCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            user = create_team_user(**serializer.validated_data)
        except EmailAlreadyExistsError:
            return Response({'error': 'email_exists'}, status=status.HTTP_409_CONFLICT)

        return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: UserSerializer, 404: ErrorResponseSerializer}, tags=['users'])
    def retrieve(self, request, pk=None):
        try:
            user = User.objects.get(id=pk)
        except User.DoesNotExist:
            return Response({'error': 'not_found'}, status=status.HTTP_404_NOT_FOUND)
        return Response(UserSerializer(user).data)

    @extend_schema(
        request=UserUpdateSerializer,
        responses={200: UserSerializer, 404: ErrorResponseSerializer, 409: ErrorResponseSerializer},
        tags=['users'],
    )
    def update(self, request, pk=None):
        serializer = UserUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        try:
            user = update_team_user(user_id=pk, **serializer.validated_data)
        except UserNotFoundError:
            return Response({'error': 'not_found'}, status=status.HTTP_404_NOT_FOUND)
        except EmailAlreadyExistsError:
            return Response({'error': 'email_exists'}, status=status.HTTP_409_CONFLICT)

        return Response(UserSerializer(user).data)

    def partial_update(self, request, pk=None):
        return self.update(request, pk=pk)

    @extend_schema(responses={200: None, 404: ErrorResponseSerializer}, tags=['users'])
    def destroy(self, request, pk=None):
        try:
            delete_team_user(user_id=pk)
        except UserNotFoundError:
            return Response({'error': 'not_found'}, status=status.HTTP_404_NOT_FOUND)
        return Response({'ok': True})
