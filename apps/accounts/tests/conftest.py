import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserType


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Create and return a team user."""
    return User.objects.create_user(
        email='team@example.com',
        password='TestPass123!',
        team_name='Team One',
        user_type=UserType.HSV,
    )


@pytest.fixture
def other_user(db):
    """Create and return a second team user."""
    return User.objects.create_user(
        email='other@example.com',
        password='TestPass123!',
        team_name='Team Two',
        user_type=UserType.OSV,
    )


@pytest.fixture
def user_inactive(db):
    """Create and return a deactivated team user."""
    return User.objects.create_user(
        email='inactive@example.com',
        password='TestPass123!',
        team_name='Old Team',
        is_active=False,
    )


@pytest.fixture
def admin_user(db):
    """Create and return an admin user."""
    return User.objects.create_user(
        email='admin@example.com',
        password='TestPass123!',
        team_name='Admin',
        is_staff=True,
    )


@pytest.fixture
def authenticated_client(api_client, user):
    """Return API client authenticated as the team user."""
    refresh = RefreshToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def admin_client(api_client, admin_user):
    """Return API client authenticated as admin."""
    refresh = RefreshToken.for_user(admin_user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client
