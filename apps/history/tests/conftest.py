import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User


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
    )


@pytest.fixture
def authenticated_client(api_client, user):
    """Return API client authenticated as the team user."""
    refresh = RefreshToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client
