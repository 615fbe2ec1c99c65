import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserType
from apps.tickets.models import Ticket, TicketPool, TicketStatus


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def hsv_user(db):
    """Create and return an HSV team user."""
    return User.objects.create_user(
        email='hsv@example.com',
        password='TestPass123!',
        team_name='HSV Team',
        user_type=UserType.HSV,
    )


@pytest.fixture
def osv_user(db):
    """Create and return an OSV team user."""
    return User.objects.create_user(
        email='osv@example.com',
        password='TestPass123!',
        team_name='OSV Team',
        user_type=UserType.OSV,
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


def _authenticate(client, user):
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def hsv_client(api_client, hsv_user):
    """Return API client authenticated as the HSV team."""
    return _authenticate(api_client, hsv_user)


@pytest.fixture
def osv_client(api_client, osv_user):
    """Return API client authenticated as the OSV team."""
    return _authenticate(api_client, osv_user)


@pytest.fixture
def admin_client(api_client, admin_user):
    """Return API client authenticated as admin."""
    return _authenticate(api_client, admin_user)


@pytest.fixture
def make_ticket(db):
    """Factory creating a ticket directly, bypassing the import service."""
    def _make(code, pool=TicketPool.HSV, status=TicketStatus.AVAILABLE, assigned_to=None):
        return Ticket.objects.create(
            code=code,
            pool=pool,
            status=status,
            assigned_to=assigned_to,
        )
    return _make


@pytest.fixture
def stocked_pools(make_ticket):
    """Two codes in each pool, created in a known order."""
    return {
        TicketPool.HSV: [make_ticket('HSV0000001'), make_ticket('HSV0000002')],
        TicketPool.OSV: [
            make_ticket('OSV0000001', TicketPool.OSV),
            make_ticket('OSV0000002', TicketPool.OSV),
        ],
        TicketPool.COMMON: [
            make_ticket('COM0000001', TicketPool.COMMON),
            make_ticket('COM0000002', TicketPool.COMMON),
        ],
    }


@pytest.fixture
def superuser(db):
    """Create and return a Django admin site superuser."""
    return User.objects.create_superuser(
        email='root@example.com',
        password='TestPass123!',
    )


@pytest.fixture
def site_admin_client(client, superuser):
    """Return a Django test client logged into the admin site."""
    client.force_login(superuser)
    return client
