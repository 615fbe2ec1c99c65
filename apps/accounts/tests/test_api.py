import pytest
from uuid import uuid4
from django.urls import reverse
from rest_framework import status
from apps.accounts.models import User
from apps.tickets.models import Ticket, TicketStatus


# =============================================================================
# Login Tests
# =============================================================================

@pytest.mark.django_db
class TestLogin:
    """Tests for POST /api/auth/login/"""

    def test_login_success(self, api_client, user):
        """Successfully login with valid credentials."""
        url = reverse('users:login')
        data = {
            'email': user.email,
            'password': 'TestPass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_200_OK
        assert 'access' in response.data['tokens']
        assert 'refresh' in response.data['tokens']
        assert response.data['user']['email'] == user.email
        assert response.data['user']['user_type'] == 'HSV'

    def test_login_email_case_insensitive(self, api_client, user):
        """Email is matched regardless of case."""
        url = reverse('users:login')
        data = {
            'email': 'TEAM@Example.com',
            'password': 'TestPass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_200_OK

    def test_login_wrong_password(self, api_client, user):
        """Login fails with wrong password."""
        url = reverse('users:login')
        data = {
            'email': user.email,
            'password': 'WrongPassword123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data == {'error': 'invalid_credentials'}

    def test_login_nonexistent_user(self, api_client, db):
        """Login fails for non-existent user."""
        url = reverse('users:login')
        data = {
            'email': 'nonexistent@example.com',
            'password': 'SomePass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_login_inactive_user(self, api_client, user_inactive):
        """Inactive accounts cannot log in."""
        url = reverse('users:login')
        data = {
            'email': user_inactive.email,
            'password': 'TestPass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data == {'error': 'account_inactive'}

    def test_login_updates_last_login(self, api_client, user):
        """Login updates last_login timestamp."""
        url = reverse('users:login')
        data = {
            'email': user.email,
            'password': 'TestPass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_200_OK
        user.refresh_from_db()
        assert user.last_login is not None


@pytest.mark.django_db
class TestAdminLogin:
    """Tests for POST /api/auth/admin/login/"""

    def test_admin_login_success(self, api_client, admin_user):
        url = reverse('users:admin-login')
        response = api_client.post(url, {'email': admin_user.email, 'password': 'TestPass123!'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['user']['is_staff'] is True

    def test_admin_login_rejects_team_user(self, api_client, user):
        url = reverse('users:admin-login')
        response = api_client.post(url, {'email': user.email, 'password': 'TestPass123!'})

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data == {'error': 'admin_required'}


# =============================================================================
# Current User Tests
# =============================================================================

@pytest.mark.django_db
class TestGetCurrentUser:
    """Tests for GET /api/auth/me/"""

    def test_get_current_user(self, authenticated_client, user):
        url = reverse('users:current-user')
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['email'] == user.email
        assert response.data['team_name'] == 'Team One'
        assert 'password' not in response.data

    def test_get_current_user_unauthenticated(self, api_client):
        url = reverse('users:current-user')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


# =============================================================================
# Team User Management Tests
# =============================================================================

@pytest.mark.django_db
class TestUserManagement:
    """Tests for /api/users/ (admin only)"""

    def test_list_users(self, admin_client, user, other_user):
        response = admin_client.get(reverse('team-users:user-list'))

        assert response.status_code == status.HTTP_200_OK
        emails = {row['email'] for row in response.data}
        assert emails == {'admin@example.com', user.email, other_user.email}

    def test_list_users_requires_admin(self, authenticated_client):
        response = authenticated_client.get(reverse('team-users:user-list'))

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_create_user(self, admin_client):
        data = {
            'team_name': 'New Team',
            'email': 'New@Example.com',
            'password': 'SecurePass123!',
            'user_type': 'OSV',
        }
        response = admin_client.post(reverse('team-users:user-list'), data)

        assert response.status_code == status.HTTP_201_CREATED
        created = User.objects.get(email='new@example.com')
        assert created.user_type == 'OSV'
        assert created.check_password('SecurePass123!')
        assert created.is_staff is False

    def test_create_user_duplicate_email(self, admin_client, user):
        data = {
            'team_name': 'Copy',
            'email': user.email,
            'password': 'SecurePass123!',
        }
        response = admin_client.post(reverse('team-users:user-list'), data)

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data == {'error': 'email_exists'}

    def test_retrieve_user(self, admin_client, user):
        url = reverse('team-users:user-detail', kwargs={'pk': user.id})
        response = admin_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['id'] == str(user.id)

    def test_retrieve_user_not_found(self, admin_client):
        url = reverse('team-users:user-detail', kwargs={'pk': uuid4()})
        response = admin_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_update_user(self, admin_client, user):
        url = reverse('team-users:user-detail', kwargs={'pk': user.id})
        response = admin_client.patch(url, {'team_name': 'Renamed', 'user_type': 'OSV'})

        assert response.status_code == status.HTTP_200_OK
        user.refresh_from_db()
        assert user.team_name == 'Renamed'
        assert user.user_type == 'OSV'

    def test_update_password(self, admin_client, user):
        url = reverse('team-users:user-detail', kwargs={'pk': user.id})
        admin_client.patch(url, {'password': 'Changed123!'})

        user.refresh_from_db()
        assert user.check_password('Changed123!')

    def test_update_email_taken(self, admin_client, user, other_user):
        url = reverse('team-users:user-detail', kwargs={'pk': user.id})
        response = admin_client.patch(url, {'email': other_user.email})

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_delete_user_keeps_tickets_used(self, admin_client, user):
        Ticket.objects.create(code='AAAAAAAAA1', pool='HSV', status=TicketStatus.USED, assigned_to=user)

        url = reverse('team-users:user-detail', kwargs={'pk': user.id})
        response = admin_client.delete(url)

        assert response.status_code == status.HTTP_200_OK
        assert not User.objects.filter(id=user.id).exists()
        ticket = Ticket.objects.get(code='AAAAAAAAA1')
        assert ticket.status == TicketStatus.USED
        assert ticket.assigned_to is None

    def test_delete_user_not_found(self, admin_client):
        url = reverse('team-users:user-detail', kwargs={'pk': uuid4()})
        response = admin_client.delete(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND
