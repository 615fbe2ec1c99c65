"""Team user management service (admin CRUD)."""

import logging
from typing import Optional
from uuid import UUID

from django.db import transaction, IntegrityError
from django.contrib.auth import get_user_model

from .exceptions import EmailAlreadyExistsError, UserNotFoundError

User = get_user_model()

logger = logging.getLogger(__name__)


def _coerce_user_type(user_type: Optional[str]) -> str:
    # Anything other than OSV falls back to the HSV pool.
    return 'OSV' if user_type == 'OSV' else 'HSV'


@transaction.atomic
def create_team_user(
    *,
    team_name: str,
    email: str,
    password: str,
    user_type: Optional[str] = None,
    is_staff: bool = False
) -> User:
    """
    Create a team account.

    Args:
        team_name: Display name of the team
        email: Login email, stored lower-case
        password: Raw password (hashed before storage)
        user_type: Pool affinity, HSV or OSV
        is_staff: Grant admin access

    Returns:
        Created User instance

    Raises:
        EmailAlreadyExistsError: If the email is already registered
    """
    email = User.objects.normalize_email(email)
    if User.objects.filter(email=email).exists():
        raise EmailAlreadyExistsError(f"Email {email} is already registered")

    try:
        with transaction.atomic():
            user = User.objects.create_user(
                email=email,
                password=password,
                team_name=team_name.strip(),
                user_type=_coerce_user_type(user_type),
                is_staff=is_staff,
            )
    except IntegrityError:
        raise EmailAlreadyExistsError(f"Email {email} is already registered")

    logger.info("Created team user %s (%s)", user.email, user.user_type)
    return user


@transaction.atomic
def update_team_user(
    *,
    user_id: UUID,
    team_name: Optional[str] = None,
    email: Optional[str] = None,
    password: Optional[str] = None,
    user_type: Optional[str] = None
) -> User:
    """
    Partially update a team account. Omitted fields are left unchanged.

    Raises:
        UserNotFoundError: If user doesn't exist
        EmailAlreadyExistsError: If the new email belongs to another account
    """
    try:
        user = User.objects.select_for_update().get(id=user_id)
    except User.DoesNotExist:
        raise UserNotFoundError(f"User with ID {user_id} not found")

    update_fields = []

    if team_name:
        user.team_name = team_name.strip()
        update_fields.append('team_name')

    if email:
        email = User.objects.normalize_email(email)
        if User.objects.filter(email=email).exclude(id=user.id).exists():
            raise EmailAlreadyExistsError(f"Email {email} is already registered")
        user.email = email
        update_fields.append('email')

    if user_type is not None:
        user.user_type = _coerce_user_type(user_type)
        update_fields.append('user_type')

    if password:
        user.set_password(password)
        update_fields.append('password')

    if update_fields:
        update_fields.append('updated_at')
        user.save(update_fields=update_fields)

    return user


@transaction.atomic
def delete_team_user(*, user_id: UUID) -> None:
    """
    Delete a team account.

    Tickets held by the user are not returned: the team may already have
    handed those codes out. They stay used with no holder (the foreign
    key is SET_NULL) and are out of circulation until an admin puts them
    back with the ticket admin's "Return selected tickets" action.

    Raises:
        UserNotFoundError: If user doesn't exist
    """
    deleted, _ = User.objects.filter(id=user_id).delete()
    if not deleted:
        raise UserNotFoundError(f"User with ID {user_id} not found")
    logger.info("Deleted team user %s", user_id)
