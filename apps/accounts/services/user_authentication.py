"""User authentication service."""

import logging

from django.db import transaction
from django.contrib.auth import get_user_model
from django.utils import timezone

from .exceptions import (
    InvalidCredentialsError,
    InactiveAccountError,
    InsufficientPermissionsError,
)

User = get_user_model()

logger = logging.getLogger(__name__)


@transaction.atomic
def authenticate_user(*, email: str, password: str, require_staff: bool = False) -> User:
    """
    Authenticate user with email and password.

    Uses select_for_update() to prevent race conditions when updating last_login.

    Args:
        email: User's email (matched case-insensitively)
        password: User's password
        require_staff: Reject accounts that are not admins

    Returns:
        Authenticated User instance

    Raises:
        InvalidCredentialsError: If credentials are invalid
        InactiveAccountError: If account is deactivated
        InsufficientPermissionsError: If require_staff is set and the user is not staff
    """
    try:
        user = (
            User.objects
            .select_for_update()
            .get(email=User.objects.normalize_email(email))
        )
    except User.DoesNotExist:
        raise InvalidCredentialsError("Invalid email or password")

    if not user.check_password(password):
        logger.info("Rejected login for %s: bad password", user.email)
        raise InvalidCredentialsError("Invalid email or password")

    if not user.is_active:
        raise InactiveAccountError("Account is deactivated")

    if require_staff and not user.is_staff:
        raise InsufficientPermissionsError("Admin access required")

    user.last_login = timezone.now()
    user.save(update_fields=['last_login'])

    return user
