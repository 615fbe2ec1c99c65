"""Services for accounts business logic."""

from .exceptions import (
    AccountsServiceError,
    EmailAlreadyExistsError,
    InvalidCredentialsError,
    InactiveAccountError,
    InsufficientPermissionsError,
    UserNotFoundError,
)
from .user_authentication import authenticate_user
from .user_management import create_team_user, update_team_user, delete_team_user

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'EmailAlreadyExistsError',
    'InvalidCredentialsError',
    'InactiveAccountError',
    'InsufficientPermissionsError',
    'UserNotFoundError',
    # Services
    'authenticate_user',
    'create_team_user',
    'update_team_user',
    'delete_team_user',
]
