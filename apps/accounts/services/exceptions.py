"""Domain-specific exceptions for accounts services."""


class AccountsServiceError(Exception):
    """Base exception for accounts services."""
    pass


class EmailAlreadyExistsError(AccountsServiceError):
    """Raised when another account already uses the email address."""
    pass


class InvalidCredentialsError(AccountsServiceError):
    """Raised when authentication credentials are invalid."""
    pass


class InactiveAccountError(AccountsServiceError):
    """Raised when account is deactivated."""
    pass


class InsufficientPermissionsError(AccountsServiceError):
    """Raised when a non-admin account attempts an admin login."""
    pass


class UserNotFoundError(AccountsServiceError):
    """Raised when user does not exist."""
    pass
