class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(ValidationError):
    """Raised when a referenced record does not exist."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class ConfirmationRequired(DomainError):
    """Raised when a destructive action is attempted without explicit confirmation."""


class BackendUnavailableError(Exception):
    """Raised by a table backend when the remote store cannot be reached."""
