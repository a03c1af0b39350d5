class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 400


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class ConflictError(DomainError):
    """Raised when a create would duplicate a unique value (e.g. username)."""

    status_code = 409


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""

    status_code = 401


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    status_code = 403


class NotFoundError(DomainError):
    """Raised when the requested entity does not exist."""

    status_code = 404
