class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthorizationError(DomainError):
    """Raised when the current role lacks permission for an action."""


class RemoteError(DomainError):
    """Raised by collaborators when a remote read or write fails."""
