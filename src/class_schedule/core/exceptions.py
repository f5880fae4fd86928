class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a subject, timetable, slot or class id is unknown."""


class PreconditionError(DomainError):
    """Raised when an operation needs state that is not there (e.g. no active timetable)."""


class PersistenceError(DomainError):
    """Raised by gateways when a durable read or write fails."""


class PermissionDeniedError(DomainError):
    """Raised when notification permission is denied by the platform."""


class AuthenticationError(DomainError):
    """Raised when no user identity is available."""
