class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 400


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFound(DomainError):
    """Raised when a referenced course, enrollment or student does not exist."""

    status_code = 404


class CapacityExceeded(DomainError):
    """Raised when a course has no free seats left."""

    status_code = 409


class DuplicateEnrollment(DomainError):
    """Raised when a student already holds an active enrollment in a course."""

    status_code = 409


class DuplicateDocument(DomainError):
    """Raised when a student document number is already registered."""

    status_code = 409


class EmptyBatchError(DomainError):
    """Raised when every record of a bulk attendance save was filtered out."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""

    status_code = 401


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    status_code = 403


class StorageFailure(DomainError):
    """Raised when the underlying store fails (lock timeout, I/O, constraint)."""

    status_code = 500
