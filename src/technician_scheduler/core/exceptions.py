class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced project or technician does not exist."""


class ConflictError(DomainError):
    """Raised when an edit targets a locked (pending/completed) project."""


class PersistenceError(DomainError):
    """Raised when the storage layer fails inside a transaction."""
