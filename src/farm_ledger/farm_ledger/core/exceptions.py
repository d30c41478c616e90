class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class UnknownReferenceError(DomainError, LookupError):
    """Raised when a caller asks about a specific record that does not exist."""
