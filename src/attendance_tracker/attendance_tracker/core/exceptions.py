class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class StoreError(Exception):
    """Raised when the backing store rejects or fails an operation."""


class UniqueViolation(StoreError):
    """Raised when an insert hits a uniqueness constraint."""
