class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class StorageError(DomainError):
    """Raised when the backing collection cannot be read or written."""


class ExportError(DomainError):
    """Raised when a report document cannot be produced."""
