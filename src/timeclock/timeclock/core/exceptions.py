class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class DuplicateEntryError(DomainError):
    """Raised when a worker already has a time entry for the given day."""


class InvalidTimeRangeError(DomainError):
    """Raised when check-out is not after check-in."""


class NotFoundError(DomainError):
    """Raised when a worker or time entry id does not resolve."""


class AuthenticationError(DomainError):
    """Raised when the admin password is invalid."""


class StoreUnavailableError(Exception):
    """Raised when the underlying persistence call fails or times out."""
