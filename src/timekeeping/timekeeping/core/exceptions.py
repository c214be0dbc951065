class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class FormatError(ValidationError):
    """Raised when a time-of-day string is not a valid 24-hour HH:MM value."""


class NegativeDurationError(ValidationError):
    """Raised when a duration would be negative (e.g. punch-out before punch-in)."""


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""


class PunchStateError(DomainError):
    """Raised when a punch transition is not allowed in the current state."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""
