class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidRange(ValidationError):
    """Raised when a date range starts after it ends."""


class MissingReason(ValidationError):
    """Raised when a leave request has no reason."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class StateConflictError(DomainError):
    """Raised when an entity is not in a state that allows the transition."""


class AlreadyCheckedIn(StateConflictError):
    pass


class NoOpenCheckIn(StateConflictError):
    pass


class NotPending(StateConflictError):
    pass


class AlreadyPaid(StateConflictError):
    pass


class PayrollLocked(StateConflictError):
    pass


class StorageError(DomainError):
    """Raised when the record store fails (network, constraint, driver)."""
