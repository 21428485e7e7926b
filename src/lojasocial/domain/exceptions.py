"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI and HTTP layers can catch them uniformly and map them to a
user-facing message or status code.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated by the caller's input."""


class EmptyCartError(ValidationError):
    """A request was submitted without any items."""


class CapExceededError(ValidationError):
    """A request asks for more items than a single request may hold."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class InsufficientStockError(DomainException):
    """Not enough available stock to satisfy a reservation."""


class InvalidTransitionError(DomainException):
    """A request cannot move from its current status to the requested one."""


class NotOwnerError(DomainException):
    """Only the beneficiary who owns a request may perform this action."""


class InvariantViolationError(DomainException):
    """Stock bookkeeping is inconsistent. Indicates a bug, never retried."""
