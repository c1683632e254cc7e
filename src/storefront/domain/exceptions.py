"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the HTTP and CLI layers can catch them uniformly and translate them into
status codes or user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated by caller input."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class DuplicateEntityError(DomainException):
    """An entity with the same unique key already exists."""


class AuthenticationError(DomainException):
    """Credentials or session token could not be verified."""

    def __init__(self, message: str, code: str = "INVALID_CREDENTIALS") -> None:
        super().__init__(message)
        self.code = code


class AuthorizationError(DomainException):
    """The authenticated user may not perform the operation."""

    def __init__(self, message: str, code: str = "INSUFFICIENT_PERMISSIONS") -> None:
        super().__init__(message)
        self.code = code


class StorageError(DomainException):
    """The underlying store failed. Details are logged, never shown."""


class PaymentGatewayError(DomainException):
    """The payment gateway is unavailable or rejected the request."""
