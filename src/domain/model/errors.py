"""Domain-level exceptions.

Services raise these errors to express business rule violations.
Route handlers catch them and map to appropriate HTTP status codes.
"""


class DomainError(Exception):
    """Base class for all domain errors."""


class NotFoundError(DomainError):
    """Requested entity does not exist."""


class ValidationError(DomainError):
    """Input violates a business validation rule."""


class UnauthorizedError(DomainError):
    """Caller could not be authenticated."""


class MissingTokenError(UnauthorizedError):
    """No bearer token was presented."""


class InvalidTokenError(UnauthorizedError):
    """Bearer token failed signature, expiry or claims checks."""


class UpstreamAuthError(DomainError):
    """The identity provider denied the login or returned an unusable profile."""
