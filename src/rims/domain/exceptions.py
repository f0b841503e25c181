"""Errors raised by the stock domain.

Every rejection derives from DomainException and is raised before anything
is written. The CLI turns them into one-line error messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class InvalidQuantityError(ValidationError):
    """A quantity or threshold was negative or not a whole number."""


class InvalidCoordinatesError(ValidationError):
    """A longitude/latitude pair is outside the valid ranges."""


class InsufficientStockError(ValidationError):
    """A dispatch or reservation asked for more than is available."""


class DuplicateKeyError(DomainException):
    """A unique key (SKU, barcode, or SKU + warehouse) is already taken."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""
