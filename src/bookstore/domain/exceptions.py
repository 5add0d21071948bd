"""Domain-level exceptions.

Every business rule violation is a subclass of DomainException so the
presentation layer can catch them uniformly and show a readable message.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class EmptyOrderError(ValidationError):

    def __init__(self) -> None:
        super().__init__("Order must contain at least one item")


class InsufficientStockError(ValidationError):

    def __init__(self, book_id: str, requested: int, available: int) -> None:
        self.book_id = book_id
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient stock for book '{book_id}' "
            f"(need {requested}, have {available})"
        )


class InvalidStatusError(ValidationError):

    def __init__(self, status: object) -> None:
        self.status = status
        super().__init__(f"Invalid status: {status!r}")


class BookNotFoundError(EntityNotFoundError):

    def __init__(self, book_id: str) -> None:
        self.book_id = book_id
        super().__init__(f"Book with ID '{book_id}' not found")


class OrderNotFoundError(EntityNotFoundError):

    def __init__(self, order_id: int) -> None:
        self.order_id = order_id
        super().__init__(f"Order #{order_id} not found")


class ConcurrentModificationError(DomainException):
    """A conditional write lost its race against another writer."""


class AccessDeniedError(DomainException):
    """The requester may not see or change the entity."""
