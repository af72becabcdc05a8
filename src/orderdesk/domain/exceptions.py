"""Domain-level exceptions.

Every failure of an order-desk operation is a subclass of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
None of them are transient: the caller has to change the request.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class InvalidRequestError(DomainException):
    """A required field is missing or malformed."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ProductNotFoundError(EntityNotFoundError):

    def __init__(self, product_id: int) -> None:
        super().__init__(f"Product not found: #{product_id}")
        self.product_id = product_id


class OrderNotFoundError(EntityNotFoundError):

    def __init__(self, order_id: int) -> None:
        super().__init__(f"Order #{order_id} not found")
        self.order_id = order_id


class InsufficientStockError(DomainException):
    """Requested quantity exceeds the stock currently on hand."""

    def __init__(self, product_name: str, requested: int, available: int) -> None:
        super().__init__(
            f"Insufficient stock for {product_name} "
            f"(requested {requested}, available {available})"
        )
        self.product_name = product_name
        self.requested = requested
        self.available = available
