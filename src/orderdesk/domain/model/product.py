"""Product aggregate.

Products live in the catalog independently of orders. Order creation only
ever reads them and deducts stock; it never creates or deletes one.
"""

from __future__ import annotations

from dataclasses import dataclass

from orderdesk.domain.exceptions import InsufficientStockError, InvalidRequestError
from orderdesk.domain.model.value_objects import Money


@dataclass(frozen=True)
class ProductSnapshot:
    """Read-only copy of a product as it was priced into an order."""

    id: int
    name: str
    price: Money


@dataclass
class Product:
    """A product in the catalog.

    Invariant: ``stock`` is never negative.
    """

    id: int
    name: str
    price: Money
    stock: int = 0

    def deduct_stock(self, quantity: int) -> None:
        """Take *quantity* units out of stock.

        Raises InsufficientStockError if fewer units are on hand.
        """
        if quantity <= 0:
            raise InvalidRequestError("Quantity must be greater than 0")
        if quantity > self.stock:
            raise InsufficientStockError(self.name, quantity, self.stock)
        self.stock -= quantity

    def set_stock(self, stock: int) -> None:
        if stock < 0:
            raise InvalidRequestError("Stock cannot be negative")
        self.stock = stock

    def snapshot(self) -> ProductSnapshot:
        return ProductSnapshot(id=self.id, name=self.name, price=self.price)
