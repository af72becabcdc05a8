"""Order aggregate.

The Order is an aggregate root that owns its items exclusively. Items hold
a frozen snapshot of the product they were priced against, so later catalog
changes never alter a placed order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from orderdesk.domain.exceptions import InvalidRequestError
from orderdesk.domain.model.product import Product, ProductSnapshot
from orderdesk.domain.model.value_objects import Money, Quantity
from orderdesk.domain.service import pricing


class OrderStatus(Enum):
    # Orders are confirmed on creation; no further transitions exist yet.
    CONFIRMED = "CONFIRMED"


@dataclass(frozen=True)
class OrderItem:
    """One line of an order.

    ``line_total`` is computed once by ``for_product`` and frozen with the
    item.
    """

    product: ProductSnapshot
    quantity: Quantity
    line_total: Money

    @staticmethod
    def for_product(product: Product, quantity: Quantity) -> OrderItem:
        return OrderItem(
            product=product.snapshot(),
            quantity=quantity,
            line_total=product.price * quantity.value,
        )

    @property
    def product_id(self) -> int:
        return self.product.id


@dataclass
class Order:
    """Aggregate root for placed orders.

    Use the ``Order.create()`` factory for new orders; it enforces all
    business rules. The ``__init__`` is intentionally simple so the
    repository can reconstitute persisted orders without re-validating.
    """

    id: int | None
    customer_name: str
    customer_email: str
    items: list[OrderItem]
    total: Money
    status: OrderStatus = OrderStatus.CONFIRMED
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        customer_name: str,
        customer_email: str,
        items: list[OrderItem],
        total: Money,
    ) -> Order:
        """Create a new confirmed order, enforcing all invariants."""
        if not customer_name or not customer_name.strip():
            raise InvalidRequestError("Customer name is required")
        if not customer_email or not customer_email.strip():
            raise InvalidRequestError("Customer email is required")
        if not items:
            raise InvalidRequestError("Order items are required")

        order = Order(
            id=None,
            customer_name=customer_name.strip(),
            customer_email=customer_email.strip(),
            items=list(items),
            total=total,
            status=OrderStatus.CONFIRMED,
        )

        subtotal = order.subtotal
        if total != subtotal and total != subtotal.discounted(pricing.VARIETY_DISCOUNT_RATE):
            raise InvalidRequestError(
                f"Order total {total} does not match subtotal {subtotal}"
            )
        return order

    # --- Computed properties --------------------------------------------------

    @property
    def subtotal(self) -> Money:
        return pricing.subtotal(self.items)

    @property
    def discount(self) -> Money:
        return self.subtotal - self.total
