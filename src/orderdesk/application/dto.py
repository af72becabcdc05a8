"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from orderdesk.domain.model.order import Order


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: what the customer asked for (product ID + quantity).

    Both fields may be missing in a raw request; the create-order handler
    rejects such specs before touching the catalog.
    """

    product_id: int | None
    quantity: int | None


@dataclass(frozen=True)
class OrderItemDTO:
    """Output: a single order item as displayed to the user."""

    product_id: int
    product_name: str
    quantity: int
    unit_price: str  # formatted, e.g. "$15.00"
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: int
    customer_name: str
    customer_email: str
    status: str
    items: list[OrderItemDTO]
    subtotal: str
    discount: str
    total: str
    created_at: str

    @property
    def discount_applied(self) -> bool:
        return self.total != self.subtotal


def to_order_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        customer_name=order.customer_name,
        customer_email=order.customer_email,
        status=order.status.value,
        items=[
            OrderItemDTO(
                product_id=item.product.id,
                product_name=item.product.name,
                quantity=item.quantity.value,
                unit_price=str(item.product.price),
                line_total=str(item.line_total),
            )
            for item in order.items
        ],
        subtotal=str(order.subtotal),
        discount=str(order.discount),
        total=str(order.total),
        created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
    )
