"""Domain service: order pricing.

Pure functions over a sequence of order items. The only business rule is
the variety discount: an order spanning more than
``VARIETY_DISCOUNT_THRESHOLD`` distinct products gets
``VARIETY_DISCOUNT_RATE`` off its subtotal.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Sequence

from orderdesk.domain.model.value_objects import Money

if TYPE_CHECKING:
    from orderdesk.domain.model.order import OrderItem

VARIETY_DISCOUNT_THRESHOLD = 3  # strictly more distinct products than this
VARIETY_DISCOUNT_RATE = Decimal("0.10")


def subtotal(items: Sequence[OrderItem]) -> Money:
    """Sum of line totals, unrounded."""
    result = Money.zero()
    for item in items:
        result = result + item.line_total
    return result


def distinct_product_count(items: Sequence[OrderItem]) -> int:
    return len({item.product_id for item in items})


def qualifies_for_variety_discount(items: Sequence[OrderItem]) -> bool:
    return distinct_product_count(items) > VARIETY_DISCOUNT_THRESHOLD


def compute_total(items: Sequence[OrderItem]) -> Money:
    """Final amount payable for *items*."""
    base = subtotal(items)
    if qualifies_for_variety_discount(items):
        return base.discounted(VARIETY_DISCOUNT_RATE)
    return base
