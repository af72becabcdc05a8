"""Application service: Create Order use case.

Orchestrates the flow between repositories, the pricing service and the
Order aggregate. Everything between the first stock deduction and the
order write runs inside one ``Transaction``: if any item fails, every
deduction made for earlier items is rolled back and no order is stored.
"""

from __future__ import annotations

import logging
from typing import Sequence

from orderdesk.application.dto import OrderDTO, OrderItemSpec, to_order_dto
from orderdesk.domain.exceptions import (
    DomainException,
    InvalidRequestError,
    ProductNotFoundError,
)
from orderdesk.domain.model.order import Order, OrderItem
from orderdesk.domain.model.value_objects import Quantity
from orderdesk.domain.repository.order_repository import OrderRepository
from orderdesk.domain.repository.product_repository import ProductRepository
from orderdesk.domain.repository.transaction import Transaction
from orderdesk.domain.service import pricing

logger = logging.getLogger(__name__)


class CreateOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo

    def handle(
        self,
        customer_name: str,
        customer_email: str,
        item_specs: Sequence[OrderItemSpec],
    ) -> OrderDTO:
        """Place a new order.

        Steps:
        1. Validate the request shape (fails before any stock is touched).
        2. Resolve each item in request order: look the product up, deduct
           its stock and save it. A product listed twice deducts twice.
        3. Price the items and build a CONFIRMED order.
        4. Persist the order and commit.
        """
        try:
            requested = self._validate(customer_name, customer_email, item_specs)
            order = self._place(customer_name, customer_email, requested)
        except DomainException as exc:
            logger.warning("Order for %r rejected: %s", customer_name, exc)
            raise

        logger.info(
            "Order #%s placed for %s: %d items, total %s (subtotal %s)",
            order.id, order.customer_email, len(order.items), order.total, order.subtotal,
        )
        return to_order_dto(order)

    # --- Steps ----------------------------------------------------------------

    @staticmethod
    def _validate(
        customer_name: str,
        customer_email: str,
        item_specs: Sequence[OrderItemSpec],
    ) -> list[tuple[int, Quantity]]:
        if not customer_name or not customer_name.strip():
            raise InvalidRequestError("Customer name is required")
        if not customer_email or not customer_email.strip():
            raise InvalidRequestError("Customer email is required")
        if not item_specs:
            raise InvalidRequestError("Order items are required")

        requested: list[tuple[int, Quantity]] = []
        for spec in item_specs:
            if spec.product_id is None:
                raise InvalidRequestError("Product ID is required")
            if spec.quantity is None:
                raise InvalidRequestError("Quantity must be greater than 0")
            requested.append((spec.product_id, Quantity(spec.quantity)))
        return requested

    def _place(
        self,
        customer_name: str,
        customer_email: str,
        requested: list[tuple[int, Quantity]],
    ) -> Order:
        # Orders commit first: a failed order write must not leave stock deducted.
        with Transaction(self._order_repo, self._product_repo) as tx:
            items = [self._resolve_item(pid, qty) for pid, qty in requested]
            order = Order.create(
                customer_name=customer_name,
                customer_email=customer_email,
                items=items,
                total=pricing.compute_total(items),
            )
            self._order_repo.save(order)
            tx.commit()
        return order

    def _resolve_item(self, product_id: int, quantity: Quantity) -> OrderItem:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)

        product.deduct_stock(quantity.value)
        self._product_repo.save(product)
        logger.debug(
            "Deducted %d of product #%s (%s), %d left",
            quantity.value, product.id, product.name, product.stock,
        )
        return OrderItem.for_product(product, quantity)
