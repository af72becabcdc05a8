"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from orderdesk.domain.model.order import Order, OrderItem, OrderStatus
from orderdesk.domain.model.product import ProductSnapshot
from orderdesk.domain.model.value_objects import Money, Quantity
from orderdesk.domain.repository.order_repository import OrderRepository
from orderdesk.infrastructure.persistence.json_file_store import JsonFileStore


class JsonOrderRepository(JsonFileStore, OrderRepository):

    # --- OrderRepository interface --------------------------------------------

    def next_id(self) -> int:
        orders = self._load_raw()
        if not orders:
            return 1
        return max(o["id"] for o in orders) + 1

    def get_by_id(self, order_id: int) -> Order | None:
        for raw in self._load_raw():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Order]:
        return [
            self._to_domain(raw)
            for raw in sorted(self._load_raw(), key=lambda o: o["id"])
        ]

    def save(self, order: Order) -> None:
        orders = self._load_raw()

        if order.id is None:
            order.id = self.next_id()

        # Upsert: replace if exists, otherwise append
        for i, raw in enumerate(orders):
            if raw["id"] == order.id:
                orders[i] = self._to_raw(order)
                break
        else:
            orders.append(self._to_raw(order))

        self._persist_raw(orders)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "customer_name": order.customer_name,
            "customer_email": order.customer_email,
            "status": order.status.value,
            "created_at": order.created_at.isoformat(),
            "total": str(order.total.amount),
            "currency": order.total.currency,
            "items": [
                {
                    "product_id": item.product.id,
                    "product_name": item.product.name,
                    "unit_price": str(item.product.price.amount),
                    "quantity": item.quantity.value,
                    "line_total": str(item.line_total.amount),
                }
                for item in order.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        currency = raw.get("currency", "USD")
        items = [
            OrderItem(
                product=ProductSnapshot(
                    id=i["product_id"],
                    name=i["product_name"],
                    price=Money(Decimal(i["unit_price"]), currency),
                ),
                quantity=Quantity(i["quantity"]),
                line_total=Money(Decimal(i["line_total"]), currency),
            )
            for i in raw["items"]
        ]
        return Order(
            id=raw["id"],
            customer_name=raw["customer_name"],
            customer_email=raw["customer_email"],
            items=items,
            total=Money(Decimal(raw["total"]), currency),
            status=OrderStatus(raw["status"]),
            created_at=datetime.fromisoformat(raw["created_at"]),
        )
