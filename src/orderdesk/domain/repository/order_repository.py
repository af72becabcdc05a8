"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import abstractmethod

from orderdesk.domain.model.order import Order
from orderdesk.domain.repository.transaction import Transactional


class OrderRepository(Transactional):

    @abstractmethod
    def next_id(self) -> int:
        """Generate the next unique order ID."""

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Order]:
        """Return every order, ordered by ID."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist a new or updated order, assigning an ID if it has none."""
