"""Application service: List Orders use case (query).

Returns every stored order; there is no paging or filtering.
"""

from __future__ import annotations

from orderdesk.application.dto import OrderDTO, to_order_dto
from orderdesk.domain.repository.order_repository import OrderRepository


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self) -> list[OrderDTO]:
        return [to_order_dto(order) for order in self._order_repo.list_all()]
