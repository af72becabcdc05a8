"""Application service: Set Stock use case.

Sets the absolute stock level of a catalog product, e.g. after a delivery.
"""

from __future__ import annotations

import logging

from orderdesk.domain.exceptions import ProductNotFoundError
from orderdesk.domain.model.product import Product
from orderdesk.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class SetStockHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: int, stock: int) -> Product:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)

        previous = product.stock
        product.set_stock(stock)
        self._product_repo.save(product)
        logger.info("Stock for product #%s changed %d -> %d", product.id, previous, stock)
        return product
