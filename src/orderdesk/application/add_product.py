"""Application service: Add Product use case."""

from __future__ import annotations

import logging

from orderdesk.domain.exceptions import InvalidRequestError
from orderdesk.domain.model.product import Product
from orderdesk.domain.model.value_objects import Money
from orderdesk.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, name: str, price: str, stock: int = 0) -> Product:
        """Add a new product to the catalog."""
        if not name or not name.strip():
            raise InvalidRequestError("Product name is required")
        if stock < 0:
            raise InvalidRequestError("Stock cannot be negative")

        existing = self._product_repo.get_by_name(name.strip())
        if existing is not None:
            raise InvalidRequestError(f"Product '{name}' already exists")

        # Auto-assign ID based on existing products
        all_products = self._product_repo.list_all()
        next_id = max((p.id for p in all_products), default=0) + 1

        product = Product(id=next_id, name=name.strip(), price=Money.of(price), stock=stock)
        self._product_repo.save(product)
        logger.info("Product #%s '%s' added at %s with stock %d",
                    product.id, product.name, product.price, product.stock)
        return product
