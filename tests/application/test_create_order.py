"""Integration tests for the CreateOrder use case.

Uses in-memory fake repositories — no file I/O.
"""

import pytest

from orderdesk.application.create_order import CreateOrderHandler
from orderdesk.application.dto import OrderItemSpec
from orderdesk.domain.exceptions import (
    InsufficientStockError,
    InvalidRequestError,
    ProductNotFoundError,
)
from orderdesk.domain.model.order import OrderStatus
from orderdesk.domain.model.product import Product
from orderdesk.domain.model.value_objects import Money
from tests.fakes import FakeOrderRepository, FakeProductRepository


def _setup(
    products: list[Product] | None = None,
) -> tuple[CreateOrderHandler, FakeOrderRepository, FakeProductRepository]:
    """Build handler with fake repos, optionally pre-loaded with products."""
    if products is None:
        products = [
            Product(id=1, name="P1", price=Money.of("10.00"), stock=100),
            Product(id=2, name="P2", price=Money.of("20.00"), stock=100),
            Product(id=3, name="P3", price=Money.of("30.00"), stock=100),
            Product(id=4, name="P4", price=Money.of("10.00"), stock=100),
        ]
    order_repo = FakeOrderRepository()
    product_repo = FakeProductRepository(products)
    handler = CreateOrderHandler(order_repo, product_repo)
    return handler, order_repo, product_repo


def _specs(*pairs: tuple[int, int]) -> list[OrderItemSpec]:
    return [OrderItemSpec(product_id=pid, quantity=qty) for pid, qty in pairs]


class TestCreateOrderHappyPath:

    def test_three_products_no_discount(self):
        handler, _, _ = _setup()
        dto = handler.handle("Cliente Test", "test@mail.com", _specs((1, 1), (2, 1), (3, 1)))
        assert dto.total == "$60.00"
        assert not dto.discount_applied

    def test_four_products_variety_discount(self):
        products = [Product(id=i, name=f"P{i}", price=Money.of("10.00"), stock=100) for i in range(1, 5)]
        handler, _, _ = _setup(products)
        dto = handler.handle("Cliente VIP", "vip@mail.com", _specs((1, 1), (2, 1), (3, 1), (4, 1)))
        assert dto.subtotal == "$40.00"
        assert dto.discount == "$4.00"
        assert dto.total == "$36.00"

    def test_single_product_many_units_no_discount(self):
        products = [Product(id=1, name="Manzana", price=Money.of("10.00"), stock=20)]
        handler, _, product_repo = _setup(products)
        dto = handler.handle("Cliente Mayorista", "bulk@mail.com", _specs((1, 10)))
        assert dto.total == "$100.00"
        assert product_repo.stock_of(1) == 10

    def test_order_fields(self):
        handler, _, _ = _setup()
        dto = handler.handle("John Doe", "john@test.com", _specs((1, 2)))
        assert dto.customer_name == "John Doe"
        assert dto.customer_email == "john@test.com"
        assert dto.status == OrderStatus.CONFIRMED.value
        assert [(i.product_id, i.quantity, i.line_total) for i in dto.items] == [(1, 2, "$20.00")]

    def test_items_keep_request_order(self):
        handler, _, _ = _setup()
        dto = handler.handle("Alice", "a@x.com", _specs((3, 1), (1, 1), (2, 1)))
        assert [i.product_id for i in dto.items] == [3, 1, 2]

    def test_persists_order_and_deducts_stock(self):
        handler, order_repo, product_repo = _setup()
        dto = handler.handle("Alice", "a@x.com", _specs((1, 3), (2, 5)))

        saved = order_repo.get_by_id(dto.id)
        assert saved is not None
        assert saved.total == Money.of("130.00")
        assert product_repo.stock_of(1) == 97
        assert product_repo.stock_of(2) == 95

    def test_sequential_ids(self):
        handler, _, _ = _setup()
        dto1 = handler.handle("Alice", "a@x.com", _specs((1, 1)))
        dto2 = handler.handle("Bob", "b@x.com", _specs((2, 1)))
        assert dto2.id == dto1.id + 1


class TestRepeatedProduct:

    def test_repeated_id_deducts_cumulatively(self):
        products = [Product(id=1, name="Widget", price=Money.of("10.00"), stock=5)]
        handler, _, product_repo = _setup(products)
        dto = handler.handle("Alice", "a@x.com", _specs((1, 2), (1, 3)))
        assert len(dto.items) == 2
        assert dto.total == "$50.00"
        assert product_repo.stock_of(1) == 0

    def test_second_occurrence_sees_reduced_stock(self):
        products = [Product(id=1, name="Widget", price=Money.of("10.00"), stock=5)]
        handler, order_repo, product_repo = _setup(products)
        with pytest.raises(InsufficientStockError) as info:
            handler.handle("Alice", "a@x.com", _specs((1, 3), (1, 3)))
        assert info.value.available == 2
        assert product_repo.stock_of(1) == 5
        assert order_repo.list_all() == []

    def test_repeated_id_counts_once_for_discount(self):
        handler, _, _ = _setup()
        dto = handler.handle("Alice", "a@x.com", _specs((1, 1), (2, 1), (1, 1), (3, 1)))
        assert dto.total == "$70.00"


class TestCreateOrderValidation:

    @pytest.mark.parametrize("name", ["", "   ", None])
    def test_blank_customer_name_rejected(self, name):
        handler, _, _ = _setup()
        with pytest.raises(InvalidRequestError, match="Customer name is required"):
            handler.handle(name, "a@x.com", _specs((1, 1)))

    @pytest.mark.parametrize("email", ["", "   ", None])
    def test_blank_customer_email_rejected(self, email):
        handler, _, _ = _setup()
        with pytest.raises(InvalidRequestError, match="Customer email is required"):
            handler.handle("Alice", email, _specs((1, 1)))

    @pytest.mark.parametrize("items", [[], None])
    def test_missing_items_rejected(self, items):
        handler, _, _ = _setup()
        with pytest.raises(InvalidRequestError, match="items are required"):
            handler.handle("Alice", "a@x.com", items)

    def test_missing_product_id_rejected(self):
        handler, _, _ = _setup()
        with pytest.raises(InvalidRequestError, match="Product ID is required"):
            handler.handle("Alice", "a@x.com", [OrderItemSpec(product_id=None, quantity=1)])

    @pytest.mark.parametrize("qty", [0, -1, None])
    def test_non_positive_quantity_rejected(self, qty):
        handler, _, _ = _setup()
        with pytest.raises(InvalidRequestError, match="greater than 0"):
            handler.handle("Alice", "a@x.com", [OrderItemSpec(product_id=1, quantity=qty)])

    def test_invalid_late_item_touches_no_stock(self):
        handler, order_repo, product_repo = _setup()
        with pytest.raises(InvalidRequestError):
            handler.handle("Alice", "a@x.com", _specs((1, 2), (2, 0)))
        assert product_repo.stock_of(1) == 100
        assert order_repo.list_all() == []

    def test_unknown_product_rejected(self):
        handler, _, _ = _setup()
        with pytest.raises(ProductNotFoundError, match="#999") as info:
            handler.handle("Alice", "a@x.com", _specs((999, 1)))
        assert info.value.product_id == 999


class TestCreateOrderAtomicity:

    def test_insufficient_stock_leaves_stock_unchanged(self):
        products = [Product(id=1, name="Widget", price=Money.of("10.00"), stock=5)]
        handler, order_repo, product_repo = _setup(products)

        with pytest.raises(InsufficientStockError, match="Insufficient stock for Widget") as info:
            handler.handle("Alice", "a@x.com", _specs((1, 6)))

        assert (info.value.requested, info.value.available) == (6, 5)
        assert product_repo.stock_of(1) == 5
        assert order_repo.list_all() == []

    def test_late_stock_failure_rolls_back_earlier_deductions(self):
        handler, order_repo, product_repo = _setup()
        with pytest.raises(InsufficientStockError):
            handler.handle("Alice", "a@x.com", _specs((1, 10), (2, 20), (3, 101)))

        assert [product_repo.stock_of(i) for i in (1, 2, 3)] == [100, 100, 100]
        assert order_repo.list_all() == []

    def test_late_missing_product_rolls_back_earlier_deductions(self):
        handler, order_repo, product_repo = _setup()
        with pytest.raises(ProductNotFoundError):
            handler.handle("Alice", "a@x.com", _specs((1, 10), (42, 1)))

        assert product_repo.stock_of(1) == 100
        assert order_repo.list_all() == []

    def test_failure_does_not_disturb_previous_orders(self):
        handler, order_repo, product_repo = _setup()
        first = handler.handle("Alice", "a@x.com", _specs((1, 10)))

        with pytest.raises(InsufficientStockError):
            handler.handle("Bob", "b@x.com", _specs((1, 5), (2, 500)))

        assert [o.id for o in order_repo.list_all()] == [first.id]
        assert product_repo.stock_of(1) == 90


class TestCreateOrderPriceLock:

    def test_price_snapshot_at_creation(self):
        handler, order_repo, product_repo = _setup()
        dto = handler.handle("Alice", "a@x.com", _specs((1, 1)))

        widget = product_repo.get_by_id(1)
        widget.price = Money.of("99.99")
        product_repo.save(widget)

        saved = order_repo.get_by_id(dto.id)
        assert str(saved.total) == "$10.00"
        assert saved.items[0].product.price == Money.of("10.00")


class TestExtremePrices:

    def test_huge_price_without_discount_is_priced(self):
        products = [Product(id=1, name="Yacht", price=Money.of("1e30"), stock=5)]
        handler, _, product_repo = _setup(products)
        dto = handler.handle("Alice", "a@x.com", _specs((1, 1)))
        assert dto.total == dto.subtotal
        assert product_repo.stock_of(1) == 4

    def test_huge_discounted_total_rejected_and_rolled_back(self):
        products = [Product(id=i, name=f"P{i}", price=Money.of("1e30"), stock=5) for i in range(1, 5)]
        handler, order_repo, product_repo = _setup(products)
        with pytest.raises(InvalidRequestError, match="too large to price"):
            handler.handle("Alice", "a@x.com", _specs((1, 1), (2, 1), (3, 1), (4, 1)))
        assert [product_repo.stock_of(i) for i in range(1, 5)] == [5, 5, 5, 5]
        assert order_repo.list_all() == []


class BrokenOrderRepository(FakeOrderRepository):

    def commit(self) -> None:
        raise OSError("disk full")


def test_failed_order_write_leaves_stock_untouched():
    product_repo = FakeProductRepository(
        [Product(id=1, name="Widget", price=Money.of("10.00"), stock=5)]
    )
    handler = CreateOrderHandler(BrokenOrderRepository(), product_repo)

    with pytest.raises(OSError):
        handler.handle("Alice", "a@x.com", _specs((1, 2)))

    assert product_repo.stock_of(1) == 5
