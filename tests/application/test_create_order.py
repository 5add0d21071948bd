"""Integration tests for the CreateOrder use case.

Uses in-memory fake repositories — no file I/O.
"""

import pytest

from bookstore.application.create_order import CreateOrderHandler
from bookstore.application.dto import OrderItemSpec
from bookstore.domain.exceptions import (
    BookNotFoundError,
    ConcurrentModificationError,
    EmptyOrderError,
    InsufficientStockError,
    ValidationError,
)
from bookstore.domain.model.book import Book
from bookstore.domain.model.order import OrderStatus
from bookstore.domain.model.value_objects import Money
from tests.fakes import (
    FailingOrderRepository,
    FakeBookRepository,
    FakeOrderRepository,
    FlakyBookRepository,
)


def _catalog() -> list[Book]:
    return [
        Book(id="B1", title="Dune", author="Frank Herbert",
             price=Money.of("10.00"), stock=3, category="Science Fiction"),
        Book(id="B2", title="Emma", author="Jane Austen",
             price=Money.of("7.50"), stock=10, category="Romance"),
    ]


def _setup(
    book_repo: FakeBookRepository | None = None,
    order_repo: FakeOrderRepository | None = None,
) -> tuple[CreateOrderHandler, FakeOrderRepository, FakeBookRepository]:
    book_repo = book_repo or FakeBookRepository(_catalog())
    order_repo = order_repo or FakeOrderRepository()
    handler = CreateOrderHandler(order_repo, book_repo, backoff=0)
    return handler, order_repo, book_repo


class TestCreateOrderHappyPath:

    def test_reserves_stock_and_prices_order(self):
        handler, _, books = _setup()
        dto = handler.handle("user1", [OrderItemSpec("B1", 2)], "addr", "555-0100")

        assert dto.amount == "$20.00"
        assert dto.status == "pending"
        assert books.stock_of("B1") == 1

    def test_multiple_items(self):
        handler, _, books = _setup()
        dto = handler.handle(
            "user1", [OrderItemSpec("B1", 1), OrderItemSpec("B2", 4)], "addr", "555"
        )
        assert dto.amount == "$40.00"
        assert books.stock_of("B1") == 2
        assert books.stock_of("B2") == 6

    def test_persists_order_with_price_snapshot(self):
        handler, orders, _ = _setup()
        dto = handler.handle("user1", [OrderItemSpec("B2", 2)], " 1 Main St ", "555")

        saved = orders.get_by_id(dto.id)
        assert saved.status is OrderStatus.PENDING
        assert saved.user_id == "user1"
        assert saved.address == "1 Main St"
        assert saved.items[0].unit_price == Money.of("7.50")
        assert saved.amount == Money.of("15.00")

    def test_response_joins_catalog_details(self):
        handler, _, _ = _setup()
        dto = handler.handle("user1", [OrderItemSpec("B1", 1)], "addr", "555")
        item = dto.items[0]
        assert (item.title, item.author, item.available) == ("Dune", "Frank Herbert", True)
        assert item.unit_price == "$10.00"

    def test_sequential_ids(self):
        handler, _, _ = _setup()
        first = handler.handle("user1", [OrderItemSpec("B2", 1)], "addr", "555")
        second = handler.handle("user2", [OrderItemSpec("B2", 1)], "addr", "555")
        assert second.id == first.id + 1


class TestCreateOrderPriceLock:

    def test_later_price_change_does_not_touch_order(self):
        handler, orders, books = _setup()
        dto = handler.handle("user1", [OrderItemSpec("B1", 2)], "addr", "555")

        book = books.get_by_id("B1")
        book.update_details(price=Money.of("99.99"))
        books.save(book)

        saved = orders.get_by_id(dto.id)
        assert saved.amount == Money.of("20.00")
        assert saved.items[0].unit_price == Money.of("10.00")


class TestCreateOrderValidation:

    def test_empty_order_rejected(self):
        handler, orders, _ = _setup()
        with pytest.raises(EmptyOrderError):
            handler.handle("user1", [], "addr", "555")
        assert orders.list_all() == []

    def test_unknown_book_rejected(self):
        handler, orders, books = _setup()
        with pytest.raises(BookNotFoundError, match="NOPE"):
            handler.handle("user1", [OrderItemSpec("B1", 1), OrderItemSpec("NOPE", 1)], "a", "5")
        assert books.stock_of("B1") == 3
        assert orders.list_all() == []

    def test_zero_quantity_rejected(self):
        handler, _, books = _setup()
        with pytest.raises(ValidationError, match="must be positive"):
            handler.handle("user1", [OrderItemSpec("B1", 0)], "addr", "555")
        assert books.stock_of("B1") == 3

    def test_missing_address_rejected_without_reserving(self):
        handler, _, books = _setup()
        with pytest.raises(ValidationError, match="address"):
            handler.handle("user1", [OrderItemSpec("B1", 1)], "", "555")
        assert books.stock_of("B1") == 3

    def test_insufficient_stock_leaves_stock_alone(self):
        handler, _, books = _setup()
        handler.handle("user1", [OrderItemSpec("B1", 2)], "addr", "555-0100")

        with pytest.raises(InsufficientStockError):
            handler.handle("user2", [OrderItemSpec("B1", 2)], "addr", "555-0101")
        assert books.stock_of("B1") == 1

    def test_failing_item_does_not_reserve_earlier_items(self):
        handler, orders, books = _setup()
        with pytest.raises(InsufficientStockError):
            handler.handle(
                "user1",
                [OrderItemSpec("B2", 5), OrderItemSpec("B1", 999999)],
                "addr",
                "555",
            )
        assert books.stock_of("B2") == 10
        assert books.stock_of("B1") == 3
        assert orders.list_all() == []


class TestCreateOrderFailureRecovery:

    def test_persist_failure_gives_stock_back(self):
        handler, _, books = _setup(order_repo=FailingOrderRepository())
        with pytest.raises(OSError):
            handler.handle("user1", [OrderItemSpec("B1", 2), OrderItemSpec("B2", 1)], "a", "5")
        assert books.stock_of("B1") == 3
        assert books.stock_of("B2") == 10

    def test_conflict_is_retried(self):
        books = FlakyBookRepository(_catalog(), failures=1)
        handler, orders, _ = _setup(book_repo=books)

        dto = handler.handle("user1", [OrderItemSpec("B1", 1)], "addr", "555")

        assert books.stock_of("B1") == 2
        assert orders.get_by_id(dto.id) is not None
        assert books.adjust_calls == 2

    def test_conflict_surfaces_after_max_attempts(self):
        books = FlakyBookRepository(_catalog(), failures=10)
        handler, orders, _ = _setup(book_repo=books)

        with pytest.raises(ConcurrentModificationError):
            handler.handle("user1", [OrderItemSpec("B1", 1)], "addr", "555")

        assert books.adjust_calls == 3
        assert books.stock_of("B1") == 3
        assert orders.list_all() == []
