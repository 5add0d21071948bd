"""Integration tests for the UpdateOrderStatus use case."""

import pytest

from bookstore.application.create_order import CreateOrderHandler
from bookstore.application.delete_book import DeleteBookHandler
from bookstore.application.dto import OrderItemSpec
from bookstore.application.update_order_status import UpdateOrderStatusHandler
from bookstore.domain.exceptions import (
    ConcurrentModificationError,
    InvalidStatusError,
    OrderNotFoundError,
)
from bookstore.domain.model.book import Book
from bookstore.domain.model.order import OrderStatus
from bookstore.domain.model.value_objects import Money
from tests.fakes import FakeBookRepository, FakeOrderRepository


def _setup():
    books = FakeBookRepository([
        Book(id="B1", title="Dune", author="Frank Herbert",
             price=Money.of("10.00"), stock=3, category="Science Fiction"),
        Book(id="B2", title="Emma", author="Jane Austen",
             price=Money.of("7.50"), stock=10, category="Romance"),
    ])
    orders = FakeOrderRepository()
    create = CreateOrderHandler(orders, books, backoff=0)
    update = UpdateOrderStatusHandler(orders, books, backoff=0)
    return create, update, orders, books


def _place(create, *items):
    specs = [OrderItemSpec(book_id, qty) for book_id, qty in items]
    return create.handle("user1", specs, "addr", "555-0100")


class TestCancellation:

    def test_cancel_restocks(self):
        create, update, orders, books = _setup()
        dto = _place(create, ("B1", 2))
        assert books.stock_of("B1") == 1

        result = update.handle(dto.id, "cancelled")

        assert result.status == "cancelled"
        assert books.stock_of("B1") == 3
        assert orders.get_by_id(dto.id).status is OrderStatus.CANCELLED

    def test_second_cancel_does_not_restock_again(self):
        create, update, _, books = _setup()
        dto = _place(create, ("B1", 2))

        update.handle(dto.id, "cancelled")
        update.handle(dto.id, "cancelled")

        assert books.stock_of("B1") == 3

    def test_cancel_after_shipping_still_restocks_once(self):
        create, update, _, books = _setup()
        dto = _place(create, ("B1", 1), ("B2", 4))

        update.handle(dto.id, "processing")
        update.handle(dto.id, "shipped")
        update.handle(dto.id, "cancelled")

        assert books.stock_of("B1") == 3
        assert books.stock_of("B2") == 10

    def test_uncancel_does_not_reserve_again(self):
        create, update, _, books = _setup()
        dto = _place(create, ("B1", 2))

        update.handle(dto.id, "cancelled")
        update.handle(dto.id, "pending")

        assert books.stock_of("B1") == 3

    def test_cancel_uncancel_cancel_restocks_twice(self):
        """Each fresh entry into CANCELLED restocks; only repeats are no-ops."""
        create, update, _, books = _setup()
        dto = _place(create, ("B1", 2))

        update.handle(dto.id, "cancelled")
        update.handle(dto.id, "processing")
        update.handle(dto.id, "cancelled")

        assert books.stock_of("B1") == 5

    def test_deleted_book_is_skipped(self):
        create, update, _, books = _setup()
        dto = _place(create, ("B1", 1), ("B2", 2))
        DeleteBookHandler(books).handle("B1")

        result = update.handle(dto.id, "cancelled")

        assert result.status == "cancelled"
        assert books.stock_of("B2") == 10
        assert books.get_by_id("B1") is None

    def test_restock_failure_reverts_status(self):
        class LockedCatalog(FakeBookRepository):
            def adjust_stock(self, book_id, delta):
                if delta > 0:
                    raise ConcurrentModificationError("lock timeout")
                return super().adjust_stock(book_id, delta)

        books = LockedCatalog([
            Book(id="B1", title="Dune", author="F", price=Money.of("10.00"),
                 stock=3, category="SF"),
        ])
        orders = FakeOrderRepository()
        dto = CreateOrderHandler(orders, books).handle(
            "user1", [OrderItemSpec("B1", 2)], "addr", "555"
        )
        update = UpdateOrderStatusHandler(orders, books, max_attempts=2, backoff=0)

        with pytest.raises(ConcurrentModificationError):
            update.handle(dto.id, "cancelled")

        assert orders.get_by_id(dto.id).status is OrderStatus.PENDING
        assert books.stock_of("B1") == 1


class TestOtherTransitions:

    @pytest.mark.parametrize("status", ["processing", "shipped", "delivered", "pending"])
    def test_non_cancel_statuses_leave_stock(self, status):
        create, update, orders, books = _setup()
        dto = _place(create, ("B1", 2))

        result = update.handle(dto.id, status)

        assert result.status == status
        assert orders.get_by_id(dto.id).status.value == status
        assert books.stock_of("B1") == 1

    def test_accepts_enum(self):
        create, update, _, _ = _setup()
        dto = _place(create, ("B1", 1))
        assert update.handle(dto.id, OrderStatus.DELIVERED).status == "delivered"

    def test_amount_unchanged_by_transitions(self):
        create, update, orders, _ = _setup()
        dto = _place(create, ("B1", 2))
        update.handle(dto.id, "shipped")
        assert str(orders.get_by_id(dto.id).amount) == "$20.00"


class TestValidation:

    def test_invalid_status_rejected(self):
        create, update, orders, _ = _setup()
        dto = _place(create, ("B1", 1))
        with pytest.raises(InvalidStatusError):
            update.handle(dto.id, "lost")
        assert orders.get_by_id(dto.id).status is OrderStatus.PENDING

    def test_invalid_status_checked_before_lookup(self):
        _, update, _, _ = _setup()
        with pytest.raises(InvalidStatusError):
            update.handle(999, "bogus")

    def test_unknown_order_rejected(self):
        _, update, _, _ = _setup()
        with pytest.raises(OrderNotFoundError, match="#999"):
            update.handle(999, "shipped")
