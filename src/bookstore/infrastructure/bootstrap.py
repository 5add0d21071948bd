"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from bookstore.application.create_order import CreateOrderHandler
from bookstore.application.update_book import UpdateBookHandler
from bookstore.application.update_order_status import UpdateOrderStatusHandler
from bookstore.infrastructure.config import Settings, load_settings
from bookstore.infrastructure.persistence.json_book_repository import (
    JsonBookRepository,
)
from bookstore.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)


def settings() -> Settings:
    return load_settings()


def book_repository(config: Settings | None = None) -> JsonBookRepository:
    config = config or settings()
    return JsonBookRepository(config.books_file, lock_timeout=config.lock_timeout)


def order_repository(config: Settings | None = None) -> JsonOrderRepository:
    config = config or settings()
    return JsonOrderRepository(config.orders_file, lock_timeout=config.lock_timeout)


def create_order_handler(config: Settings | None = None) -> CreateOrderHandler:
    config = config or settings()
    return CreateOrderHandler(
        order_repo=order_repository(config),
        book_repo=book_repository(config),
        max_attempts=config.max_attempts,
    )


def update_order_status_handler(config: Settings | None = None) -> UpdateOrderStatusHandler:
    config = config or settings()
    return UpdateOrderStatusHandler(
        order_repo=order_repository(config),
        book_repo=book_repository(config),
        max_attempts=config.max_attempts,
    )


def update_book_handler(config: Settings | None = None) -> UpdateBookHandler:
    config = config or settings()
    return UpdateBookHandler(book_repo=book_repository(config), max_attempts=config.max_attempts)
