"""Application service: Update Book use case (admin)."""

from __future__ import annotations

import logging

from bookstore.application.retry import (
    DEFAULT_BACKOFF,
    DEFAULT_MAX_ATTEMPTS,
    retry_on_conflict,
)
from bookstore.domain.exceptions import BookNotFoundError
from bookstore.domain.model.book import Book
from bookstore.domain.model.value_objects import Money
from bookstore.domain.repository.book_repository import BookRepository

logger = logging.getLogger(__name__)


class UpdateBookHandler:

    def __init__(
        self,
        book_repo: BookRepository,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        backoff: float = DEFAULT_BACKOFF,
    ) -> None:
        self._book_repo = book_repo
        self._max_attempts = max_attempts
        self._backoff = backoff

    @retry_on_conflict
    def handle(
        self,
        book_id: str,
        title: str | None = None,
        author: str | None = None,
        price: str | None = None,
        stock: int | None = None,
        category: str | None = None,
        description: str | None = None,
        image: str | None = None,
    ) -> Book:
        """Edit a book in place.

        Setting ``stock`` here overrides the counter outright.  The save is
        version-checked, so an order reserving stock in between makes this
        attempt fail and retry against the fresh record.  Existing orders
        keep their price snapshot.
        """
        book = self._book_repo.get_by_id(book_id)
        if book is None:
            raise BookNotFoundError(book_id)

        book.update_details(
            title=title,
            author=author,
            price=Money.of(price) if price is not None else None,
            stock=stock,
            category=category,
            description=description,
            image=image,
        )
        self._book_repo.save(book)
        logger.info("Book %s updated (stock=%d, price=%s)", book.id, book.stock, book.price)
        return book
