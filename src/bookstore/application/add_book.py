"""Application service: Add Book use case (admin)."""

from __future__ import annotations

import logging

from bookstore.domain.exceptions import ValidationError
from bookstore.domain.model.book import DEFAULT_IMAGE, Book
from bookstore.domain.model.value_objects import Money
from bookstore.domain.repository.book_repository import BookRepository

logger = logging.getLogger(__name__)


class AddBookHandler:

    def __init__(self, book_repo: BookRepository) -> None:
        self._book_repo = book_repo

    def handle(
        self,
        title: str,
        author: str,
        price: str,
        stock: int,
        category: str,
        description: str = "",
        image: str | None = None,
    ) -> Book:
        """Add a new book to the catalog."""
        for label, value in (("title", title), ("author", author), ("category", category)):
            if not value or not value.strip():
                raise ValidationError(f"Book {label} is required")

        book = Book(
            id=self._book_repo.next_id(),
            title=title.strip(),
            author=author.strip(),
            price=Money.of(price),
            stock=stock,
            category=category.strip(),
            description=description,
            image=image or DEFAULT_IMAGE,
        )
        self._book_repo.save(book)
        logger.info("Book %s '%s' added with stock %d", book.id, book.title, book.stock)
        return book
