"""Abstract repository for the Book aggregate.

Defined in the domain layer so the domain never depends on
infrastructure.  Concrete stores live in the infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from bookstore.domain.model.book import Book


class BookRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate an unused book ID."""

    @abstractmethod
    def get_by_id(self, book_id: str) -> Book | None:
        """Return a copy of the stored book, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Book]:
        """Return every book, newest first."""

    @abstractmethod
    def save(self, book: Book) -> None:
        """Insert a new book or replace an existing one.

        Replacing requires ``book.version`` to match the stored version,
        otherwise ConcurrentModificationError is raised.  On success the
        version is bumped on both the stored record and *book*.
        """

    @abstractmethod
    def delete(self, book_id: str) -> bool:
        """Remove a book; return False if it did not exist."""

    @abstractmethod
    def adjust_stock(self, book_id: str, delta: int) -> Book | None:
        """Atomically apply ``stock += delta`` and return the updated book.

        Returns None if the book does not exist.  Raises
        InsufficientStockError, leaving the stored stock untouched, if the
        result would be negative.  The check and the write must not
        interleave with any other write to the same book.
        """
