"""Application services: catalog browsing (queries)."""

from __future__ import annotations

from bookstore.application.dto import BookDTO
from bookstore.domain.exceptions import BookNotFoundError
from bookstore.domain.model.book import Book
from bookstore.domain.model.value_objects import Money
from bookstore.domain.repository.book_repository import BookRepository


def _to_dto(book: Book) -> BookDTO:
    return BookDTO(
        id=book.id,
        title=book.title,
        author=book.author,
        price=str(book.price),
        stock=book.stock,
        category=book.category,
        description=book.description,
        image=book.image,
    )


class ListBooksHandler:

    def __init__(self, book_repo: BookRepository) -> None:
        self._book_repo = book_repo

    def handle(
        self,
        category: str | None = None,
        min_price: str | None = None,
        max_price: str | None = None,
        search: str | None = None,
    ) -> list[BookDTO]:
        """List books matching every given filter, newest first.

        Price bounds are inclusive; ``search`` is a case-insensitive
        substring match on title or author.
        """
        low = Money.of(min_price) if min_price is not None else None
        high = Money.of(max_price) if max_price is not None else None
        needle = search.strip().lower() if search else None

        result = []
        for book in self._book_repo.list_all():
            if category and book.category != category:
                continue
            if low is not None and book.price < low:
                continue
            if high is not None and book.price > high:
                continue
            if needle and needle not in book.title.lower() and needle not in book.author.lower():
                continue
            result.append(_to_dto(book))
        return result


class ShowBookHandler:

    def __init__(self, book_repo: BookRepository) -> None:
        self._book_repo = book_repo

    def handle(self, book_id: str) -> BookDTO:
        book = self._book_repo.get_by_id(book_id)
        if book is None:
            raise BookNotFoundError(book_id)
        return _to_dto(book)


class ListCategoriesHandler:

    def __init__(self, book_repo: BookRepository) -> None:
        self._book_repo = book_repo

    def handle(self) -> list[str]:
        return sorted({book.category for book in self._book_repo.list_all()})
