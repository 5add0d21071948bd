"""JSON-file-backed implementation of BookRepository."""

from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from bookstore.domain.exceptions import ConcurrentModificationError
from bookstore.domain.model.book import DEFAULT_IMAGE, Book
from bookstore.domain.model.value_objects import Money
from bookstore.domain.repository.book_repository import BookRepository
from bookstore.infrastructure.persistence.json_file import JsonRecordFile


class JsonBookRepository(BookRepository):

    def __init__(self, file_path: Path, lock_timeout: float = 5.0) -> None:
        self._file = JsonRecordFile(file_path, lock_timeout=lock_timeout)

    # --- BookRepository interface ---------------------------------------------

    def next_id(self) -> str:
        return uuid.uuid4().hex[:24]

    def get_by_id(self, book_id: str) -> Book | None:
        for raw in self._file.load():
            if raw["id"] == book_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Book]:
        books = [self._to_domain(raw) for raw in self._file.load()]
        return sorted(books, key=lambda b: b.created_at, reverse=True)

    def save(self, book: Book) -> None:
        with self._file.locked():
            records = self._file.load()
            index = self._index_of(records, book.id)
            if index is None:
                book.version += 1
                records.append(self._to_raw(book))
            else:
                stored_version = records[index].get("version", 0)
                if stored_version != book.version:
                    raise ConcurrentModificationError(
                        f"Book '{book.id}' was modified concurrently "
                        f"(version {book.version}, stored {stored_version})"
                    )
                book.version += 1
                records[index] = self._to_raw(book)
            self._file.write(records)

    def delete(self, book_id: str) -> bool:
        with self._file.locked():
            records = self._file.load()
            index = self._index_of(records, book_id)
            if index is None:
                return False
            del records[index]
            self._file.write(records)
            return True

    def adjust_stock(self, book_id: str, delta: int) -> Book | None:
        with self._file.locked():
            records = self._file.load()
            index = self._index_of(records, book_id)
            if index is None:
                return None
            book = self._to_domain(records[index])
            book.apply_stock_delta(delta)  # raises before anything is written
            book.version += 1
            records[index] = self._to_raw(book)
            self._file.write(records)
            return book

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _index_of(records: list[dict], book_id: str) -> int | None:
        for i, raw in enumerate(records):
            if raw["id"] == book_id:
                return i
        return None

    @staticmethod
    def _to_raw(book: Book) -> dict:
        return {
            "id": book.id,
            "title": book.title,
            "author": book.author,
            "price": str(book.price.amount),
            "stock": book.stock,
            "category": book.category,
            "description": book.description,
            "image": book.image,
            "created_at": book.created_at.isoformat(),
            "version": book.version,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Book:
        return Book(
            id=raw["id"],
            title=raw["title"],
            author=raw["author"],
            price=Money(Decimal(raw["price"])),
            stock=raw["stock"],
            category=raw["category"],
            description=raw.get("description", ""),
            image=raw.get("image", DEFAULT_IMAGE),
            created_at=datetime.fromisoformat(raw["created_at"]),
            version=raw.get("version", 0),
        )
