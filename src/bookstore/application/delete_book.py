"""Application service: Delete Book use case (admin).

Orders that reference the book keep its id and price snapshot; readers
render the missing entry as a placeholder and cancellations skip its
restock.
"""

from __future__ import annotations

import logging

from bookstore.domain.exceptions import BookNotFoundError
from bookstore.domain.repository.book_repository import BookRepository

logger = logging.getLogger(__name__)


class DeleteBookHandler:

    def __init__(self, book_repo: BookRepository) -> None:
        self._book_repo = book_repo

    def handle(self, book_id: str) -> None:
        if not self._book_repo.delete(book_id):
            raise BookNotFoundError(book_id)
        logger.info("Book %s removed from the catalog", book_id)
