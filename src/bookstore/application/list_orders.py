"""Application services: order listings (queries), newest first."""

from __future__ import annotations

from bookstore.application.dto import OrderDTO
from bookstore.application.order_view import OrderViewBuilder
from bookstore.domain.exceptions import ValidationError
from bookstore.domain.repository.book_repository import BookRepository
from bookstore.domain.repository.order_repository import OrderRepository


class ListUserOrdersHandler:

    def __init__(self, order_repo: OrderRepository, book_repo: BookRepository) -> None:
        self._order_repo = order_repo
        self._book_repo = book_repo

    def handle(self, user_id: str) -> list[OrderDTO]:
        if not user_id or not user_id.strip():
            raise ValidationError("User is required")
        orders = self._order_repo.list_by_user(user_id.strip())
        return OrderViewBuilder(self._book_repo).to_dtos(orders)


class ListAllOrdersHandler:

    def __init__(self, order_repo: OrderRepository, book_repo: BookRepository) -> None:
        self._order_repo = order_repo
        self._book_repo = book_repo

    def handle(self) -> list[OrderDTO]:
        return OrderViewBuilder(self._book_repo).to_dtos(self._order_repo.list_all())
