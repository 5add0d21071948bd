"""Application service: Show Order use case (query)."""

from __future__ import annotations

from bookstore.application.dto import OrderDTO
from bookstore.application.order_view import OrderViewBuilder
from bookstore.domain.exceptions import AccessDeniedError, OrderNotFoundError
from bookstore.domain.repository.book_repository import BookRepository
from bookstore.domain.repository.order_repository import OrderRepository


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository, book_repo: BookRepository) -> None:
        self._order_repo = order_repo
        self._book_repo = book_repo

    def handle(
        self,
        order_id: int,
        requester_id: str | None = None,
        is_admin: bool = True,
    ) -> OrderDTO:
        """Return one order; non-admins may only see their own."""
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        if not is_admin and order.user_id != requester_id:
            raise AccessDeniedError(f"Access to order #{order_id} denied")
        return OrderViewBuilder(self._book_repo).to_dto(order)
