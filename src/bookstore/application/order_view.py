"""Read-side projection: orders joined with catalog details for display.

The join is presentation only.  A book that has been deleted since the
order was placed renders as a placeholder instead of failing the read.
"""

from __future__ import annotations

from bookstore.application.dto import OrderDTO, OrderLineItemDTO
from bookstore.domain.model.book import DEFAULT_IMAGE, Book
from bookstore.domain.model.order import Order
from bookstore.domain.repository.book_repository import BookRepository

UNAVAILABLE_TITLE = "Unavailable book"


class OrderViewBuilder:

    def __init__(self, book_repo: BookRepository) -> None:
        self._book_repo = book_repo

    def to_dto(self, order: Order) -> OrderDTO:
        return self.to_dtos([order])[0]

    def to_dtos(self, orders: list[Order]) -> list[OrderDTO]:
        books: dict[str, Book | None] = {}
        for order in orders:
            for item in order.items:
                if item.book_id not in books:
                    books[item.book_id] = self._book_repo.get_by_id(item.book_id)
        return [self._build(order, books) for order in orders]

    @staticmethod
    def _build(order: Order, books: dict[str, Book | None]) -> OrderDTO:
        items = []
        for item in order.items:
            book = books.get(item.book_id)
            items.append(
                OrderLineItemDTO(
                    book_id=item.book_id,
                    title=book.title if book else UNAVAILABLE_TITLE,
                    author=book.author if book else "",
                    image=book.image if book else DEFAULT_IMAGE,
                    quantity=item.quantity.value,
                    unit_price=str(item.unit_price),
                    line_total=str(item.line_total),
                    available=book is not None,
                )
            )
        return OrderDTO(
            id=order.id,  # type: ignore[arg-type]
            user_id=order.user_id,
            status=order.status.value,
            items=items,
            amount=str(order.amount),
            address=order.address,
            phone=order.phone,
            created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
        )
