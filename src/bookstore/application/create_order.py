"""Application service: Create Order use case (checkout).

The only place that coordinates the catalog and the order ledger when an
order is born:

1. Resolve each requested book and snapshot its current price.
2. Let the Order aggregate validate and compute the amount once.
3. Reserve stock through the domain service (all-or-nothing).
4. Persist the order; if that fails, give the reserved stock back.
"""

from __future__ import annotations

import logging

from bookstore.application.dto import OrderDTO, OrderItemSpec
from bookstore.application.order_view import OrderViewBuilder
from bookstore.application.retry import (
    DEFAULT_BACKOFF,
    DEFAULT_MAX_ATTEMPTS,
    retry_on_conflict,
)
from bookstore.domain.exceptions import BookNotFoundError, EmptyOrderError
from bookstore.domain.model.order import Order, OrderLineItem
from bookstore.domain.model.value_objects import Quantity
from bookstore.domain.repository.book_repository import BookRepository
from bookstore.domain.repository.order_repository import OrderRepository
from bookstore.domain.service.stock_reservation_service import (
    StockReservationService,
)

logger = logging.getLogger(__name__)


class CreateOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        book_repo: BookRepository,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        backoff: float = DEFAULT_BACKOFF,
    ) -> None:
        self._order_repo = order_repo
        self._book_repo = book_repo
        self._max_attempts = max_attempts
        self._backoff = backoff

    @retry_on_conflict
    def handle(
        self,
        user_id: str,
        item_specs: list[OrderItemSpec],
        address: str,
        phone: str,
    ) -> OrderDTO:
        if not item_specs:
            raise EmptyOrderError()

        line_items: list[OrderLineItem] = []
        for spec in item_specs:
            book = self._book_repo.get_by_id(spec.book_id)
            if book is None:
                raise BookNotFoundError(spec.book_id)
            line_items.append(
                OrderLineItem(
                    book_id=book.id,
                    quantity=Quantity(spec.quantity),
                    unit_price=book.price,  # <-- price snapshot
                )
            )

        order = Order.create(user_id=user_id, items=line_items, address=address, phone=phone)

        svc = StockReservationService(self._book_repo)
        reserved = svc.reserve_for_order(order)
        try:
            self._order_repo.add(order)
        except BaseException:
            svc.undo(reserved)
            raise

        logger.info(
            "Order #%s created for user %s: %d line item(s), amount %s",
            order.id, order.user_id, len(order.items), order.amount,
        )
        return OrderViewBuilder(self._book_repo).to_dto(order)
