"""Application service: Update Order Status use case (admin).

Any status may follow any other.  The single side effect is the restock
performed when an order first enters CANCELLED.

The status is claimed with a conditional replace *before* restocking, so
of two concurrent cancellations only one sees the PENDING -> CANCELLED
edge and restocks; the other is retried, reads CANCELLED and does not.
"""

from __future__ import annotations

import logging

from bookstore.application.dto import OrderDTO
from bookstore.application.order_view import OrderViewBuilder
from bookstore.application.retry import (
    DEFAULT_BACKOFF,
    DEFAULT_MAX_ATTEMPTS,
    retry_on_conflict,
)
from bookstore.domain.exceptions import (
    ConcurrentModificationError,
    OrderNotFoundError,
)
from bookstore.domain.model.order import OrderStatus
from bookstore.domain.repository.book_repository import BookRepository
from bookstore.domain.repository.order_repository import OrderRepository
from bookstore.domain.service.stock_reservation_service import (
    StockReservationService,
)

logger = logging.getLogger(__name__)


class UpdateOrderStatusHandler:

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

    def handle(self, order_id: int, new_status: str | OrderStatus) -> OrderDTO:
        status = OrderStatus.parse(new_status)
        return self._apply(order_id, status)

    @retry_on_conflict
    def _apply(self, order_id: int, status: OrderStatus) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)

        change = order.transition_to(status)
        if change.previous is change.current:
            return OrderViewBuilder(self._book_repo).to_dto(order)

        if not self._order_repo.replace_status(order_id, change.previous, change.current):
            raise ConcurrentModificationError(
                f"Order #{order_id} changed while moving it to {status.value}"
            )

        if change.requires_restock:
            try:
                StockReservationService(self._book_repo).restock_for_order(order)
            except BaseException:
                self._revert_status(order_id, change.current, change.previous)
                raise

        logger.info(
            "Order #%s moved from %s to %s%s",
            order_id, change.previous.value, change.current.value,
            " (restocked)" if change.requires_restock else "",
        )
        return OrderViewBuilder(self._book_repo).to_dto(order)

    def _revert_status(self, order_id: int, current: OrderStatus, previous: OrderStatus) -> None:
        try:
            reverted = self._order_repo.replace_status(order_id, current, previous)
        except Exception:
            logger.exception("Failed to revert order #%s to %s", order_id, previous.value)
            return
        if not reverted:
            logger.error(
                "Order #%s changed again before its status could be reverted to %s",
                order_id, previous.value,
            )
