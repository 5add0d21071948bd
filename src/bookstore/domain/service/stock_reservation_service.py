"""Domain service: stock reservation and restock.

Coordinates stock changes across several Book aggregates on behalf of a
single order.  Each individual change goes through the repository's
atomic ``adjust_stock``; this service makes the *set* of changes
all-or-nothing by compensating the ones already applied when a later one
fails.

Reservation is two-phase:
  Phase 1: read and validate every book, no writes.  Cheap rejection of
           the common case (not enough stock) without touching anything.
  Phase 2: reserve with ``adjust_stock``.  Another order may still win a
           race between the phases; ``adjust_stock`` then refuses and the
           reservations made so far are given back.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from bookstore.domain.exceptions import BookNotFoundError, InsufficientStockError
from bookstore.domain.model.order import Order
from bookstore.domain.repository.book_repository import BookRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StockAdjustment:
    book_id: str
    delta: int


class StockReservationService:

    def __init__(self, book_repo: BookRepository) -> None:
        self._book_repo = book_repo

    def reserve_for_order(self, order: Order) -> list[StockAdjustment]:
        """Take every line item's quantity out of stock, or nothing at all.

        Returns the applied adjustments so the caller can ``undo`` them if
        a later step (persisting the order) fails.
        """
        # Phase 1: validate against current stock, duplicates summed
        for book_id, qty in order.quantities_by_book().items():
            book = self._book_repo.get_by_id(book_id)
            if book is None:
                raise BookNotFoundError(book_id)
            if book.stock < qty:
                raise InsufficientStockError(book_id, requested=qty, available=book.stock)

        # Phase 2: reserve, compensating on failure
        applied: list[StockAdjustment] = []
        try:
            for line in order.items:
                adjustment = StockAdjustment(line.book_id, -line.quantity.value)
                if self._book_repo.adjust_stock(adjustment.book_id, adjustment.delta) is None:
                    raise BookNotFoundError(line.book_id)
                applied.append(adjustment)
        except BaseException:
            self.undo(applied)
            raise
        return applied

    def restock_for_order(self, order: Order) -> list[StockAdjustment]:
        """Give every line item's quantity back to the catalog.

        Books deleted since checkout are skipped: their stock has nowhere to
        go.  Any other failure reverts the restocks already applied.
        """
        applied: list[StockAdjustment] = []
        try:
            for line in order.items:
                adjustment = StockAdjustment(line.book_id, line.quantity.value)
                if self._book_repo.adjust_stock(adjustment.book_id, adjustment.delta) is None:
                    logger.warning(
                        "Skipping restock of %d x book %s for order #%s: book no longer exists",
                        line.quantity.value, line.book_id, order.id,
                    )
                    continue
                applied.append(adjustment)
        except BaseException:
            self.undo(applied)
            raise
        return applied

    def undo(self, applied: list[StockAdjustment]) -> None:
        """Apply the inverse of *applied*, newest first.

        A failing compensation is logged and the rest still run; the caller
        is already propagating the error that triggered the undo.
        """
        for adjustment in reversed(applied):
            try:
                self._book_repo.adjust_stock(adjustment.book_id, -adjustment.delta)
            except Exception:
                logger.exception(
                    "Failed to compensate stock change %+d on book %s",
                    adjustment.delta, adjustment.book_id,
                )
