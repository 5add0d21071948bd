"""Book aggregate: one catalog entry and its stock counter.

Books live independently of orders.  Orders only hold a book's id, so a
book may be deleted while orders that mention it still exist.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from bookstore.domain.exceptions import InsufficientStockError, ValidationError
from bookstore.domain.model.value_objects import Money

DEFAULT_IMAGE = "default-book.jpg"


@dataclass
class Book:
    """Aggregate root for a catalog entry.

    Invariants:
    - ``stock`` is never negative
    - ``price`` is a non-negative Money

    ``version`` is owned by the repository; it changes on every persisted
    write so stale copies can be detected on save.
    """

    id: str
    title: str
    author: str
    price: Money
    stock: int
    category: str
    description: str = ""
    image: str = DEFAULT_IMAGE
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    version: int = 0

    def __post_init__(self) -> None:
        _check_stock(self.stock)

    # --- Stock ----------------------------------------------------------------

    def apply_stock_delta(self, delta: int) -> None:
        """Add *delta* (negative to reserve, positive to restock)."""
        if isinstance(delta, bool) or not isinstance(delta, int):
            raise ValidationError(f"Stock delta must be an integer, got {delta!r}")
        if self.stock + delta < 0:
            raise InsufficientStockError(self.id, requested=-delta, available=self.stock)
        self.stock += delta

    def set_stock(self, stock: int) -> None:
        _check_stock(stock)
        self.stock = stock

    # --- Admin edits ----------------------------------------------------------

    def update_details(
        self,
        title: str | None = None,
        author: str | None = None,
        price: Money | None = None,
        stock: int | None = None,
        category: str | None = None,
        description: str | None = None,
        image: str | None = None,
    ) -> None:
        """Apply a partial edit; blank or missing fields keep their value.

        Existing orders are unaffected by a price change because they hold
        their own price snapshot.
        """
        if stock is not None:
            self.set_stock(stock)
        if price is not None:
            self.price = price
        if title and title.strip():
            self.title = title.strip()
        if author and author.strip():
            self.author = author.strip()
        if category and category.strip():
            self.category = category.strip()
        if description:
            self.description = description
        if image:
            self.image = image


def _check_stock(stock: int) -> None:
    if isinstance(stock, bool) or not isinstance(stock, int):
        raise ValidationError(f"Stock must be an integer, got {type(stock).__name__}")
    if stock < 0:
        raise ValidationError(f"Stock cannot be negative, got {stock}")
