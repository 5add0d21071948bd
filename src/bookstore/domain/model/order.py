"""Order aggregate.

An order owns its line items.  After creation only ``status`` may change;
the items and the amount are fixed at checkout time.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from bookstore.domain.exceptions import (
    EmptyOrderError,
    InvalidStatusError,
    ValidationError,
)
from bookstore.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    @classmethod
    def parse(cls, value: str | OrderStatus) -> OrderStatus:
        if isinstance(value, OrderStatus):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidStatusError(value) from None


# Admins may move an order between any two statuses.  The table is kept
# explicit so a stricter policy only has to edit this mapping.
ALLOWED_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    status: frozenset(OrderStatus) for status in OrderStatus
}


@dataclass(frozen=True)
class StatusChange:
    previous: OrderStatus
    current: OrderStatus

    @property
    def requires_restock(self) -> bool:
        """Only the first entry into CANCELLED gives stock back.

        Leaving CANCELLED does not reserve it again.
        """
        return (
            self.current is OrderStatus.CANCELLED
            and self.previous is not OrderStatus.CANCELLED
        )


@dataclass(frozen=True)
class OrderLineItem:
    """A book id, a quantity and the unit price captured at checkout."""

    book_id: str
    quantity: Quantity
    unit_price: Money  # locked at order-creation time

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass
class Order:
    """Aggregate root for customer orders.

    New orders go through ``Order.create()``.  The plain constructor is left
    for repositories reconstituting stored orders.
    """

    id: int | None
    user_id: str
    items: tuple[OrderLineItem, ...]
    amount: Money
    address: str
    phone: str
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def create(
        user_id: str,
        items: list[OrderLineItem] | tuple[OrderLineItem, ...],
        address: str,
        phone: str,
    ) -> Order:
        if not items:
            raise EmptyOrderError()
        if not user_id or not user_id.strip():
            raise ValidationError("User is required")
        if not address or not address.strip():
            raise ValidationError("Shipping address is required")
        if not phone or not phone.strip():
            raise ValidationError("Phone number is required")

        amount = Money.zero()
        for item in items:
            amount = amount + item.line_total

        return Order(
            id=None,
            user_id=user_id.strip(),
            items=tuple(items),
            amount=amount,
            address=address.strip(),
            phone=phone.strip(),
        )

    def transition_to(self, new_status: OrderStatus) -> StatusChange:
        if new_status not in ALLOWED_TRANSITIONS[self.status]:
            raise ValidationError(
                f"Cannot move order #{self.id} from {self.status.value} "
                f"to {new_status.value}"
            )
        change = StatusChange(previous=self.status, current=new_status)
        self.status = new_status
        return change

    def quantities_by_book(self) -> dict[str, int]:
        totals: dict[str, int] = {}
        for item in self.items:
            totals[item.book_id] = totals.get(item.book_id, 0) + item.quantity.value
        return totals
