"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

from bookstore.domain.model.order import Order, OrderLineItem, OrderStatus
from bookstore.domain.model.value_objects import Money, Quantity
from bookstore.domain.repository.order_repository import OrderRepository
from bookstore.infrastructure.persistence.json_file import JsonRecordFile


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path, lock_timeout: float = 5.0) -> None:
        self._file = JsonRecordFile(file_path, lock_timeout=lock_timeout)

    # --- OrderRepository interface --------------------------------------------

    def next_id(self) -> int:
        return self._next_id(self._file.load())

    def get_by_id(self, order_id: int) -> Order | None:
        for raw in self._file.load():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Order]:
        return self._newest_first(self._to_domain(raw) for raw in self._file.load())

    def list_by_user(self, user_id: str) -> list[Order]:
        return self._newest_first(
            self._to_domain(raw) for raw in self._file.load() if raw["user_id"] == user_id
        )

    def add(self, order: Order) -> None:
        with self._file.locked():
            records = self._file.load()
            order.id = self._next_id(records)
            records.append(self._to_raw(order))
            self._file.write(records)

    def replace_status(
        self, order_id: int, expected: OrderStatus, new: OrderStatus
    ) -> bool:
        with self._file.locked():
            records = self._file.load()
            for raw in records:
                if raw["id"] == order_id:
                    if raw["status"] != expected.value:
                        return False
                    raw["status"] = new.value
                    self._file.write(records)
                    return True
            return False

    # --- Helpers --------------------------------------------------------------

    @staticmethod
    def _next_id(records: list[dict]) -> int:
        return max((raw["id"] for raw in records), default=0) + 1

    @staticmethod
    def _newest_first(orders) -> list[Order]:
        return sorted(orders, key=lambda o: (o.created_at, o.id), reverse=True)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "user_id": order.user_id,
            "status": order.status.value,
            "amount": str(order.amount.amount),
            "address": order.address,
            "phone": order.phone,
            "created_at": order.created_at.isoformat(),
            "items": [
                {
                    "book_id": item.book_id,
                    "quantity": item.quantity.value,
                    "unit_price": str(item.unit_price.amount),
                }
                for item in order.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        items = tuple(
            OrderLineItem(
                book_id=i["book_id"],
                quantity=Quantity(i["quantity"]),
                unit_price=Money(Decimal(i["unit_price"])),
            )
            for i in raw["items"]
        )
        # amount is stored, never recomputed from the items
        return Order(
            id=raw["id"],
            user_id=raw["user_id"],
            items=items,
            amount=Money(Decimal(raw["amount"])),
            address=raw["address"],
            phone=raw["phone"],
            status=OrderStatus(raw["status"]),
            created_at=datetime.fromisoformat(raw["created_at"]),
        )
