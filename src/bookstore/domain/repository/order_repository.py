"""Abstract repository for the Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from bookstore.domain.model.order import Order, OrderStatus


class OrderRepository(ABC):

    @abstractmethod
    def next_id(self) -> int:
        """Generate the next unique order ID."""

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Order]:
        """Return every order, newest first."""

    @abstractmethod
    def list_by_user(self, user_id: str) -> list[Order]:
        """Return a user's orders, newest first."""

    @abstractmethod
    def add(self, order: Order) -> None:
        """Persist a new order, assigning ``order.id``."""

    @abstractmethod
    def replace_status(
        self, order_id: int, expected: OrderStatus, new: OrderStatus
    ) -> bool:
        """Set the status only if it still equals *expected*.

        Returns False when the order is missing or its status changed since
        the caller read it.
        """
