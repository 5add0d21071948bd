"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BookDTO:
    id: str
    title: str
    author: str
    price: str
    stock: int
    category: str
    description: str
    image: str


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: which book the customer asked for and how many."""

    book_id: str
    quantity: int


@dataclass(frozen=True)
class OrderLineItemDTO:
    """Output: a line item joined with the catalog entry it points to."""

    book_id: str
    title: str
    author: str
    image: str
    quantity: int
    unit_price: str  # formatted, e.g. "$12.99"
    line_total: str
    available: bool  # False when the book has left the catalog


@dataclass(frozen=True)
class OrderDTO:
    id: int
    user_id: str
    status: str
    items: list[OrderLineItemDTO]
    amount: str
    address: str
    phone: str
    created_at: str
