"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from bookstore.application.dto import OrderDTO, OrderItemSpec
from bookstore.application.list_orders import ListAllOrdersHandler, ListUserOrdersHandler
from bookstore.application.show_order import ShowOrderHandler
from bookstore.domain.exceptions import DomainException
from bookstore.domain.model.order import OrderStatus
from bookstore.infrastructure.bootstrap import (
    book_repository,
    create_order_handler,
    order_repository,
    update_order_status_handler,
)


def _parse_items(raw: str) -> list[OrderItemSpec]:
    """Parse 'B1:2,B2:1' into an OrderItemSpec list."""
    specs: list[OrderItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if not pair:
            continue
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'BookId:Quantity'."
            )
        book_id, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for book '{book_id}'."
            )
        specs.append(OrderItemSpec(book_id=book_id.strip(), quantity=qty))
    return specs


def _display_order(dto: OrderDTO) -> None:
    click.echo(f"Order #{dto.id}  (status={dto.status})")
    click.echo(f"User:     {dto.user_id}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo(f"Ship to:  {dto.address}  ({dto.phone})")
    click.echo()
    click.echo(f"  {'Book':<32} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*60}")
    for item in dto.items:
        click.echo(
            f"  {item.title[:32]:<32} {item.quantity:>5} {item.unit_price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*60}")
    click.echo(f"  {'Order Total':<38} {dto.amount:>21}")


@click.command("create")
@click.option("--user", "user_id", required=True, help="Ordering user ID.")
@click.option("--items", required=True, help="Items as 'BookId:Qty,BookId:Qty'.")
@click.option("--address", required=True, help="Shipping address.")
@click.option("--phone", required=True, help="Contact phone number.")
def order_create(user_id: str, items: str, address: str, phone: str) -> None:
    """Place an order, reserving stock for every item."""
    specs = _parse_items(items)
    handler = create_order_handler()

    try:
        dto = handler.handle(user_id=user_id, item_specs=specs, address=address, phone=phone)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id} created.")
    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
@click.option("--user", "user_id", default=None, help="Show as this (non-admin) user.")
def order_show(order_id: int, user_id: str | None) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(order_repo=order_repository(), book_repo=book_repository())

    try:
        dto = handler.handle(order_id, requester_id=user_id, is_admin=user_id is None)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
@click.option("--user", "user_id", default=None, help="Only this user's orders.")
def order_list(user_id: str | None) -> None:
    """List orders, newest first."""
    orders, books = order_repository(), book_repository()

    try:
        if user_id is not None:
            dtos = ListUserOrdersHandler(orders, books).handle(user_id)
        else:
            dtos = ListAllOrdersHandler(orders, books).handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not dtos:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':>5} {'User':<16} {'Status':<11} {'Items':>5} {'Amount':>10}  Created")
    click.echo("-" * 72)
    for dto in dtos:
        click.echo(
            f"{dto.id:>5} {dto.user_id[:16]:<16} {dto.status:<11} "
            f"{len(dto.items):>5} {dto.amount:>10}  {dto.created_at}"
        )


@click.command("status")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option(
    "--status",
    required=True,
    type=click.Choice([s.value for s in OrderStatus]),
    help="New status; 'cancelled' restocks the order's books once.",
)
def order_status(order_id: int, status: str) -> None:
    """Change an order's status."""
    handler = update_order_status_handler()

    try:
        dto = handler.handle(order_id, status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id} is now {dto.status}.")
