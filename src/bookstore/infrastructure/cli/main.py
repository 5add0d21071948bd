import click

from bookstore.infrastructure.bootstrap import settings
from bookstore.infrastructure.cli.book_commands import (
    book_add,
    book_categories,
    book_delete,
    book_list,
    book_seed,
    book_show,
    book_update,
)
from bookstore.infrastructure.cli.order_commands import (
    order_create,
    order_list,
    order_show,
    order_status,
)
from bookstore.infrastructure.logging_config import configure_logging


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log at DEBUG level.")
def cli(verbose: bool) -> None:
    """Bookstore — catalog and order management"""
    try:
        level = "DEBUG" if verbose else settings().log_level
        configure_logging(level)
    except ValueError as exc:
        raise click.ClickException(str(exc))


@cli.group()
def book() -> None:
    """Manage the catalog."""


@cli.group()
def order() -> None:
    """Manage orders."""


# Register subcommands
book.add_command(book_add)
book.add_command(book_categories)
book.add_command(book_delete)
book.add_command(book_list)
book.add_command(book_seed)
book.add_command(book_show)
book.add_command(book_update)
order.add_command(order_create)
order.add_command(order_list)
order.add_command(order_show)
order.add_command(order_status)
