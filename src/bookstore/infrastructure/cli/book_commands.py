"""CLI commands for the catalog (Book aggregate)."""

from __future__ import annotations

import click

from bookstore.application.add_book import AddBookHandler
from bookstore.application.delete_book import DeleteBookHandler
from bookstore.application.list_books import (
    ListBooksHandler,
    ListCategoriesHandler,
    ShowBookHandler,
)
from bookstore.application.seed_catalog import SeedCatalogHandler
from bookstore.domain.exceptions import DomainException
from bookstore.infrastructure.bootstrap import book_repository, update_book_handler


@click.command("add")
@click.option("--title", required=True, help="Book title.")
@click.option("--author", required=True, help="Author name.")
@click.option("--price", required=True, help="Price (e.g. 12.99).")
@click.option("--stock", required=True, type=click.IntRange(min=0), help="Units in stock.")
@click.option("--category", required=True, help="Category, e.g. Fiction.")
@click.option("--description", default="", help="Short description.")
@click.option("--image", default=None, help="Image reference (file name or URL).")
def book_add(
    title: str,
    author: str,
    price: str,
    stock: int,
    category: str,
    description: str,
    image: str | None,
) -> None:
    """Add a new book to the catalog."""
    handler = AddBookHandler(book_repo=book_repository())

    try:
        book = handler.handle(
            title=title,
            author=author,
            price=price,
            stock=stock,
            category=category,
            description=description,
            image=image,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Book {book.id} '{book.title}' added at {book.price} ({book.stock} in stock)")


@click.command("list")
@click.option("--category", default=None, help="Only this category.")
@click.option("--min-price", default=None, help="Lowest price, inclusive.")
@click.option("--max-price", default=None, help="Highest price, inclusive.")
@click.option("--search", default=None, help="Match title or author.")
def book_list(
    category: str | None,
    min_price: str | None,
    max_price: str | None,
    search: str | None,
) -> None:
    """List books in the catalog."""
    handler = ListBooksHandler(book_repo=book_repository())

    try:
        books = handler.handle(
            category=category, min_price=min_price, max_price=max_price, search=search
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not books:
        click.echo("No books found.")
        return

    click.echo(f"{'ID':<26} {'Title':<32} {'Author':<22} {'Price':>8} {'Stock':>6}")
    click.echo("-" * 98)
    for b in books:
        click.echo(
            f"{b.id:<26} {b.title[:32]:<32} {b.author[:22]:<22} {b.price:>8} {b.stock:>6}"
        )


@click.command("show")
@click.option("--id", "book_id", required=True, help="Book ID.")
def book_show(book_id: str) -> None:
    """Show one book."""
    handler = ShowBookHandler(book_repo=book_repository())

    try:
        book = handler.handle(book_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{book.title} by {book.author}")
    click.echo(f"ID:       {book.id}")
    click.echo(f"Category: {book.category}")
    click.echo(f"Price:    {book.price}")
    click.echo(f"Stock:    {book.stock}")
    click.echo(f"Image:    {book.image}")
    if book.description:
        click.echo()
        click.echo(book.description)


@click.command("update")
@click.option("--id", "book_id", required=True, help="Book ID.")
@click.option("--title", default=None)
@click.option("--author", default=None)
@click.option("--price", default=None, help="New price (e.g. 14.99).")
@click.option("--stock", default=None, type=click.IntRange(min=0), help="Set stock outright.")
@click.option("--category", default=None)
@click.option("--description", default=None)
@click.option("--image", default=None)
def book_update(book_id: str, **changes) -> None:
    """Edit a book; omitted fields are left as they are."""
    handler = update_book_handler()

    try:
        book = handler.handle(book_id, **changes)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Book {book.id} updated: {book.price}, {book.stock} in stock")


@click.command("delete")
@click.option("--id", "book_id", required=True, help="Book ID.")
def book_delete(book_id: str) -> None:
    """Remove a book from the catalog."""
    handler = DeleteBookHandler(book_repo=book_repository())

    try:
        handler.handle(book_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Book {book_id} removed.")


@click.command("categories")
def book_categories() -> None:
    """List the categories in use."""
    for category in ListCategoriesHandler(book_repo=book_repository()).handle():
        click.echo(category)


@click.command("seed")
@click.option("--force", is_flag=True, default=False, help="Replace an existing catalog.")
def book_seed(force: bool) -> None:
    """Load the sample catalog."""
    handler = SeedCatalogHandler(book_repo=book_repository())

    try:
        books = handler.handle(force=force)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Seeded {len(books)} books.")
