"""Application service: load the sample catalog into an empty store."""

from __future__ import annotations

from bookstore.application.add_book import AddBookHandler
from bookstore.domain.exceptions import ValidationError
from bookstore.domain.model.book import Book
from bookstore.domain.repository.book_repository import BookRepository

# (title, author, price, stock, category, description)
SAMPLE_BOOKS: list[tuple[str, str, str, int, str, str]] = [
    ("The Great Gatsby", "F. Scott Fitzgerald", "12.99", 15, "Fiction",
     "A classic novel depicting the Jazz Age in the United States."),
    ("To Kill a Mockingbird", "Harper Lee", "14.99", 20, "Fiction",
     "A novel about racial injustice and moral growth in the American South."),
    ("1984", "George Orwell", "11.99", 12, "Science Fiction",
     "A dystopian novel describing a totalitarian regime and mass surveillance."),
    ("The Hobbit", "J.R.R. Tolkien", "16.99", 25, "Fantasy",
     "A fantasy novel about the quest of Bilbo Baggins."),
    ("Pride and Prejudice", "Jane Austen", "9.99", 18, "Romance",
     "A romantic novel about the Bennet family, focusing on character development."),
    ("Sapiens: A Brief History of Humankind", "Yuval Noah Harari", "18.99", 14, "Non-Fiction",
     "A book about the history and evolution of humans."),
    ("The Catcher in the Rye", "J.D. Salinger", "10.99", 22, "Fiction",
     "A novel about teenage angst and alienation."),
    ("The Da Vinci Code", "Dan Brown", "13.99", 30, "Thriller",
     "A mystery thriller novel about secret religious societies."),
]


class SeedCatalogHandler:

    def __init__(self, book_repo: BookRepository) -> None:
        self._book_repo = book_repo

    def handle(self, force: bool = False) -> list[Book]:
        """Insert SAMPLE_BOOKS; with *force*, wipe the existing catalog first."""
        existing = self._book_repo.list_all()
        if existing and not force:
            raise ValidationError(
                f"Catalog already holds {len(existing)} book(s); use force to replace it"
            )
        for book in existing:
            self._book_repo.delete(book.id)

        add = AddBookHandler(self._book_repo)
        return [
            add.handle(
                title=title,
                author=author,
                price=price,
                stock=stock,
                category=category,
                description=description,
            )
            for title, author, price, stock, category, description in SAMPLE_BOOKS
        ]
