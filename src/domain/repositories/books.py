"""Book and author repository interfaces."""

from __future__ import annotations

from src.domain.models.records import Author, Book
from src.domain.services.finders import parse_finder_name

from .base import Repository

BY_BOOK_NAME_IGNORE_CASE = parse_finder_name("findByBookNameIgnoreCase", Book)
BY_AUTHOR_ID = parse_finder_name("findFirstByAuthorId", Book)
BY_LAST_NAME = parse_finder_name("findByLastNameOrderByFirstNameAsc", Author)


class BookRepository(Repository[Book]):
    """Read/write interface for Book records.

    book_name is unique: save() raises DuplicateKey when another book
    already uses the name.
    """

    model = Book

    async def find_by_book_name(self, book_name: str) -> Book | None:
        """Return the book with the given name (case-insensitive), or None."""
        return await self.find_one(BY_BOOK_NAME_IGNORE_CASE, book_name)

    async def find_by_author_id(self, author_id: int) -> Book | None:
        return await self.find_one(BY_AUTHOR_ID, author_id)


class AuthorRepository(Repository[Author]):
    model = Author

    async def find_by_last_name(self, last_name: str) -> list[Author]:
        return await self.find(BY_LAST_NAME, last_name)
