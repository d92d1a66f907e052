"""Book service: the reference app's book/author use cases.

Book→author is an explicit foreign key.  Nothing cascades implicitly:
add_book_with_author and delete_book_with_author spell out each step and
run them inside one unit of work, so a failure part-way leaves neither
row behind (in-memory store transaction, or the caller's DB transaction).
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from contextlib import AbstractAsyncContextManager, nullcontext

from src.domain.exceptions import NotFound
from src.domain.models.records import Author, Book, BookWithAuthor
from src.domain.repositories.books import AuthorRepository, BookRepository

logger = logging.getLogger(__name__)

UnitOfWork = Callable[[], AbstractAsyncContextManager]


class BookService:
    """Use cases over BookRepository and AuthorRepository.

    unit_of_work is a zero-argument callable returning an async context
    manager that commits on exit and rolls back on error, for example
    ``store.transaction`` for the in-memory store.  It defaults to a no-op
    for callers that already run inside a transaction (a SQL session from
    ``transaction()``).
    """

    def __init__(
        self,
        books: BookRepository,
        authors: AuthorRepository,
        unit_of_work: UnitOfWork | None = None,
    ) -> None:
        self._books = books
        self._authors = authors
        self._unit_of_work = unit_of_work or nullcontext

    # ------------------------------------------------------------------ #
    # Books                                                                #
    # ------------------------------------------------------------------ #

    async def get_all_books(self) -> list[Book]:
        return await self._books.find_all()

    async def get_book_by_id(self, book_id: int) -> Book:
        book = await self._books.find_by_id(book_id)
        if book is None:
            raise NotFound("Book", book_id)
        return book

    async def add_book(self, book: Book) -> Book:
        """Insert book as a new record; any client-supplied id is ignored."""
        return await self._books.save(book.model_copy(update={"id": None}))

    async def update_book(self, book_id: int, book: Book) -> Book:
        """Replace the stored book book_id with the fields of book."""
        if not await self._books.exists_by_id(book_id):
            raise NotFound("Book", book_id)
        return await self._books.save(book.model_copy(update={"id": book_id}))

    async def delete_book(self, book_id: int) -> None:
        await self._books.delete_by_id(book_id)

    async def delete_all_books(self) -> None:
        await self._books.delete_all()

    # ------------------------------------------------------------------ #
    # Book + author                                                        #
    # ------------------------------------------------------------------ #

    async def load_author(self, book: Book) -> Author | None:
        """Explicit loader for the book's author (None when unset)."""
        if book.author_id is None:
            return None
        return await self._authors.find_by_id(book.author_id)

    async def get_book_with_author(self, book_id: int) -> BookWithAuthor:
        book = await self.get_book_by_id(book_id)
        return BookWithAuthor(book=book, author=await self.load_author(book))

    async def add_book_with_author(self, book: Book, author: Author) -> BookWithAuthor:
        """Save author, then book pointing at it, as one unit."""
        async with self._unit_of_work():
            saved_author = await self._authors.save(author.model_copy(update={"id": None}))
            saved_book = await self._books.save(
                book.model_copy(update={"id": None, "author_id": saved_author.id})
            )
        logger.info("Added book id=%s with author id=%s", saved_book.id, saved_author.id)
        return BookWithAuthor(book=saved_book, author=saved_author)

    async def delete_book_with_author(self, book_id: int) -> None:
        """Delete the book, then its author, as one unit."""
        async with self._unit_of_work():
            book = await self.get_book_by_id(book_id)
            await self._books.delete_by_id(book_id)
            if book.author_id is not None and await self._authors.exists_by_id(book.author_id):
                await self._authors.delete_by_id(book.author_id)
        logger.info("Deleted book id=%s and its author", book_id)
