"""SQLAlchemy implementations of BookRepository and AuthorRepository."""

from __future__ import annotations

from typing import Any

from src.domain.models.records import Author as DomainAuthor
from src.domain.models.records import Book as DomainBook
from src.domain.repositories.books import AuthorRepository, BookRepository
from src.infrastructure.persistence.models.library import Author as OrmAuthor
from src.infrastructure.persistence.models.library import Book as OrmBook

from .sql import SqlRepository


class SqlBookRepository(SqlRepository, BookRepository):
    orm_model = OrmBook
    unique_fields = ("book_name", "author_id")

    @staticmethod
    def _to_domain(row: OrmBook) -> DomainBook:
        return DomainBook(id=row.id, book_name=row.book_name, author_id=row.author_id)

    @staticmethod
    def _to_values(entity: DomainBook) -> dict[str, Any]:
        return {"book_name": entity.book_name, "author_id": entity.author_id}


class SqlAuthorRepository(SqlRepository, AuthorRepository):
    orm_model = OrmAuthor

    @staticmethod
    def _to_domain(row: OrmAuthor) -> DomainAuthor:
        return DomainAuthor(
            id=row.id,
            first_name=row.first_name,
            last_name=row.last_name,
            address=row.address,
        )

    @staticmethod
    def _to_values(entity: DomainAuthor) -> dict[str, Any]:
        return {
            "first_name": entity.first_name,
            "last_name": entity.last_name,
            "address": entity.address,
        }
