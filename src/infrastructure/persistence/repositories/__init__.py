"""Concrete repository implementations.

Exports the SQLAlchemy and in-memory repository classes plus two factories
that bundle one repository per record type:

  - get_repositories(session) binds SQL repositories to one AsyncSession.
  - get_memory_repositories(store) binds in-memory repositories to one store.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.repositories import AuthorRepository, BookRepository, StudentRepository
from src.infrastructure.persistence.memory import InMemoryStore

from .books import SqlAuthorRepository, SqlBookRepository
from .memory import (
    InMemoryAuthorRepository,
    InMemoryBookRepository,
    InMemoryRepository,
    InMemoryStudentRepository,
)
from .sql import SqlRepository, compile_predicate, compile_sort
from .students import SqlStudentRepository


@dataclass
class Repositories:
    """One repository per record type, all bound to the same session or store."""

    students: StudentRepository
    books: BookRepository
    authors: AuthorRepository


def get_repositories(session: AsyncSession) -> Repositories:
    """Construct all SQL repositories bound to the given session.

    Intended for use inside a transaction scope:

        async with transaction() as session:
            repos = get_repositories(session)
            student = await repos.students.find_by_id(student_id)
    """
    return Repositories(
        students=SqlStudentRepository(session),
        books=SqlBookRepository(session),
        authors=SqlAuthorRepository(session),
    )


def get_memory_repositories(store: InMemoryStore | None = None) -> Repositories:
    """Construct all in-memory repositories sharing one store."""
    store = store or InMemoryStore()
    return Repositories(
        students=InMemoryStudentRepository(store),
        books=InMemoryBookRepository(store),
        authors=InMemoryAuthorRepository(store),
    )


__all__ = [
    "InMemoryAuthorRepository",
    "InMemoryBookRepository",
    "InMemoryRepository",
    "InMemoryStudentRepository",
    "Repositories",
    "SqlAuthorRepository",
    "SqlBookRepository",
    "SqlRepository",
    "SqlStudentRepository",
    "compile_predicate",
    "compile_sort",
    "get_memory_repositories",
    "get_repositories",
]
