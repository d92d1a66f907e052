"""Persistence package.

Importing this package registers every ORM mapper with Base.metadata
(required for Alembic autogenerate and SQLAlchemy mapper configuration)
and exports all repository implementations and the factories.
"""

from src.infrastructure.persistence.memory import InMemoryStore
from src.infrastructure.persistence.models import *  # noqa: F401, F403
from src.infrastructure.persistence.models import __all__ as _orm_all
from src.infrastructure.persistence.repositories import (
    InMemoryAuthorRepository,
    InMemoryBookRepository,
    InMemoryStudentRepository,
    Repositories,
    SqlAuthorRepository,
    SqlBookRepository,
    SqlStudentRepository,
    get_memory_repositories,
    get_repositories,
)

__all__ = _orm_all + [
    "InMemoryStore",
    "InMemoryAuthorRepository",
    "InMemoryBookRepository",
    "InMemoryStudentRepository",
    "Repositories",
    "SqlAuthorRepository",
    "SqlBookRepository",
    "SqlStudentRepository",
    "get_memory_repositories",
    "get_repositories",
]
