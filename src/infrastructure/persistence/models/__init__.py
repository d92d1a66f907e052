"""ORM model registry — importing this package registers every mapper class
with Base.metadata before Alembic or SQLAlchemy runs.
"""

from src.infrastructure.persistence.models.library import Author, Book, Student

__all__ = [
    "Author",
    "Book",
    "Student",
]
