"""Domain model package.

All domain objects are pure Python / Pydantic models with no ORM or
infrastructure dependencies.  Import from this package to avoid coupling
application code to individual module paths.
"""

from .enums import Combinator, Direction, Operator
from .query import (
    Condition,
    FilterPredicate,
    Page,
    PageRequest,
    SortOrder,
    SortSpec,
)
from .records import Author, Book, BookWithAuthor, Student

__all__ = [
    # Records
    "Author",
    "Book",
    "BookWithAuthor",
    "Student",
    # Enums
    "Combinator",
    "Direction",
    "Operator",
    # Query
    "Condition",
    "FilterPredicate",
    "Page",
    "PageRequest",
    "SortOrder",
    "SortSpec",
]
