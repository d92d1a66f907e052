"""Domain services package.

BookService and StudentService depend on the repository interfaces and are
imported from their modules directly (src.domain.services.books / .students).
"""

from .finders import Clause, Finder, parse_finder_name
from .matching import filter_records, matches, sort_records
from .pagination import paginate

__all__ = [
    "Clause",
    "Finder",
    "filter_records",
    "matches",
    "paginate",
    "parse_finder_name",
    "sort_records",
]
