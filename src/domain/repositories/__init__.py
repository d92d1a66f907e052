"""Domain repository interfaces.

All abstractions are defined here with abc.ABC and @abstractmethod.
Concrete implementations live in src/infrastructure/persistence/ and are
wired at the application boundary via dependency injection.

Import from this package rather than individual modules to avoid coupling
services to specific repository module paths.
"""

from .base import Repository
from .books import AuthorRepository, BookRepository
from .students import StudentRepository

__all__ = [
    "Repository",
    "StudentRepository",
    "BookRepository",
    "AuthorRepository",
]
