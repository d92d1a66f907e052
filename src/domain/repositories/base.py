"""Generic repository base interface.

Repository[T] is the root abstraction for all data-access interfaces in this
domain layer.  Concrete implementations live in src/infrastructure/persistence/
(an in-memory store and SQLAlchemy) and are wired at the application boundary.

Design notes:
  - All methods are async to accommodate async database drivers (asyncpg / SQLAlchemy async).
  - T is the domain record type (never an ORM row or DTO); it must carry an
    integer ``id`` that is None until the store assigns one.
  - Derived finders are declared Finder structures (see
    src/domain/services/finders.py), bound to arguments by find()/count_by();
    implementations only ever evaluate a FilterPredicate.
  - save_all() is fail-fast: the first failing save propagates and earlier
    saves are kept.  Wrap the call in a transaction for all-or-nothing.
  - delete_by_id() raises NotFound for an absent id.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel

from src.domain.exceptions import ArgumentCountMismatch
from src.domain.models.query import FilterPredicate, Page, PageRequest, SortSpec
from src.domain.services.finders import Finder
from src.domain.services.matching import validate_fields

T = TypeVar("T", bound=BaseModel)

logger = logging.getLogger(__name__)

Query = Finder | FilterPredicate


class Repository(ABC, Generic[T]):
    """Abstract CRUD + derived-query interface for one record type."""

    model: ClassVar[type[BaseModel]]

    @property
    def entity_name(self) -> str:
        return self.model.__name__

    # --- abstract storage primitives ---

    @abstractmethod
    async def save(self, entity: T) -> T:
        """Insert when entity.id is None, else replace; return the persisted record."""

    @abstractmethod
    async def find_by_id(self, id: int) -> T | None:
        """Return the record with the given id, or None if not found."""

    @abstractmethod
    async def find_all_by_id(self, ids: Iterable[int]) -> list[T]:
        """Return the records whose ids are in ids; missing ids are skipped."""

    @abstractmethod
    async def find_where(
        self,
        predicate: FilterPredicate,
        sort: SortSpec | None = None,
        limit: int | None = None,
    ) -> list[T]:
        """Return matching records in insertion order unless sort is given."""

    @abstractmethod
    async def find_page(
        self,
        page_request: PageRequest,
        predicate: FilterPredicate | None = None,
    ) -> Page[T]:
        """Return one page of (optionally filtered) records."""

    @abstractmethod
    async def count(self, predicate: FilterPredicate | None = None) -> int:
        """Return the number of (optionally filtered) records."""

    @abstractmethod
    async def exists_by_id(self, id: int) -> bool:
        """Return True when a record with the given id exists."""

    @abstractmethod
    async def update_fields(self, id: int, **changes: Any) -> T:
        """Apply a partial update.  Raises NotFound / SchemaMismatch."""

    @abstractmethod
    async def delete_by_id(self, id: int) -> None:
        """Remove the record with the given id.  Raises NotFound when absent."""

    @abstractmethod
    async def delete_all(self, ids: Iterable[int] | None = None) -> None:
        """Remove every record, or only those in ids (missing ids are ignored)."""

    # --- behaviour shared by every implementation ---

    async def save_all(self, entities: Iterable[T]) -> list[T]:
        saved: list[T] = []
        for entity in entities:
            try:
                saved.append(await self.save(entity))
            except Exception:
                logger.warning(
                    "save_all aborted for %s after %d saved record(s)",
                    self.entity_name,
                    len(saved),
                )
                raise
        return saved

    async def find_all(self, sort: SortSpec | None = None) -> list[T]:
        return await self.find_where(FilterPredicate.all(), sort=sort)

    async def find(self, query: Query, *args: Any, sort: SortSpec | None = None) -> list[T]:
        """Run a derived finder (or a ready-made predicate) against the store.

        An explicit sort overrides the finder's declared OrderBy.
        """
        predicate, declared_sort, limit = self.resolve(query, args)
        return await self.find_where(predicate, sort=sort or declared_sort, limit=limit)

    async def find_one(self, query: Query, *args: Any) -> T | None:
        predicate, declared_sort, _ = self.resolve(query, args)
        found = await self.find_where(predicate, sort=declared_sort, limit=1)
        return found[0] if found else None

    async def count_by(self, query: Query, *args: Any) -> int:
        predicate, _, _ = self.resolve(query, args)
        return await self.count(predicate)

    async def exists_by(self, query: Query, *args: Any) -> bool:
        return await self.count_by(query, *args) > 0

    def resolve(
        self, query: Query, args: tuple[Any, ...]
    ) -> tuple[FilterPredicate, SortSpec | None, int | None]:
        """Bind and validate a query against this repository's record type."""
        if isinstance(query, Finder):
            query.validate(self.model)
            return query.bind(*args), query.sort, query.limit
        if args:
            raise ArgumentCountMismatch("FilterPredicate", 0, len(args))
        self.check_query(query)
        return query, None, None

    def check_query(self, predicate: FilterPredicate | None, sort: SortSpec | None = None) -> None:
        """Raise SchemaMismatch for predicate or sort fields the record type lacks."""
        if predicate is not None:
            validate_fields(self.model, predicate.fields)
        if sort:
            validate_fields(self.model, sort.fields)
