"""In-memory implementations of the repository interfaces.

InMemoryRepository evaluates FilterPredicates with the reference semantics
in src/domain/services/matching.py and pages with the domain Pager, so it
is also the executable definition of what the SQL repositories must do.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any, ClassVar

from pydantic import BaseModel

from src.domain.exceptions import DuplicateKey, NotFound, SchemaMismatch
from src.domain.models.query import FilterPredicate, Page, PageRequest, SortSpec
from src.domain.repositories.books import AuthorRepository, BookRepository
from src.domain.repositories.students import StudentRepository
from src.domain.services.matching import filter_records, sort_records
from src.domain.services.pagination import paginate
from src.infrastructure.persistence.memory import InMemoryStore, Table

logger = logging.getLogger(__name__)


class InMemoryRepository:
    """Mixin implementing every abstract Repository primitive over a store table.

    Concrete classes combine it with a domain interface and name the table:

        class InMemoryStudentRepository(InMemoryRepository, StudentRepository):
            collection = "students"
    """

    model: ClassVar[type[BaseModel]]
    collection: ClassVar[str]
    unique_fields: ClassVar[tuple[str, ...]] = ()
    # (collection, field) pairs whose references are set to None on delete,
    # matching the ON DELETE SET NULL foreign keys of the SQL schema.
    nullify_on_delete: ClassVar[tuple[tuple[str, str], ...]] = ()

    def __init__(self, store: InMemoryStore | None = None) -> None:
        self._store = store or InMemoryStore()

    @property
    def store(self) -> InMemoryStore:
        return self._store

    def _table(self) -> Table:
        return self._store.table(self.collection)

    def _check_unique(self, table: Table, entity: Any) -> None:
        for name in self.unique_fields:
            value = getattr(entity, name)
            if value is None:
                continue
            for row in table.rows.values():
                if row.id != entity.id and getattr(row, name) == value:
                    raise DuplicateKey(self.model.__name__, (name,), value)

    def _nullify_references(self, ids: set[int]) -> None:
        for collection, name in self.nullify_on_delete:
            rows = self._store.table(collection).rows
            for id, row in list(rows.items()):
                if getattr(row, name) in ids:
                    rows[id] = row.model_copy(update={name: None})

    async def save(self, entity: Any) -> Any:
        async with self._store.write():
            table = self._table()
            if entity.id is None:
                self._check_unique(table, entity)
                entity = entity.model_copy(update={"id": table.allocate_id()})
            else:
                self._check_unique(table, entity)
                table.reserve(entity.id)
            table.rows[entity.id] = entity
        logger.debug("Saved %s id=%s", self.model.__name__, entity.id)
        return entity

    async def find_by_id(self, id: int) -> Any | None:
        return self._table().rows.get(id)

    async def find_all_by_id(self, ids: Iterable[int]) -> list[Any]:
        wanted = set(ids)
        return [row for id, row in self._table().rows.items() if id in wanted]

    async def find_where(
        self,
        predicate: FilterPredicate,
        sort: SortSpec | None = None,
        limit: int | None = None,
    ) -> list[Any]:
        self.check_query(predicate, sort)
        rows = sort_records(filter_records(list(self._table().rows.values()), predicate), sort)
        return rows[:limit] if limit is not None else rows

    async def find_page(
        self,
        page_request: PageRequest,
        predicate: FilterPredicate | None = None,
    ) -> Page[Any]:
        self.check_query(predicate, page_request.sort)
        rows = filter_records(list(self._table().rows.values()), predicate)
        return paginate(rows, page_request.page_number, page_request.page_size, page_request.sort)

    async def count(self, predicate: FilterPredicate | None = None) -> int:
        self.check_query(predicate)
        return len(filter_records(list(self._table().rows.values()), predicate))

    async def exists_by_id(self, id: int) -> bool:
        return id in self._table().rows

    async def update_fields(self, id: int, **changes: Any) -> Any:
        for name in changes:
            if name not in self.model.model_fields or name == "id":
                raise SchemaMismatch(self.model.__name__, name)
        async with self._store.write():
            table = self._table()
            current = table.rows.get(id)
            if current is None:
                raise NotFound(self.model.__name__, id)
            # Re-validate so field constraints hold after a partial update.
            updated = self.model.model_validate({**current.model_dump(), **changes})
            self._check_unique(table, updated)
            table.rows[id] = updated
        logger.debug("Updated %s id=%s fields=%s", self.model.__name__, id, sorted(changes))
        return updated

    async def delete_by_id(self, id: int) -> None:
        async with self._store.write():
            table = self._table()
            if id not in table.rows:
                raise NotFound(self.model.__name__, id)
            del table.rows[id]
            self._nullify_references({id})
        logger.debug("Deleted %s id=%s", self.model.__name__, id)

    async def delete_all(self, ids: Iterable[int] | None = None) -> None:
        async with self._store.write():
            table = self._table()
            removed = set(table.rows) if ids is None else set(ids) & set(table.rows)
            for id in removed:
                del table.rows[id]
            self._nullify_references(removed)


class InMemoryStudentRepository(InMemoryRepository, StudentRepository):
    collection = "students"


class InMemoryBookRepository(InMemoryRepository, BookRepository):
    collection = "books"
    unique_fields = ("book_name", "author_id")


class InMemoryAuthorRepository(InMemoryRepository, AuthorRepository):
    collection = "authors"
    nullify_on_delete = (("books", "author_id"),)
