"""Generic SQLAlchemy repository and FilterPredicate compiler.

compile_predicate() turns a FilterPredicate into a SQLAlchemy WHERE clause
with the same semantics as src/domain/services/matching.py:
  - AND-groups are joined with OR.
  - EQUALS/NOT against None become IS NULL / IS NOT NULL.
  - ignore_case wraps string comparisons in lower().
  - Substring operators escape LIKE wildcards in the argument.

Every write runs inside a SAVEPOINT (session.begin_nested()) so a failing
save/update/delete leaves the enclosing transaction usable; unique-constraint
violations surface as DuplicateKey.
An insert with an explicit id also moves the table's id sequence past that
id (PostgreSQL setval), so later generated ids never collide with it.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any, ClassVar

from sqlalchemy import ColumnElement, and_, delete, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.exceptions import DuplicateKey, NotFound, SchemaMismatch
from src.domain.models.enums import Direction, Operator
from src.domain.models.query import (
    Condition,
    FilterPredicate,
    Page,
    PageRequest,
    SortSpec,
    check_page_bounds,
)
from src.infrastructure.database import Base

logger = logging.getLogger(__name__)


def _lower(expr: Any, value: Any, ignore_case: bool) -> tuple[Any, Any]:
    if ignore_case and isinstance(value, str):
        return func.lower(expr), value.lower()
    return expr, value


def compile_condition(orm_model: type[Base], condition: Condition) -> ColumnElement[bool]:
    column = getattr(orm_model, condition.field)
    op = condition.operator

    if op is Operator.IS_NULL:
        return column.is_(None)
    if op is Operator.IS_NOT_NULL:
        return column.is_not(None)
    if op is Operator.TRUE:
        return column.is_(True)
    if op is Operator.FALSE:
        return column.is_(False)

    if op is Operator.IN or op is Operator.NOT_IN:
        members = list(condition.value)
        expr = column
        if condition.ignore_case and any(isinstance(m, str) for m in members):
            expr = func.lower(column)
            members = [m.lower() if isinstance(m, str) else m for m in members]
        return expr.in_(members) if op is Operator.IN else expr.not_in(members)

    if op is Operator.BETWEEN:
        low, high = condition.values
        expr, low = _lower(column, low, condition.ignore_case)
        _, high = _lower(column, high, condition.ignore_case)
        return expr.between(low, high)

    value = condition.value
    if value is None and op in (Operator.EQUALS, Operator.NOT):
        return column.is_(None) if op is Operator.EQUALS else column.is_not(None)

    expr, value = _lower(column, value, condition.ignore_case)
    if op is Operator.EQUALS:
        return expr == value
    if op is Operator.NOT:
        return expr != value
    if op is Operator.CONTAINING:
        return expr.contains(str(value), autoescape=True)
    if op is Operator.NOT_CONTAINING:
        return ~expr.contains(str(value), autoescape=True)
    if op is Operator.STARTING_WITH:
        return expr.startswith(str(value), autoescape=True)
    if op is Operator.ENDING_WITH:
        return expr.endswith(str(value), autoescape=True)
    if op in (Operator.GREATER_THAN, Operator.AFTER):
        return expr > value
    if op is Operator.GREATER_THAN_EQUAL:
        return expr >= value
    if op in (Operator.LESS_THAN, Operator.BEFORE):
        return expr < value
    if op is Operator.LESS_THAN_EQUAL:
        return expr <= value
    raise AssertionError(f"unhandled operator {op!r}")


def compile_predicate(
    orm_model: type[Base], predicate: FilterPredicate | None
) -> ColumnElement[bool] | None:
    """Return the WHERE clause for predicate, or None when it matches everything."""
    if predicate is None or predicate.is_empty:
        return None
    groups = [
        and_(*(compile_condition(orm_model, c) for c in group))
        for group in predicate.groups()
    ]
    return groups[0] if len(groups) == 1 else or_(*groups)


def compile_sort(orm_model: type[Base], sort: SortSpec | None) -> list[Any]:
    """ORDER BY terms; nulls first ascending, last descending, id as tie-breaker."""
    terms: list[Any] = []
    for order in sort.orders if sort else ():
        column = getattr(orm_model, order.field)
        if order.direction is Direction.DESC:
            terms.append(column.desc().nulls_last())
        else:
            terms.append(column.asc().nulls_first())
    terms.append(orm_model.id.asc())
    return terms


class SqlRepository(ABC):
    """Mixin implementing every abstract Repository primitive with an AsyncSession.

    Subclasses combine it with a domain interface, name the ORM model and
    provide the two mapping hooks:

        class SqlStudentRepository(SqlRepository, StudentRepository):
            orm_model = OrmStudent
    """

    orm_model: ClassVar[type[Base]]
    unique_fields: ClassVar[tuple[str, ...]] = ()

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    # --- mapping hooks ---

    @staticmethod
    @abstractmethod
    def _to_domain(row: Any) -> Any: ...

    @staticmethod
    @abstractmethod
    def _to_values(entity: Any) -> dict[str, Any]:
        """Column values for entity, excluding the primary key."""

    # --- helpers ---

    async def _get_row(self, id: int) -> Any | None:
        stmt = select(self.orm_model).where(self.orm_model.id == id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def _advance_id_sequence(self, id: int) -> None:
        """Keep the id sequence at or past id so generated ids never reuse it."""
        sequence = func.pg_get_serial_sequence(self.orm_model.__tablename__, "id")
        last = func.coalesce(func.pg_sequence_last_value(sequence), 0)
        stmt = select(func.setval(sequence, func.greatest(id, last, 1)))
        await self._session.execute(stmt)

    def _duplicate(self, exc: IntegrityError) -> DuplicateKey:
        return DuplicateKey(self.model.__name__, self.unique_fields, str(exc.orig))

    # --- Repository primitives ---

    async def save(self, entity: Any) -> Any:
        values = self._to_values(entity)
        try:
            async with self._session.begin_nested():
                if entity.id is None:
                    row = self.orm_model(**values)
                    self._session.add(row)
                    await self._session.flush()
                    entity = entity.model_copy(update={"id": row.id})
                else:
                    row = await self._get_row(entity.id)
                    if row is None:
                        self._session.add(self.orm_model(id=entity.id, **values))
                        await self._session.flush()
                        await self._advance_id_sequence(entity.id)
                    else:
                        for name, value in values.items():
                            setattr(row, name, value)
                        await self._session.flush()
        except IntegrityError as exc:
            raise self._duplicate(exc) from exc
        logger.debug("Saved %s id=%s", self.model.__name__, entity.id)
        return entity

    async def find_by_id(self, id: int) -> Any | None:
        row = await self._get_row(id)
        return self._to_domain(row) if row else None

    async def find_all_by_id(self, ids: Iterable[int]) -> list[Any]:
        stmt = (
            select(self.orm_model)
            .where(self.orm_model.id.in_(list(ids)))
            .order_by(self.orm_model.id.asc())
        )
        result = await self._session.execute(stmt)
        return [self._to_domain(row) for row in result.scalars()]

    async def find_where(
        self,
        predicate: FilterPredicate,
        sort: SortSpec | None = None,
        limit: int | None = None,
    ) -> list[Any]:
        self.check_query(predicate, sort)
        stmt = select(self.orm_model).order_by(*compile_sort(self.orm_model, sort))
        where = compile_predicate(self.orm_model, predicate)
        if where is not None:
            stmt = stmt.where(where)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self._session.execute(stmt)
        return [self._to_domain(row) for row in result.scalars()]

    async def find_page(
        self,
        page_request: PageRequest,
        predicate: FilterPredicate | None = None,
    ) -> Page[Any]:
        check_page_bounds(page_request.page_number, page_request.page_size)
        self.check_query(predicate, page_request.sort)
        total = await self.count(predicate)
        stmt = (
            select(self.orm_model)
            .order_by(*compile_sort(self.orm_model, page_request.sort))
            .limit(page_request.page_size)
            .offset(page_request.offset)
        )
        where = compile_predicate(self.orm_model, predicate)
        if where is not None:
            stmt = stmt.where(where)
        result = await self._session.execute(stmt)
        return Page(
            items=[self._to_domain(row) for row in result.scalars()],
            page_number=page_request.page_number,
            page_size=page_request.page_size,
            total_count=total,
            is_last=(page_request.page_number + 1) * page_request.page_size >= total,
        )

    async def count(self, predicate: FilterPredicate | None = None) -> int:
        self.check_query(predicate)
        stmt = select(func.count()).select_from(self.orm_model)
        where = compile_predicate(self.orm_model, predicate)
        if where is not None:
            stmt = stmt.where(where)
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def exists_by_id(self, id: int) -> bool:
        stmt = select(self.orm_model.id).where(self.orm_model.id == id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def update_fields(self, id: int, **changes: Any) -> Any:
        for name in changes:
            if name not in self.model.model_fields or name == "id":
                raise SchemaMismatch(self.model.__name__, name)
        row = await self._get_row(id)
        if row is None:
            raise NotFound(self.model.__name__, id)
        current = self._to_domain(row)
        updated = self.model.model_validate({**current.model_dump(), **changes})
        try:
            async with self._session.begin_nested():
                for name, value in self._to_values(updated).items():
                    setattr(row, name, value)
                await self._session.flush()
        except IntegrityError as exc:
            raise self._duplicate(exc) from exc
        logger.debug("Updated %s id=%s fields=%s", self.model.__name__, id, sorted(changes))
        return updated

    async def delete_by_id(self, id: int) -> None:
        row = await self._get_row(id)
        if row is None:
            raise NotFound(self.model.__name__, id)
        async with self._session.begin_nested():
            await self._session.delete(row)
            await self._session.flush()
        logger.debug("Deleted %s id=%s", self.model.__name__, id)

    async def delete_all(self, ids: Iterable[int] | None = None) -> None:
        stmt = delete(self.orm_model)
        if ids is not None:
            stmt = stmt.where(self.orm_model.id.in_(list(ids)))
        await self._session.execute(stmt)
