"""Query models: filter predicates, sort specs, page requests and pages.

These are the structured forms every finder is reduced to before it
reaches a store.  Neither the in-memory nor the SQL repository ever sees
a finder name; they only see a FilterPredicate.

Design notes:
  - A FilterPredicate is an ordered list of conditions plus the combinators
    between them.  AND binds tighter than OR, so ``a AND b OR c`` is the
    OR of the AND-groups ``[a, b]`` and ``[c]``.
  - An empty FilterPredicate matches every record.
  - Page mirrors the envelope the front end serializes; it validates the
    ``len(items) <= page_size`` and ``total_count >= len(items)`` invariants.
"""

from __future__ import annotations

import math
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

from src.domain.exceptions import InvalidArgument

from .enums import Combinator, Direction, Operator

T = TypeVar("T")


class Condition(BaseModel):
    """One bound clause: ``field <operator> values``."""

    model_config = ConfigDict(frozen=True)

    field: str
    operator: Operator = Operator.EQUALS
    values: tuple[Any, ...] = ()
    ignore_case: bool = False

    @model_validator(mode="after")
    def _check_arity(self) -> Condition:
        if len(self.values) != self.operator.arity:
            raise ValueError(
                f"{self.operator.value} takes {self.operator.arity} value(s), "
                f"got {len(self.values)}"
            )
        return self

    @property
    def value(self) -> Any:
        """The single bound value for unary operators."""
        return self.values[0]


class FilterPredicate(BaseModel):
    model_config = ConfigDict(frozen=True)

    conditions: tuple[Condition, ...] = ()
    combinators: tuple[Combinator, ...] = ()

    @model_validator(mode="after")
    def _check_combinators(self) -> FilterPredicate:
        expected = max(len(self.conditions) - 1, 0)
        if len(self.combinators) != expected:
            raise ValueError(
                f"{len(self.conditions)} condition(s) need {expected} combinator(s), "
                f"got {len(self.combinators)}"
            )
        return self

    @classmethod
    def all(cls) -> FilterPredicate:
        """The predicate that matches every record."""
        return cls()

    @classmethod
    def of(cls, *conditions: Condition, combinator: Combinator = Combinator.AND) -> FilterPredicate:
        return cls(
            conditions=conditions,
            combinators=(combinator,) * max(len(conditions) - 1, 0),
        )

    @property
    def is_empty(self) -> bool:
        return not self.conditions

    @property
    def fields(self) -> list[str]:
        return [c.field for c in self.conditions]

    def groups(self) -> list[list[Condition]]:
        """Split into AND-groups; the predicate holds when any group holds."""
        if not self.conditions:
            return []
        groups: list[list[Condition]] = [[self.conditions[0]]]
        for combinator, condition in zip(self.combinators, self.conditions[1:]):
            if combinator is Combinator.OR:
                groups.append([condition])
            else:
                groups[-1].append(condition)
        return groups


class SortOrder(BaseModel):
    model_config = ConfigDict(frozen=True)

    field: str
    direction: Direction = Direction.ASC


class SortSpec(BaseModel):
    """Ordered sort keys; the first order is the primary key."""

    model_config = ConfigDict(frozen=True)

    orders: tuple[SortOrder, ...] = ()

    @classmethod
    def by(cls, *fields: str, direction: Direction = Direction.ASC) -> SortSpec:
        return cls(orders=tuple(SortOrder(field=f, direction=direction) for f in fields))

    def and_(self, other: SortSpec) -> SortSpec:
        return SortSpec(orders=self.orders + other.orders)

    @property
    def fields(self) -> list[str]:
        return [o.field for o in self.orders]

    def __bool__(self) -> bool:
        return bool(self.orders)


class PageRequest(BaseModel):
    """Zero-based page coordinates plus an optional sort."""

    model_config = ConfigDict(frozen=True)

    page_number: int = Field(default=0, ge=0)
    page_size: int = Field(default=20, gt=0)
    sort: SortSpec | None = None

    @classmethod
    def of(cls, page_number: int, page_size: int, sort: SortSpec | None = None) -> PageRequest:
        """Validated constructor raising InvalidArgument instead of ValidationError."""
        check_page_bounds(page_number, page_size)
        return cls(page_number=page_number, page_size=page_size, sort=sort)

    @property
    def offset(self) -> int:
        return self.page_number * self.page_size


class Page(BaseModel, Generic[T]):
    model_config = ConfigDict(frozen=True)

    items: list[T]
    page_number: int
    page_size: int
    total_count: int
    is_last: bool

    @model_validator(mode="after")
    def _check_bounds(self) -> Page[T]:
        if len(self.items) > self.page_size:
            raise ValueError("page holds more items than page_size")
        if self.total_count < len(self.items):
            raise ValueError("total_count is smaller than the number of items")
        return self

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_count / self.page_size)


def check_page_bounds(page_number: int, page_size: int) -> None:
    if page_number < 0:
        raise InvalidArgument("page_number", page_number, "must be >= 0")
    if page_size <= 0:
        raise InvalidArgument("page_size", page_size, "must be > 0")
