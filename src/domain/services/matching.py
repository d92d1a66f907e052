"""In-memory evaluation of filter predicates and sort specs.

This is the reference semantics for FilterPredicate: the SQL repository
compiles the same operators to SQLAlchemy expressions and is expected to
agree with these functions on every operator.

Conventions:
  - A condition on a field whose value is None is False for every operator
    except IS_NULL, mirroring SQL's three-valued logic.
  - EQUALS/NOT with a None argument compare against null (IS / IS NOT).
    Range and order operators with a None argument match nothing.
  - ignore_case folds both sides with str.lower() and only touches strings.
  - Sorting is stable; None sorts first ascending and last descending.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any, TypeVar

from pydantic import BaseModel

from src.domain.exceptions import SchemaMismatch
from src.domain.models.enums import Direction, Operator
from src.domain.models.query import Condition, FilterPredicate, SortSpec

T = TypeVar("T", bound=BaseModel)


def validate_fields(model: type[BaseModel], fields: Iterable[str]) -> None:
    known = model.model_fields
    for name in fields:
        if name not in known:
            raise SchemaMismatch(model.__name__, name)


def _fold(value: Any, ignore_case: bool) -> Any:
    if ignore_case and isinstance(value, str):
        return value.lower()
    return value


def evaluate(condition: Condition, record: BaseModel) -> bool:
    """Return True when record satisfies condition."""
    op = condition.operator
    actual = getattr(record, condition.field)

    if op is Operator.IS_NULL:
        return actual is None
    if op is Operator.IS_NOT_NULL:
        return actual is not None
    if op is Operator.TRUE:
        return actual is True
    if op is Operator.FALSE:
        return actual is False

    if op in (Operator.EQUALS, Operator.NOT) and condition.value is None:
        return (actual is None) == (op is Operator.EQUALS)
    if actual is None:
        return False

    actual = _fold(actual, condition.ignore_case)
    args = [_fold(v, condition.ignore_case) for v in condition.values]

    if op is Operator.IN or op is Operator.NOT_IN:
        members = {_fold(v, condition.ignore_case) for v in args[0]}
        return (actual in members) == (op is Operator.IN)

    if op.is_textual:
        if not isinstance(actual, str):
            return False
        needle = str(args[0])
        if op is Operator.CONTAINING:
            return needle in actual
        if op is Operator.NOT_CONTAINING:
            return needle not in actual
        if op is Operator.STARTING_WITH:
            return actual.startswith(needle)
        return actual.endswith(needle)

    if op is Operator.EQUALS:
        return actual == args[0]
    if op is Operator.NOT:
        return actual != args[0]
    # Comparisons against a null argument are never true.
    if any(a is None for a in args):
        return False
    if op is Operator.BETWEEN:
        return args[0] <= actual <= args[1]
    if op in (Operator.GREATER_THAN, Operator.AFTER):
        return actual > args[0]
    if op is Operator.GREATER_THAN_EQUAL:
        return actual >= args[0]
    if op in (Operator.LESS_THAN, Operator.BEFORE):
        return actual < args[0]
    if op is Operator.LESS_THAN_EQUAL:
        return actual <= args[0]
    raise AssertionError(f"unhandled operator {op!r}")


def matches(predicate: FilterPredicate, record: BaseModel) -> bool:
    """OR over AND-groups, left to right, short-circuiting."""
    if predicate.is_empty:
        return True
    return any(all(evaluate(c, record) for c in group) for group in predicate.groups())


def filter_records(records: Iterable[T], predicate: FilterPredicate | None) -> list[T]:
    if predicate is None or predicate.is_empty:
        return list(records)
    return [r for r in records if matches(predicate, r)]


def sort_records(records: Sequence[T], sort: SortSpec | None) -> list[T]:
    """Stable multi-key sort; ties keep their original relative order."""
    ordered = list(records)
    if not sort:
        return ordered
    # Apply keys from least to most significant; each pass is stable.
    for order in reversed(sort.orders):
        descending = order.direction is Direction.DESC
        ordered.sort(
            key=lambda r, f=order.field: (getattr(r, f) is not None, getattr(r, f)),
            reverse=descending,
        )
    return ordered
