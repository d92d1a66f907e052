"""Declarative finders and the finder-name translator.

A Finder is the declared, unbound shape of a derived query: which fields
are compared, with which operators, joined by which combinators, plus an
optional sort and result limit.  Binding call arguments to it produces a
FilterPredicate the repositories can evaluate.

Finders are built in one of two ways, both at declaration time:

    BY_NAME_AND_RESULT = Finder.where("student_name").and_("result")
    BY_NAME_AND_RESULT = parse_finder_name("findByStudentNameAndResult", Student)

parse_finder_name understands the conventional ``findBy<Field>[<Op>]
{And|Or}<Field>[<Op>]...[OrderBy<Field>[Asc|Desc]...]`` names.  Nothing
inspects method names at call time.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from typing import Any

from pydantic import BaseModel

from src.domain.exceptions import (
    ArgumentCountMismatch,
    InvalidArgument,
    SchemaMismatch,
    UnsupportedOperator,
)
from src.domain.models.enums import Combinator, Direction, Operator
from src.domain.models.query import Condition, FilterPredicate, SortOrder, SortSpec

# Longest keywords first so "GreaterThanEqual" wins over "GreaterThan",
# "IsNotNull" over "NotNull" over "Null", and so on.
_OPERATOR_KEYWORDS: list[tuple[str, Operator]] = sorted(
    [
        ("Is", Operator.EQUALS),
        ("Equals", Operator.EQUALS),
        ("IsNot", Operator.NOT),
        ("Not", Operator.NOT),
        ("Containing", Operator.CONTAINING),
        ("IsContaining", Operator.CONTAINING),
        ("Contains", Operator.CONTAINING),
        ("NotContaining", Operator.NOT_CONTAINING),
        ("StartingWith", Operator.STARTING_WITH),
        ("IsStartingWith", Operator.STARTING_WITH),
        ("StartsWith", Operator.STARTING_WITH),
        ("EndingWith", Operator.ENDING_WITH),
        ("IsEndingWith", Operator.ENDING_WITH),
        ("EndsWith", Operator.ENDING_WITH),
        ("Between", Operator.BETWEEN),
        ("IsBetween", Operator.BETWEEN),
        ("GreaterThan", Operator.GREATER_THAN),
        ("IsGreaterThan", Operator.GREATER_THAN),
        ("GreaterThanEqual", Operator.GREATER_THAN_EQUAL),
        ("IsGreaterThanEqual", Operator.GREATER_THAN_EQUAL),
        ("LessThan", Operator.LESS_THAN),
        ("IsLessThan", Operator.LESS_THAN),
        ("LessThanEqual", Operator.LESS_THAN_EQUAL),
        ("IsLessThanEqual", Operator.LESS_THAN_EQUAL),
        ("After", Operator.AFTER),
        ("IsAfter", Operator.AFTER),
        ("Before", Operator.BEFORE),
        ("IsBefore", Operator.BEFORE),
        ("In", Operator.IN),
        ("IsIn", Operator.IN),
        ("NotIn", Operator.NOT_IN),
        ("IsNotIn", Operator.NOT_IN),
        ("Null", Operator.IS_NULL),
        ("IsNull", Operator.IS_NULL),
        ("NotNull", Operator.IS_NOT_NULL),
        ("IsNotNull", Operator.IS_NOT_NULL),
        ("True", Operator.TRUE),
        ("IsTrue", Operator.TRUE),
        ("False", Operator.FALSE),
        ("IsFalse", Operator.FALSE),
    ],
    key=lambda kw: len(kw[0]),
    reverse=True,
)

_PREFIX = re.compile(
    r"^(?:find|get|read|query|search)"
    r"(?P<distinct>Distinct)?"
    r"(?:(?P<first>First|Top)(?P<limit>\d*)(?=[A-Z]))?"
    r"(?:[A-Z][A-Za-z0-9]*?)??"
    r"By(?=[A-Z])"
)
_ORDER_BY = re.compile(r"OrderBy(?=[A-Z])")
_JUNCTION = re.compile(r"(?<=[a-z0-9])(And|Or)(?=[A-Z])")
_DIRECTION = re.compile(r"(Asc|Desc)(?=[A-Z]|$)")
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


@dataclass(frozen=True)
class Clause:
    """Unbound clause of a Finder: a field, an operator, a case flag."""

    field: str
    operator: Operator = Operator.EQUALS
    ignore_case: bool = False


@dataclass(frozen=True)
class Finder:
    """Declared derived query.  Immutable; builder methods return copies."""

    clauses: tuple[Clause, ...] = ()
    combinators: tuple[Combinator, ...] = ()
    sort: SortSpec | None = None
    limit: int | None = None
    name: str = field(default="", compare=False)

    def __post_init__(self) -> None:
        if self.limit is not None and self.limit < 1:
            raise InvalidArgument("limit", self.limit, "must be at least 1")

    @classmethod
    def where(
        cls,
        field_name: str,
        operator: Operator = Operator.EQUALS,
        ignore_case: bool = False,
    ) -> Finder:
        return cls(clauses=(Clause(field_name, operator, ignore_case),))

    def and_(
        self,
        field_name: str,
        operator: Operator = Operator.EQUALS,
        ignore_case: bool = False,
    ) -> Finder:
        return self._join(Combinator.AND, Clause(field_name, operator, ignore_case))

    def or_(
        self,
        field_name: str,
        operator: Operator = Operator.EQUALS,
        ignore_case: bool = False,
    ) -> Finder:
        return self._join(Combinator.OR, Clause(field_name, operator, ignore_case))

    def order_by(self, field_name: str, direction: Direction = Direction.ASC) -> Finder:
        order = SortSpec(orders=(SortOrder(field=field_name, direction=direction),))
        return replace(self, sort=self.sort.and_(order) if self.sort else order)

    def first(self, limit: int = 1) -> Finder:
        return replace(self, limit=limit)

    def named(self, name: str) -> Finder:
        return replace(self, name=name)

    def _join(self, combinator: Combinator, clause: Clause) -> Finder:
        if not self.clauses:
            return replace(self, clauses=(clause,))
        return replace(
            self,
            clauses=self.clauses + (clause,),
            combinators=self.combinators + (combinator,),
        )

    @property
    def arity(self) -> int:
        return sum(c.operator.arity for c in self.clauses)

    @property
    def fields(self) -> list[str]:
        return [c.field for c in self.clauses]

    def validate(self, model: type[BaseModel]) -> Finder:
        """Raise SchemaMismatch unless every clause and sort field exists on model."""
        known = model.model_fields
        sort_fields = self.sort.fields if self.sort else []
        for name in [*self.fields, *sort_fields]:
            if name not in known:
                raise SchemaMismatch(model.__name__, name)
        return self

    def bind(self, *args: Any) -> FilterPredicate:
        """Bind positional call arguments to clauses in declaration order."""
        if len(args) != self.arity:
            raise ArgumentCountMismatch(self.name or repr(self.fields), self.arity, len(args))
        conditions = []
        position = 0
        for clause in self.clauses:
            values = args[position : position + clause.operator.arity]
            position += clause.operator.arity
            conditions.append(
                Condition(
                    field=clause.field,
                    operator=clause.operator,
                    values=tuple(values),
                    ignore_case=clause.ignore_case,
                )
            )
        return FilterPredicate(conditions=tuple(conditions), combinators=self.combinators)


def to_snake(name: str) -> str:
    """``StudentName`` -> ``student_name``."""
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def parse_finder_name(name: str, model: type[BaseModel]) -> Finder:
    """Translate a conventional finder name into a declared Finder for model.

    Raises SchemaMismatch for unknown properties, UnsupportedOperator for
    unrecognised trailing keywords or an unparseable prefix, and
    InvalidArgument for a Top0 limit.
    """
    prefix = _PREFIX.match(name)
    if prefix is None:
        raise UnsupportedOperator(name.split("By", 1)[0] or name, clause=name)

    finder = Finder(name=name)
    if prefix.group("first"):
        finder = finder.first(int(prefix.group("limit") or 1))

    remainder = name[prefix.end():]
    order_part = ""
    order_match = _ORDER_BY.search(remainder)
    if order_match is not None:
        order_part = remainder[order_match.end():]
        remainder = remainder[: order_match.start()]

    all_ignore_case = False
    if remainder.endswith("AllIgnoreCase"):
        all_ignore_case = True
        remainder = remainder[: -len("AllIgnoreCase")]

    if not remainder:
        if not order_part:
            raise UnsupportedOperator("By", clause=name)
        pieces: list[str] = []
    else:
        pieces = _JUNCTION.split(remainder)
    # split() interleaves tokens and the captured And/Or separators.
    tokens, junctions = pieces[0::2], pieces[1::2]
    for index, token in enumerate(tokens):
        clause = _parse_clause(token, model, all_ignore_case)
        if index == 0:
            finder = replace(finder, clauses=(clause,))
        else:
            combinator = Combinator.AND if junctions[index - 1] == "And" else Combinator.OR
            finder = finder._join(combinator, clause)

    if order_part:
        for prop, direction in _parse_order(order_part):
            finder = finder.order_by(_resolve_field(prop, model), direction)
    return finder


def _parse_clause(token: str, model: type[BaseModel], all_ignore_case: bool) -> Clause:
    ignore_case = all_ignore_case
    if token.endswith("IgnoreCase"):
        ignore_case = True
        token = token[: -len("IgnoreCase")]
    elif token.endswith("IgnoringCase"):
        ignore_case = True
        token = token[: -len("IgnoringCase")]
    if not token:
        raise UnsupportedOperator("IgnoreCase", clause=token)

    fields = model.model_fields
    if to_snake(token) in fields:
        return Clause(to_snake(token), Operator.EQUALS, ignore_case)

    for keyword, operator in _OPERATOR_KEYWORDS:
        if token.endswith(keyword) and len(token) > len(keyword):
            candidate = to_snake(token[: -len(keyword)])
            if candidate in fields:
                return Clause(candidate, operator, ignore_case)

    # A known field followed by an unknown suffix is an operator problem;
    # anything else is a property the record type does not have.
    for boundary in reversed([m.start() for m in _CAMEL_BOUNDARY.finditer(token)]):
        if to_snake(token[:boundary]) in fields:
            raise UnsupportedOperator(token[boundary:], clause=token)
    raise SchemaMismatch(model.__name__, to_snake(token))


def _parse_order(order_part: str) -> list[tuple[str, Direction]]:
    # "MarksDescStudentName" -> ["Marks", "Desc", "StudentName"]
    pieces = _DIRECTION.split(order_part)
    props, suffixes = pieces[0::2], pieces[1::2]
    terms = []
    for index, prop in enumerate(props):
        if not prop:
            continue
        suffix = suffixes[index] if index < len(suffixes) else "Asc"
        terms.append((prop, Direction.DESC if suffix == "Desc" else Direction.ASC))
    return terms


def _resolve_field(prop: str, model: type[BaseModel]) -> str:
    snake = to_snake(prop)
    if snake not in model.model_fields:
        raise SchemaMismatch(model.__name__, snake)
    return snake
