"""Domain enumerations for filter predicates and sorting.

All string-valued enums use str mixin so they serialize cleanly to JSON
and remain comparable to plain strings (Pydantic default behaviour).
"""

from enum import Enum


class Operator(str, Enum):
    EQUALS = "equals"
    NOT = "not"
    CONTAINING = "containing"
    NOT_CONTAINING = "not_containing"
    STARTING_WITH = "starting_with"
    ENDING_WITH = "ending_with"
    BETWEEN = "between"
    GREATER_THAN = "greater_than"
    GREATER_THAN_EQUAL = "greater_than_equal"
    LESS_THAN = "less_than"
    LESS_THAN_EQUAL = "less_than_equal"
    AFTER = "after"
    BEFORE = "before"
    IN = "in"
    NOT_IN = "not_in"
    IS_NULL = "is_null"
    IS_NOT_NULL = "is_not_null"
    TRUE = "true"
    FALSE = "false"

    @property
    def arity(self) -> int:
        """Number of call arguments a clause with this operator consumes."""
        if self is Operator.BETWEEN:
            return 2
        if self in (Operator.IS_NULL, Operator.IS_NOT_NULL, Operator.TRUE, Operator.FALSE):
            return 0
        return 1

    @property
    def is_textual(self) -> bool:
        """True for substring operators that only make sense on strings."""
        return self in (
            Operator.CONTAINING,
            Operator.NOT_CONTAINING,
            Operator.STARTING_WITH,
            Operator.ENDING_WITH,
        )


class Combinator(str, Enum):
    AND = "and"
    OR = "or"


class Direction(str, Enum):
    ASC = "asc"
    DESC = "desc"
