"""Tests for src/domain/repositories/students.py."""

import pytest

from src.domain.models.enums import Combinator, Direction, Operator
from src.domain.repositories.students import (
    BY_MARKS_BETWEEN,
    BY_STUDENT_NAME,
    BY_STUDENT_NAME_AND_RESULT,
    BY_STUDENT_NAME_OR_RESULT,
    StudentRepository,
)


def test_student_repository_is_abstract():
    with pytest.raises(TypeError):
        StudentRepository()  # type: ignore[abstract]


def test_by_student_name_single_equals_clause():
    assert BY_STUDENT_NAME.fields == ["student_name"]
    assert BY_STUDENT_NAME.clauses[0].operator is Operator.EQUALS


def test_by_student_name_or_result_uses_or():
    assert BY_STUDENT_NAME_OR_RESULT.combinators == (Combinator.OR,)


def test_by_student_name_and_result_uses_and():
    assert BY_STUDENT_NAME_AND_RESULT.combinators == (Combinator.AND,)


def test_by_marks_between_sorts_descending():
    assert BY_MARKS_BETWEEN.arity == 2
    assert BY_MARKS_BETWEEN.sort.orders[0].direction is Direction.DESC
