"""Tests for src/domain/models/enums.py."""

from src.domain.models.enums import Combinator, Direction, Operator


# --- Operator.arity ---

def test_equals_takes_one_argument():
    assert Operator.EQUALS.arity == 1


def test_between_takes_two_arguments():
    assert Operator.BETWEEN.arity == 2


def test_null_checks_take_no_arguments():
    assert Operator.IS_NULL.arity == 0
    assert Operator.IS_NOT_NULL.arity == 0


def test_boolean_operators_take_no_arguments():
    assert Operator.TRUE.arity == 0
    assert Operator.FALSE.arity == 0


def test_in_takes_one_collection_argument():
    assert Operator.IN.arity == 1


# --- Operator.is_textual ---

def test_containing_is_textual():
    assert Operator.CONTAINING.is_textual


def test_greater_than_is_not_textual():
    assert not Operator.GREATER_THAN.is_textual


# --- String mixin: enums compare equal to their string values ---

def test_combinator_is_string_comparable():
    assert Combinator.OR == "or"


def test_direction_is_string_comparable():
    assert Direction.DESC == "desc"
