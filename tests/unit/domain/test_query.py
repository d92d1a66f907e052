"""Tests for src/domain/models/query.py."""

import pytest
from pydantic import ValidationError

from src.domain.exceptions import InvalidArgument
from src.domain.models.enums import Combinator, Direction, Operator
from src.domain.models.query import (
    Condition,
    FilterPredicate,
    Page,
    PageRequest,
    SortOrder,
    SortSpec,
)


def _eq(field, value):
    return Condition(field=field, values=(value,))


# --- Condition ---

def test_condition_defaults_to_equals():
    assert _eq("result", "Pass").operator is Operator.EQUALS


def test_condition_value_returns_single_argument():
    assert _eq("result", "Pass").value == "Pass"


def test_condition_rejects_wrong_value_count():
    with pytest.raises(ValidationError):
        Condition(field="marks", operator=Operator.BETWEEN, values=(1,))


def test_condition_null_check_takes_no_values():
    assert Condition(field="address", operator=Operator.IS_NULL).values == ()


# --- FilterPredicate ---

def test_predicate_requires_one_combinator_between_conditions():
    with pytest.raises(ValidationError):
        FilterPredicate(conditions=(_eq("a", 1), _eq("b", 2)), combinators=())


def test_empty_predicate_is_empty():
    assert FilterPredicate.all().is_empty


def test_of_joins_with_and_by_default():
    p = FilterPredicate.of(_eq("a", 1), _eq("b", 2))
    assert p.combinators == (Combinator.AND,)


def test_groups_split_on_or():
    a, b, c = _eq("a", 1), _eq("b", 2), _eq("c", 3)
    p = FilterPredicate(conditions=(a, b, c), combinators=(Combinator.AND, Combinator.OR))
    assert p.groups() == [[a, b], [c]]


def test_groups_of_pure_and_is_single_group():
    a, b = _eq("a", 1), _eq("b", 2)
    assert FilterPredicate.of(a, b).groups() == [[a, b]]


def test_groups_of_empty_predicate():
    assert FilterPredicate.all().groups() == []


def test_fields_in_declaration_order():
    p = FilterPredicate.of(_eq("student_name", "Rahul"), _eq("result", "Pass"))
    assert p.fields == ["student_name", "result"]


# --- SortSpec ---

def test_sort_by_builds_orders_in_order():
    spec = SortSpec.by("marks", "student_name", direction=Direction.DESC)
    assert spec.orders == (
        SortOrder(field="marks", direction=Direction.DESC),
        SortOrder(field="student_name", direction=Direction.DESC),
    )


def test_sort_and_concatenates():
    spec = SortSpec.by("marks").and_(SortSpec.by("id"))
    assert spec.fields == ["marks", "id"]


def test_empty_sort_is_falsy():
    assert not SortSpec()


# --- PageRequest ---

def test_page_request_of_rejects_negative_page():
    with pytest.raises(InvalidArgument):
        PageRequest.of(-1, 10)


def test_page_request_of_rejects_zero_size():
    with pytest.raises(InvalidArgument):
        PageRequest.of(0, 0)


def test_page_request_offset():
    assert PageRequest.of(3, 10).offset == 30


# --- Page ---

def test_page_total_pages_rounds_up():
    page = Page(items=[1, 2, 3], page_number=0, page_size=3, total_count=7, is_last=False)
    assert page.total_pages == 3


def test_page_rejects_more_items_than_page_size():
    with pytest.raises(ValidationError):
        Page(items=[1, 2, 3], page_number=0, page_size=2, total_count=3, is_last=False)


def test_page_rejects_total_smaller_than_items():
    with pytest.raises(ValidationError):
        Page(items=[1, 2], page_number=0, page_size=5, total_count=1, is_last=True)
