"""Tests for src/domain/models/__init__.py — package exports."""

from src.domain.models import __all__ as domain_all
from src.domain.models import (
    # spot-check one import from each module
    Book,
    FilterPredicate,
    Operator,
)


def test_domain_models_exports_14_names():
    assert len(domain_all) == 14


def test_book_importable_from_package():
    assert Book.__name__ == "Book"


def test_filter_predicate_importable_from_package():
    assert FilterPredicate.all().is_empty


def test_operator_importable_from_package():
    assert Operator.IN == "in"
