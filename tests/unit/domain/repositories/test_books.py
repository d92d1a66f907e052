"""Tests for src/domain/repositories/books.py."""

import pytest

from src.domain.models.enums import Direction
from src.domain.repositories.books import (
    BY_AUTHOR_ID,
    BY_BOOK_NAME_IGNORE_CASE,
    BY_LAST_NAME,
    AuthorRepository,
    BookRepository,
)


def test_book_repository_is_abstract():
    with pytest.raises(TypeError):
        BookRepository()  # type: ignore[abstract]


def test_author_repository_is_abstract():
    with pytest.raises(TypeError):
        AuthorRepository()  # type: ignore[abstract]


def test_by_book_name_ignores_case():
    assert BY_BOOK_NAME_IGNORE_CASE.clauses[0].ignore_case is True


def test_by_author_id_returns_first_match():
    assert BY_AUTHOR_ID.limit == 1


def test_by_last_name_orders_by_first_name():
    assert BY_LAST_NAME.sort.orders[0].field == "first_name"
    assert BY_LAST_NAME.sort.orders[0].direction is Direction.ASC
