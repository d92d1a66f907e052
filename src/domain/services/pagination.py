"""Pager: slice a full result sequence into a Page."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

from src.domain.models.query import Page, SortSpec, check_page_bounds

from .matching import sort_records

T = TypeVar("T")


def paginate(
    items: Sequence[T],
    page_number: int,
    page_size: int,
    sort: SortSpec | None = None,
) -> Page[T]:
    """Sort (stably) then slice items into the zero-based page page_number.

    Raises InvalidArgument for a negative page_number or a page_size <= 0.
    A page past the end of the data is empty with is_last=True.
    """
    check_page_bounds(page_number, page_size)
    ordered = sort_records(items, sort)
    total = len(ordered)
    start = page_number * page_size
    return Page(
        items=ordered[start : start + page_size],
        page_number=page_number,
        page_size=page_size,
        total_count=total,
        is_last=(page_number + 1) * page_size >= total,
    )
