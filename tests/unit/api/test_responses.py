"""Tests for the response envelope, paged payload and error → status mapping."""

from datetime import timezone
from http import HTTPStatus

import pytest
from pydantic import ValidationError

from src.api.responses import CREATED, DELETED, OK, ApiResponse, PagePayload, status_for
from src.domain.exceptions import (
    ArgumentCountMismatch,
    DuplicateKey,
    InvalidArgument,
    NotFound,
    SchemaMismatch,
    UnsupportedOperator,
)
from src.domain.models.records import Student
from src.domain.services.pagination import paginate


# --- ApiResponse ---

def test_ok_wraps_data():
    response = ApiResponse.ok({"id": 1})
    assert response.success is True
    assert response.message == "OK"
    assert response.data == {"id": 1}


def test_ok_accepts_custom_message():
    assert ApiResponse.ok(None, message="Book Deleted").message == "Book Deleted"


def test_timestamp_is_utc():
    assert ApiResponse.ok().timestamp.tzinfo == timezone.utc


def test_failure_uses_exception_message():
    response = ApiResponse.failure(NotFound("Book", 3))
    assert response.success is False
    assert response.message == "Book with id 3 not found"
    assert response.data is None


def test_failure_accepts_plain_string():
    assert ApiResponse.failure("nope").message == "nope"


def test_failure_falls_back_to_str_for_foreign_exceptions():
    assert ApiResponse.failure(RuntimeError("boom")).message == "boom"


def test_envelope_serializes_expected_keys():
    dumped = ApiResponse.ok([1, 2]).model_dump(mode="json")
    assert set(dumped) == {"success", "message", "data", "timestamp"}


# --- PagePayload ---

def _page(page_number=0, page_size=2):
    students = [Student(id=i, student_name=f"S{i}") for i in range(1, 6)]
    return paginate(students, page_number, page_size)


def test_page_payload_uses_camel_case_keys():
    dumped = PagePayload.from_page(_page()).model_dump(by_alias=True)
    assert set(dumped) == {
        "content", "pageNumber", "pageSize", "totalElements", "totalPages", "last",
    }


def test_page_payload_counts():
    payload = PagePayload.from_page(_page(page_number=2))
    assert payload.total_elements == 5
    assert payload.total_pages == 3
    assert payload.last is True
    assert [s.id for s in payload.content] == [5]


def test_page_payload_first_page_is_not_last():
    assert PagePayload.from_page(_page()).last is False


# --- status codes ---

def test_success_status_constants():
    assert (OK, CREATED, DELETED) == (HTTPStatus.OK, HTTPStatus.CREATED, HTTPStatus.NO_CONTENT)


@pytest.mark.parametrize(
    "exc, status",
    [
        (NotFound("Student", 1), HTTPStatus.NOT_FOUND),
        (DuplicateKey("Book", ("book_name",), "Dune"), HTTPStatus.CONFLICT),
        (InvalidArgument("page_size", 0, "must be positive"), HTTPStatus.BAD_REQUEST),
        (SchemaMismatch("Student", "age"), HTTPStatus.BAD_REQUEST),
        (UnsupportedOperator("Like"), HTTPStatus.BAD_REQUEST),
        (ArgumentCountMismatch("findByStudentName", 1, 2), HTTPStatus.BAD_REQUEST),
        (RuntimeError("boom"), HTTPStatus.INTERNAL_SERVER_ERROR),
    ],
)
def test_status_for_maps_errors(exc, status):
    assert status_for(exc) == status


def test_status_for_validation_error_is_bad_request():
    with pytest.raises(ValidationError) as info:
        Student(student_name="")
    assert status_for(info.value) == HTTPStatus.BAD_REQUEST
