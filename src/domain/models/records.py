"""Reference-app records: students, authors and books.

These are pure domain objects with no ORM concerns.  Every record carries
an integer ``id`` that is None until the store assigns one on insert;
after that it never changes.  Records are frozen, so updates always go
through ``model_copy`` and come back from the repository as new instances.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Student(BaseModel):
    """A student's result for a single subject.

    result is free text ("Pass", "Fail", ...) and may be empty: finders
    such as find_by_student_name_or_result treat "" as an ordinary value.
    """

    model_config = ConfigDict(frozen=True)

    id: int | None = None
    student_name: str = Field(min_length=1)
    student_roll_no: int = 0
    marks: int = Field(default=0, ge=0, le=100)
    subject: str = ""
    grade: str = ""
    result: str = ""

    @classmethod
    def create(
        cls,
        student_name: str,
        student_roll_no: int,
        marks: int,
        subject: str,
        grade: str,
        result: str,
    ) -> Student:
        return cls(
            student_name=student_name,
            student_roll_no=student_roll_no,
            marks=marks,
            subject=subject,
            grade=grade,
            result=result,
        )


class Author(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int | None = None
    first_name: str = Field(min_length=1)
    last_name: str = ""
    address: str | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class Book(BaseModel):
    """A book and the id of its (single) author.

    author_id is an explicit foreign key.  Loading the author and
    cascading saves/deletes to it are caller-invoked steps (see
    BookService), never implicit side effects of saving a book.
    """

    model_config = ConfigDict(frozen=True)

    id: int | None = None
    book_name: str = Field(min_length=1)
    author_id: int | None = None


class BookWithAuthor(BaseModel):
    """Read model pairing a book with its explicitly loaded author."""

    model_config = ConfigDict(frozen=True)

    book: Book
    author: Author | None = None
