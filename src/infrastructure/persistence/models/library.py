"""ORM models for the reference app: students, authors, books.

The book→author link is a plain nullable FK with a unique constraint
(one author row per book).  No relationship() cascades are declared: the
application loads and deletes the author explicitly (BookService).
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import CheckConstraint, ForeignKey, Index, Integer, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.database import Base


class Student(Base):
    __tablename__ = "students"
    __table_args__ = (
        CheckConstraint("marks BETWEEN 0 AND 100", name="ck_students_marks_range"),
        Index("ix_students_student_name", "student_name"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    student_name: Mapped[str] = mapped_column(Text, nullable=False)
    student_roll_no: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    marks: Mapped[int] = mapped_column(Integer, nullable=False, default=0)  # 0..100
    subject: Mapped[str] = mapped_column(Text, nullable=False, default="")
    grade: Mapped[str] = mapped_column(Text, nullable=False, default="")
    result: Mapped[str] = mapped_column(Text, nullable=False, default="")  # may be empty


class Author(Base):
    __tablename__ = "authors"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    first_name: Mapped[str] = mapped_column(Text, nullable=False)
    last_name: Mapped[str] = mapped_column(Text, nullable=False, default="")
    address: Mapped[Optional[str]] = mapped_column(Text, nullable=True)


class Book(Base):
    __tablename__ = "books"
    __table_args__ = (
        UniqueConstraint("book_name", name="uq_books_book_name"),
        UniqueConstraint("author_id", name="uq_books_author_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    book_name: Mapped[str] = mapped_column(Text, nullable=False)
    author_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("authors.id", ondelete="SET NULL"), nullable=True
    )
