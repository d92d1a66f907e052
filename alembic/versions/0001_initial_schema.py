"""Initial schema — students, authors, books.

Revision ID: 0001
Revises:
Create Date: 2026-10-18
"""

from __future__ import annotations

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "students",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("student_name", sa.Text, nullable=False),
        sa.Column("student_roll_no", sa.Integer, nullable=False, server_default=sa.text("0")),
        sa.Column("marks", sa.Integer, nullable=False, server_default=sa.text("0")),
        sa.Column("subject", sa.Text, nullable=False, server_default=""),
        sa.Column("grade", sa.Text, nullable=False, server_default=""),
        sa.Column("result", sa.Text, nullable=False, server_default=""),
        sa.CheckConstraint("marks BETWEEN 0 AND 100", name="ck_students_marks_range"),
    )
    op.create_index("ix_students_student_name", "students", ["student_name"])

    op.create_table(
        "authors",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("first_name", sa.Text, nullable=False),
        sa.Column("last_name", sa.Text, nullable=False, server_default=""),
        sa.Column("address", sa.Text, nullable=True),
    )

    op.create_table(
        "books",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("book_name", sa.Text, nullable=False),
        sa.Column(
            "author_id",
            sa.Integer,
            sa.ForeignKey("authors.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.UniqueConstraint("book_name", name="uq_books_book_name"),
        sa.UniqueConstraint("author_id", name="uq_books_author_id"),
    )


def downgrade() -> None:
    # Drop in reverse dependency order.
    op.drop_table("books")
    op.drop_table("authors")
    op.drop_index("ix_students_student_name", table_name="students")
    op.drop_table("students")
