"""SQLAlchemy implementation of StudentRepository."""

from __future__ import annotations

from typing import Any

from src.domain.models.records import Student as DomainStudent
from src.domain.repositories.students import StudentRepository
from src.infrastructure.persistence.models.library import Student as OrmStudent

from .sql import SqlRepository


class SqlStudentRepository(SqlRepository, StudentRepository):
    orm_model = OrmStudent

    @staticmethod
    def _to_domain(row: OrmStudent) -> DomainStudent:
        return DomainStudent(
            id=row.id,
            student_name=row.student_name,
            student_roll_no=row.student_roll_no,
            marks=row.marks,
            subject=row.subject,
            grade=row.grade,
            result=row.result,
        )

    @staticmethod
    def _to_values(entity: DomainStudent) -> dict[str, Any]:
        return {
            "student_name": entity.student_name,
            "student_roll_no": entity.student_roll_no,
            "marks": entity.marks,
            "subject": entity.subject,
            "grade": entity.grade,
            "result": entity.result,
        }
