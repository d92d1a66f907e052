"""Student service: registration, derived-finder lookups and paged listing."""

from __future__ import annotations

from collections.abc import Iterable

from src.domain.models.query import Page, PageRequest, SortSpec
from src.domain.models.records import Student
from src.domain.repositories.students import StudentRepository


class StudentService:
    def __init__(self, students: StudentRepository) -> None:
        self._students = students

    async def register(self, student: Student) -> Student:
        return await self._students.save(student)

    async def register_all(self, students: Iterable[Student]) -> list[Student]:
        """Fail-fast batch save; see Repository.save_all."""
        return await self._students.save_all(students)

    async def find_by_student_name(self, name: str) -> list[Student]:
        return await self._students.find_by_student_name(name)

    async def find_by_student_name_or_result(self, name: str, result: str) -> list[Student]:
        return await self._students.find_by_student_name_or_result(name, result)

    async def find_by_student_name_and_result(self, name: str, result: str) -> list[Student]:
        return await self._students.find_by_student_name_and_result(name, result)

    async def list_students(
        self,
        page_number: int = 0,
        page_size: int = 20,
        sort: SortSpec | None = None,
    ) -> Page[Student]:
        return await self._students.find_page(PageRequest.of(page_number, page_size, sort))

    async def change_roll_no(self, student_id: int, roll_no: int) -> Student:
        return await self._students.update_fields(student_id, student_roll_no=roll_no)
