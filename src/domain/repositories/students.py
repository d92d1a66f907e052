"""Student repository interface and its declared finders."""

from __future__ import annotations

from src.domain.models.enums import Direction, Operator
from src.domain.models.records import Student
from src.domain.services.finders import Finder, parse_finder_name

from .base import Repository

BY_STUDENT_NAME = parse_finder_name("findByStudentName", Student)
BY_STUDENT_NAME_OR_RESULT = parse_finder_name("findByStudentNameOrResult", Student)
BY_STUDENT_NAME_AND_RESULT = parse_finder_name("findByStudentNameAndResult", Student)
BY_MARKS_BETWEEN = (
    Finder.where("marks", Operator.BETWEEN)
    .order_by("marks", Direction.DESC)
    .named("find_by_marks_between")
)
BY_NAME_CONTAINING_IGNORE_CASE = Finder.where(
    "student_name", Operator.CONTAINING, ignore_case=True
).named("find_by_student_name_containing_ignore_case")


class StudentRepository(Repository[Student]):
    """Read/write interface for Student records.

    Every finder returns a (possibly empty) list; none of them raise when
    nothing matches.
    """

    model = Student

    async def find_by_student_name(self, name: str) -> list[Student]:
        return await self.find(BY_STUDENT_NAME, name)

    async def find_by_student_name_or_result(self, name: str, result: str) -> list[Student]:
        return await self.find(BY_STUDENT_NAME_OR_RESULT, name, result)

    async def find_by_student_name_and_result(self, name: str, result: str) -> list[Student]:
        return await self.find(BY_STUDENT_NAME_AND_RESULT, name, result)

    async def find_by_marks_between(self, low: int, high: int) -> list[Student]:
        """Students with low <= marks <= high, highest marks first."""
        return await self.find(BY_MARKS_BETWEEN, low, high)

    async def find_by_student_name_containing(self, fragment: str) -> list[Student]:
        return await self.find(BY_NAME_CONTAINING_IGNORE_CASE, fragment)
