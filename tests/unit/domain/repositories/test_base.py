"""Tests for src/domain/repositories/base.py."""

import pytest

from src.domain.exceptions import ArgumentCountMismatch, SchemaMismatch
from src.domain.models.enums import Operator
from src.domain.models.query import Condition, FilterPredicate, SortSpec
from src.domain.models.records import Student
from src.domain.repositories.base import Repository
from src.domain.services.finders import Finder


class _Recording(Repository[Student]):
    """Concrete repository that records the arguments of find_where/count."""

    model = Student

    def __init__(self, rows=None, fail_on=None):
        self.rows = rows or []
        self.fail_on = fail_on
        self.calls = []

    async def save(self, entity):
        if entity.student_name == self.fail_on:
            raise RuntimeError("boom")
        return entity.model_copy(update={"id": len(self.calls) + 1})

    async def find_by_id(self, id): return None
    async def find_all_by_id(self, ids): return []

    async def find_where(self, predicate, sort=None, limit=None):
        self.calls.append(("find_where", predicate, sort, limit))
        return self.rows

    async def find_page(self, page_request, predicate=None): return None

    async def count(self, predicate=None):
        self.calls.append(("count", predicate))
        return len(self.rows)

    async def exists_by_id(self, id): return False
    async def update_fields(self, id, **changes): return None
    async def delete_by_id(self, id): return None
    async def delete_all(self, ids=None): return None


# --- abstractness ---

def test_repository_cannot_be_instantiated_directly():
    with pytest.raises(TypeError):
        Repository()  # type: ignore[abstract]


def test_repository_concrete_subclass_must_implement_all_methods():
    class _Partial(Repository):
        async def save(self, entity): return entity
        # missing everything else

    with pytest.raises(TypeError):
        _Partial()  # type: ignore[abstract]


def test_repository_full_concrete_subclass_instantiates():
    assert _Recording() is not None


def test_entity_name_is_model_name():
    assert _Recording().entity_name == "Student"


# --- save_all ---

async def test_save_all_returns_saved_records_in_order():
    repo = _Recording()
    saved = await repo.save_all([Student(student_name="A"), Student(student_name="B")])
    assert [s.student_name for s in saved] == ["A", "B"]


async def test_save_all_is_fail_fast():
    repo = _Recording(fail_on="B")
    with pytest.raises(RuntimeError):
        await repo.save_all([Student(student_name="A"), Student(student_name="B")])


# --- find / find_all ---

async def test_find_all_passes_empty_predicate_and_sort():
    repo = _Recording()
    spec = SortSpec.by("marks")
    await repo.find_all(sort=spec)
    assert repo.calls == [("find_where", FilterPredicate.all(), spec, None)]


async def test_find_binds_finder_arguments():
    repo = _Recording()
    await repo.find(Finder.where("student_name").and_("result"), "Rahul", "Pass")
    _, predicate, _, _ = repo.calls[0]
    assert [c.value for c in predicate.conditions] == ["Rahul", "Pass"]


async def test_find_uses_declared_sort_and_limit():
    repo = _Recording()
    finder = Finder.where("result").order_by("marks").first(2)
    await repo.find(finder, "Pass")
    _, _, sort, limit = repo.calls[0]
    assert sort.fields == ["marks"] and limit == 2


async def test_find_explicit_sort_overrides_declared():
    repo = _Recording()
    await repo.find(Finder.where("result").order_by("marks"), "Pass", sort=SortSpec.by("grade"))
    assert repo.calls[0][2].fields == ["grade"]


async def test_find_validates_finder_fields():
    with pytest.raises(SchemaMismatch):
        await _Recording().find(Finder.where("age"), 20)


async def test_find_with_wrong_arity_raises():
    with pytest.raises(ArgumentCountMismatch):
        await _Recording().find(Finder.where("student_name"), "Rahul", "extra")


async def test_find_accepts_predicate_directly():
    repo = _Recording()
    predicate = FilterPredicate.of(Condition(field="marks", operator=Operator.GREATER_THAN, values=(50,)))
    await repo.find(predicate)
    assert repo.calls[0][1] is predicate


async def test_find_predicate_rejects_extra_arguments():
    with pytest.raises(ArgumentCountMismatch):
        await _Recording().find(FilterPredicate.all(), "unexpected")


async def test_find_predicate_validates_fields():
    predicate = FilterPredicate.of(Condition(field="age", values=(1,)))
    with pytest.raises(SchemaMismatch):
        await _Recording().find(predicate)


# --- find_one / count_by / exists_by ---

async def test_find_one_returns_first_or_none():
    assert await _Recording(rows=[]).find_one(Finder.where("result"), "Pass") is None
    first = Student(id=1, student_name="A")
    repo = _Recording(rows=[first])
    assert await repo.find_one(Finder.where("result"), "Pass") == first
    assert repo.calls[0][3] == 1


async def test_exists_by_uses_count():
    repo = _Recording(rows=[Student(id=1, student_name="A")])
    assert await repo.exists_by(Finder.where("result"), "Pass") is True
    assert repo.calls[0][0] == "count"


async def test_count_by_is_zero_when_nothing_matches():
    assert await _Recording(rows=[]).count_by(Finder.where("result"), "Pass") == 0
