"""
Tests for applying conflict resolutions and creating records
"""

import asyncio

import pytest

from cel_schedule.repositories import InMemoryDatabase
from cel_schedule.schemas.batch_import import ConflictResolution, DepartmentPreview, ResolutionDecision
from cel_schedule.services.import_executor import (
    ImportExecutionError,
    ImportExecutor,
    ImportStage,
)
from conftest import add_volunteer


def preview(name, head, members=(), column=0):
    return DepartmentPreview(
        department_name=name, head_name=head, members=list(members), column_index=column
    )


def resolve(name, decision, volunteer_id=None):
    return ConflictResolution(volunteer_name=name, decision=decision, volunteer_id=volunteer_id)


def run(db, departments, resolutions=()):
    return asyncio.run(ImportExecutor(db).execute(departments, list(resolutions)))


def member_ids(department):
    return [m["volunteerId"] for m in department.volunteer_members]


def test_unconflicted_names_are_created_once():
    db = InMemoryDatabase()

    result = run(db, [preview("Ushers", "Anna", ["Carl", "Dana"])])

    assert result.volunteers_created == 3
    assert result.volunteers_reused == 0
    assert result.departments_created == 1
    names = {v.name for v in db.volunteers.items.values()}
    assert names == {"Anna", "Carl", "Dana"}

    department = db.departments.items[result.created_department_ids[0]]
    assert department.department_name == "Ushers"
    assert [m["membershipType"] for m in department.volunteer_members] == [
        "HEAD", "MEMBER", "MEMBER"
    ]
    by_name = {v.name: v.id for v in db.volunteers.items.values()}
    assert member_ids(department) == [by_name["Anna"], by_name["Carl"], by_name["Dana"]]


def test_create_one_shares_a_volunteer_across_departments():
    db = InMemoryDatabase()
    departments = [
        preview("Ushers", "Anna", ["Carl"], column=0),
        preview("Worship", "Ben", ["carl"], column=1),
    ]

    result = run(db, departments, [resolve("CARL", ResolutionDecision.CREATE_ONE)])

    assert result.volunteers_created == 3
    ushers, worship = (db.departments.items[i] for i in result.created_department_ids)
    assert member_ids(ushers)[1] == member_ids(worship)[1]


def test_create_multiple_makes_one_volunteer_per_department():
    db = InMemoryDatabase()
    departments = [
        preview("Ushers", "Anna", ["Carl"], column=0),
        preview("Worship", "Ben", ["Carl"], column=1),
    ]

    result = run(db, departments, [resolve("Carl", ResolutionDecision.CREATE_MULTIPLE)])

    carls = sorted(
        v.name for v in db.volunteers.items.values() if v.name.startswith("Carl")
    )
    assert carls == ["Carl (Ushers)", "Carl (Worship)"]
    assert result.volunteers_created == 4

    ushers, worship = (db.departments.items[i] for i in result.created_department_ids)
    by_name = {v.name: v.id for v in db.volunteers.items.values()}
    assert member_ids(ushers)[1] == by_name["Carl (Ushers)"]
    assert member_ids(worship)[1] == by_name["Carl (Worship)"]


def test_reuse_existing_links_stored_volunteer():
    db = InMemoryDatabase()
    anna = add_volunteer(db, "Anna")

    result = run(
        db,
        [preview("Ushers", "anna", ["Carl"])],
        [resolve("Anna", ResolutionDecision.REUSE_EXISTING, anna.id)],
    )

    assert result.volunteers_reused == 1
    assert result.volunteers_created == 1
    department = db.departments.items[result.created_department_ids[0]]
    assert member_ids(department)[0] == anna.id
    assert len(db.volunteers.items) == 2


def test_resolved_previews_carry_ids():
    db = InMemoryDatabase()
    departments = [preview("Ushers", "Anna", ["Carl"])]

    result = run(db, departments)

    resolved = result.departments[0]
    assert resolved.head_id is not None
    assert len(resolved.member_ids) == 1
    # The stored previews are left untouched
    assert departments[0].head_id is None


def test_reuse_of_unknown_volunteer_fails_at_volunteer_stage():
    db = InMemoryDatabase()

    with pytest.raises(ImportExecutionError) as exc_info:
        run(
            db,
            [preview("Ushers", "Anna")],
            [resolve("Anna", ResolutionDecision.REUSE_EXISTING, "missing-id")],
        )

    assert exc_info.value.stage == ImportStage.VOLUNTEER_CREATION
    assert db.departments.items == {}


class FailingDepartments:
    async def create(self, department):
        raise RuntimeError("store unavailable")


def test_department_failure_keeps_created_volunteers():
    db = InMemoryDatabase()
    db.departments = FailingDepartments()

    with pytest.raises(ImportExecutionError) as exc_info:
        run(db, [preview("Ushers", "Anna", ["Carl"])])

    error = exc_info.value
    assert error.stage == ImportStage.DEPARTMENT_CREATION
    assert "store unavailable" in error.message
    assert error.result.volunteers_created == 2
    assert len(db.volunteers.items) == 2
    assert sorted(error.result.created_volunteer_ids) == sorted(db.volunteers.items)
