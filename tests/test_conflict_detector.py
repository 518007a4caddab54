"""
Tests for classifying imported volunteer names
"""

from cel_schedule.models import Department, MembershipType, Volunteer
from cel_schedule.schemas.batch_import import ConflictType, DepartmentPreview
from cel_schedule.services.conflict_detector import count_unique_volunteers, detect_conflicts


def preview(name, head, members=(), column=0):
    return DepartmentPreview(
        department_name=name, head_name=head, members=list(members), column_index=column
    )


def test_name_in_two_columns_is_duplicate_in_import():
    departments = [
        preview("Ushers", "Anna", ["Carl"], column=0),
        preview("Worship", "Ben", ["carl"], column=1),
    ]

    conflicts = detect_conflicts(departments, [])

    assert len(conflicts) == 1
    conflict = conflicts[0]
    assert conflict.volunteer_name == "Carl"
    assert conflict.conflict_type == ConflictType.DUPLICATE_IN_IMPORT
    assert conflict.existing_volunteer is None
    assert [(o.department_name, o.column_index, o.row_index, o.is_head)
            for o in conflict.occurrences] == [
        ("Ushers", 0, 2, False),
        ("Worship", 1, 2, False),
    ]


def test_single_occurrence_matching_database_is_existing_in_db():
    existing = Volunteer.new("Anna")
    departments = [preview("Ushers", " anna ", ["Carl"])]

    conflicts = detect_conflicts(departments, [existing])

    assert len(conflicts) == 1
    assert conflicts[0].conflict_type == ConflictType.EXISTING_IN_DB
    assert conflicts[0].occurrences[0].is_head is True
    assert conflicts[0].occurrences[0].row_index == 1
    assert conflicts[0].existing_volunteer.id == existing.id
    assert conflicts[0].existing_volunteer.name == "Anna"


def test_last_stored_volunteer_with_same_name_is_reported():
    first, second = Volunteer.new("Anna"), Volunteer.new("ANNA")

    conflicts = detect_conflicts([preview("Ushers", "Anna")], [first, second])

    assert conflicts[0].existing_volunteer.id == second.id


def test_existing_match_wins_over_duplicate():
    existing = Volunteer.new("Carl")
    departments = [
        preview("Ushers", "Anna", ["Carl"], column=0),
        preview("Worship", "Ben", ["Carl"], column=1),
    ]

    conflicts = detect_conflicts(departments, [existing])

    assert len(conflicts) == 1
    assert conflicts[0].conflict_type == ConflictType.EXISTING_IN_DB
    assert len(conflicts[0].occurrences) == 2


def test_unique_new_name_is_not_a_conflict():
    departments = [preview("Ushers", "Anna", ["Carl", "Dana"])]

    assert detect_conflicts(departments, [Volunteer.new("Zed")]) == []


def test_existing_volunteer_department_count():
    existing = Volunteer.new("Anna")
    other = Volunteer.new("Ben")
    stored = [
        Department.new("Choir", [Department.membership(existing.id, MembershipType.HEAD)]),
        Department.new("Kitchen", [
            Department.membership(other.id, MembershipType.HEAD),
            Department.membership(existing.id, MembershipType.MEMBER),
        ]),
        Department.new("Parking", [Department.membership(other.id, MembershipType.HEAD)]),
    ]

    conflicts = detect_conflicts([preview("Ushers", "Anna")], [existing, other], stored)

    assert conflicts[0].existing_volunteer.current_dept_count == 2


def test_count_unique_volunteers_ignores_case():
    departments = [
        preview("Ushers", "Anna", ["Carl"], column=0),
        preview("Worship", "anna", ["CARL", "Dana"], column=1),
    ]

    assert count_unique_volunteers(departments) == 3
