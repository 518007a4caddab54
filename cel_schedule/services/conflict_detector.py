"""
Conflict Detector
Finds imported volunteer names that need a decision before import.
"""
from collections import Counter
from typing import Dict, Iterable, Iterator, List, Tuple

from cel_schedule.models import Department, Volunteer
from cel_schedule.schemas.batch_import import (
    ConflictOccurrence,
    ConflictType,
    DepartmentPreview,
    ExistingVolunteerInfo,
    VolunteerConflict,
)

HEAD_ROW_INDEX = 1
FIRST_MEMBER_ROW_INDEX = 2


def name_key(name: str) -> str:
    """Case-insensitive, trimmed key used to match volunteer names."""
    return name.strip().lower()


def iter_occurrences(
    departments: Iterable[DepartmentPreview],
) -> Iterator[Tuple[str, ConflictOccurrence]]:
    """Yield every (name, occurrence) in import order, head first per column."""
    for department in departments:
        yield department.head_name, ConflictOccurrence(
            department_name=department.department_name,
            column_index=department.column_index,
            row_index=HEAD_ROW_INDEX,
            is_head=True,
        )
        for idx, member in enumerate(department.members):
            yield member, ConflictOccurrence(
                department_name=department.department_name,
                column_index=department.column_index,
                row_index=idx + FIRST_MEMBER_ROW_INDEX,
                is_head=False,
            )


def count_unique_volunteers(departments: Iterable[DepartmentPreview]) -> int:
    """Number of distinct (case-insensitive) names across all previews."""
    return len({name_key(name) for name, _ in iter_occurrences(departments)})


def detect_conflicts(
    departments: List[DepartmentPreview],
    existing_volunteers: Iterable[Volunteer],
    existing_departments: Iterable[Department] = (),
) -> List[VolunteerConflict]:
    """
    Classify imported names against each other and stored volunteers.

    A name matching a stored volunteer is EXISTING_IN_DB even when it occurs
    only once. Otherwise a name occurring more than once is
    DUPLICATE_IN_IMPORT. Remaining names are not conflicts.

    Args:
        departments: Valid previews from the parser
        existing_volunteers: Every stored volunteer
        existing_departments: Stored departments, used to count memberships

    Returns:
        Conflicts in order of each name's first occurrence
    """
    occurrences: Dict[str, List[ConflictOccurrence]] = {}
    display_names: Dict[str, str] = {}
    for name, occurrence in iter_occurrences(departments):
        key = name_key(name)
        display_names.setdefault(key, name)
        occurrences.setdefault(key, []).append(occurrence)

    # Later volunteers with the same name replace earlier ones
    existing_by_name: Dict[str, Volunteer] = {}
    for volunteer in existing_volunteers:
        existing_by_name[name_key(volunteer.name)] = volunteer

    department_counts: Counter = Counter()
    for department in existing_departments:
        for volunteer_id in {m.get("volunteerId") for m in department.volunteer_members}:
            department_counts[volunteer_id] += 1

    conflicts = []
    for key, found in occurrences.items():
        existing = existing_by_name.get(key)
        if existing is not None:
            conflicts.append(VolunteerConflict(
                volunteer_name=display_names[key],
                conflict_type=ConflictType.EXISTING_IN_DB,
                occurrences=found,
                existing_volunteer=ExistingVolunteerInfo(
                    id=existing.id,
                    name=existing.name,
                    created_at=existing.created_at,
                    current_dept_count=department_counts[existing.id],
                ),
            ))
        elif len(found) > 1:
            conflicts.append(VolunteerConflict(
                volunteer_name=display_names[key],
                conflict_type=ConflictType.DUPLICATE_IN_IMPORT,
                occurrences=found,
            ))

    return conflicts
