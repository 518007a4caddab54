"""
Import Executor
Applies conflict resolutions to a previewed import and persists the result.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple

from cel_schedule.models import Department, MembershipType, Volunteer
from cel_schedule.repositories import Database
from cel_schedule.schemas.batch_import import (
    ConflictResolution,
    DepartmentPreview,
    ResolutionDecision,
)
from cel_schedule.services.conflict_detector import iter_occurrences, name_key

logger = logging.getLogger(__name__)

# (name key, department name); department is None for a volunteer shared by
# every occurrence of the name
VolunteerKey = Tuple[str, Optional[str]]


class ImportStage(str, Enum):
    VOLUNTEER_CREATION = "volunteer_creation"
    DEPARTMENT_CREATION = "department_creation"


@dataclass
class ImportResult:
    """Counts and ids of what an execution created."""
    volunteers_created: int = 0
    volunteers_reused: int = 0
    created_volunteer_ids: List[str] = field(default_factory=list)
    created_department_ids: List[str] = field(default_factory=list)
    departments: List[DepartmentPreview] = field(default_factory=list)

    @property
    def departments_created(self) -> int:
        return len(self.created_department_ids)


class ImportExecutionError(Exception):
    """
    An execution stopped part way.

    Records created before the failure are kept; `result` holds what was
    created so far.
    """

    def __init__(self, stage: ImportStage, message: str, result: ImportResult):
        super().__init__(message)
        self.stage = stage
        self.message = message
        self.result = result


def disambiguated_name(name: str, department_name: str) -> str:
    """Display name for a per-department copy of a volunteer."""
    return f"{name} ({department_name})"


class ImportExecutor:
    """Creates volunteers then departments for a previewed import."""

    def __init__(self, db: Database):
        self.db = db

    async def execute(
        self,
        departments: List[DepartmentPreview],
        resolutions: Iterable[ConflictResolution],
    ) -> ImportResult:
        """
        Resolve every imported name to a volunteer id and create departments.

        Raises:
            ImportExecutionError: If a volunteer or department cannot be stored
        """
        result = ImportResult()
        resolution_map: Dict[str, ConflictResolution] = {
            name_key(r.volunteer_name): r for r in resolutions
        }

        volunteer_ids = await self._resolve_volunteers(departments, resolution_map, result)
        result.departments = self._assign_ids(departments, volunteer_ids, result)
        await self._create_departments(result)

        logger.info(
            "Import executed: %d volunteers created, %d reused, %d departments created",
            result.volunteers_created,
            result.volunteers_reused,
            result.departments_created,
        )
        return result

    async def _create_volunteer(self, name: str, result: ImportResult) -> str:
        volunteer = Volunteer.new(name)
        try:
            await self.db.volunteers.create(volunteer)
        except Exception as e:
            raise ImportExecutionError(
                ImportStage.VOLUNTEER_CREATION,
                f"failed to create volunteer '{name}': {e}",
                result,
            ) from e
        result.volunteers_created += 1
        result.created_volunteer_ids.append(volunteer.id)
        return volunteer.id

    async def _reuse_volunteer(
        self, name: str, volunteer_id: str, result: ImportResult
    ) -> str:
        try:
            existing = await self.db.volunteers.get(volunteer_id)
        except Exception as e:
            raise ImportExecutionError(
                ImportStage.VOLUNTEER_CREATION,
                f"failed to look up volunteer '{volunteer_id}': {e}",
                result,
            ) from e
        if existing is None:
            raise ImportExecutionError(
                ImportStage.VOLUNTEER_CREATION,
                f"volunteer '{volunteer_id}' to reuse for '{name}' does not exist",
                result,
            )
        result.volunteers_reused += 1
        return existing.id

    async def _resolve_volunteers(
        self,
        departments: List[DepartmentPreview],
        resolutions: Dict[str, ConflictResolution],
        result: ImportResult,
    ) -> Dict[VolunteerKey, str]:
        volunteer_ids: Dict[VolunteerKey, str] = {}

        # Distinct names, first spelling wins
        unique_names: Dict[str, str] = {}
        for name, _ in iter_occurrences(departments):
            unique_names.setdefault(name_key(name), name)

        for key, name in unique_names.items():
            resolution = resolutions.get(key)
            if resolution is None or resolution.decision == ResolutionDecision.CREATE_ONE:
                volunteer_ids[(key, None)] = await self._create_volunteer(name, result)
            elif resolution.decision == ResolutionDecision.REUSE_EXISTING:
                volunteer_ids[(key, None)] = await self._reuse_volunteer(
                    name, resolution.volunteer_id, result
                )

        # One volunteer per department for CREATE_MULTIPLE names
        for name, occurrence in iter_occurrences(departments):
            key = name_key(name)
            resolution = resolutions.get(key)
            if resolution is None or resolution.decision != ResolutionDecision.CREATE_MULTIPLE:
                continue
            composite: VolunteerKey = (key, occurrence.department_name)
            if composite in volunteer_ids:
                continue
            volunteer_ids[composite] = await self._create_volunteer(
                disambiguated_name(name, occurrence.department_name), result
            )

        return volunteer_ids

    @staticmethod
    def _lookup(
        volunteer_ids: Dict[VolunteerKey, str],
        name: str,
        department_name: str,
        result: ImportResult,
    ) -> str:
        key = name_key(name)
        volunteer_id = volunteer_ids.get((key, department_name)) or volunteer_ids.get((key, None))
        if volunteer_id is None:
            raise ImportExecutionError(
                ImportStage.DEPARTMENT_CREATION,
                f"volunteer ID not found for '{name}'",
                result,
            )
        return volunteer_id

    def _assign_ids(
        self,
        departments: List[DepartmentPreview],
        volunteer_ids: Dict[VolunteerKey, str],
        result: ImportResult,
    ) -> List[DepartmentPreview]:
        """Copy each preview with its head and member ids filled in."""
        resolved = []
        for preview in departments:
            name = preview.department_name
            resolved.append(preview.model_copy(update={
                "head_id": self._lookup(volunteer_ids, preview.head_name, name, result),
                "member_ids": [
                    self._lookup(volunteer_ids, member, name, result)
                    for member in preview.members
                ],
            }))
        return resolved

    async def _create_departments(self, result: ImportResult) -> None:
        for preview in result.departments:
            members = [Department.membership(preview.head_id, MembershipType.HEAD)]
            members.extend(
                Department.membership(member_id, MembershipType.MEMBER)
                for member_id in preview.member_ids
            )
            department = Department.new(preview.department_name, members)
            try:
                await self.db.departments.create(department)
            except Exception as e:
                raise ImportExecutionError(
                    ImportStage.DEPARTMENT_CREATION,
                    f"failed to create department '{preview.department_name}': {e}",
                    result,
                ) from e
            result.created_department_ids.append(department.id)
