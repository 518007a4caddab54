"""
Batch Import Schemas
Pydantic models for the spreadsheet preview and execute steps.
"""
from enum import Enum
from pydantic import Field, model_validator
from typing import List, Optional
from datetime import datetime

from cel_schedule.schemas.base import CamelModel


class ConflictType(str, Enum):
    """Why a volunteer name needs a decision before import."""
    DUPLICATE_IN_IMPORT = "DUPLICATE_IN_IMPORT"  # Same name in several cells
    EXISTING_IN_DB = "EXISTING_IN_DB"  # A volunteer with this name already exists


class ValidationErrorType(str, Enum):
    """Problems found while reading the spreadsheet."""
    EMPTY_DEPARTMENT_NAME = "EMPTY_DEPARTMENT_NAME"
    EMPTY_HEAD = "EMPTY_HEAD"
    EMPTY_VOLUNTEER_NAME = "EMPTY_VOLUNTEER_NAME"
    DUPLICATE_IN_COLUMN = "DUPLICATE_IN_COLUMN"
    INVALID_FILE_FORMAT = "INVALID_FILE_FORMAT"


class ResolutionDecision(str, Enum):
    """Caller's decision for a conflicting volunteer name."""
    CREATE_ONE = "CREATE_ONE"  # One volunteer shared by every occurrence
    CREATE_MULTIPLE = "CREATE_MULTIPLE"  # One volunteer per department
    REUSE_EXISTING = "REUSE_EXISTING"  # Link an existing volunteer


class DepartmentPreview(CamelModel):
    """One spreadsheet column as a prospective department."""
    department_name: str
    head_name: str
    members: List[str] = Field(default_factory=list)
    column_index: int
    # Filled in once conflicts are resolved
    head_id: Optional[str] = None
    member_ids: Optional[List[str]] = None


class ConflictOccurrence(CamelModel):
    """Where a volunteer name appears in the import."""
    department_name: str
    column_index: int
    row_index: int
    is_head: bool


class ExistingVolunteerInfo(CamelModel):
    """Summary of a stored volunteer that matches an imported name."""
    id: str
    name: str
    created_at: datetime
    current_dept_count: int = 0


class VolunteerConflict(CamelModel):
    """A volunteer name that needs an explicit resolution."""
    volunteer_name: str
    conflict_type: ConflictType
    occurrences: List[ConflictOccurrence]
    existing_volunteer: Optional[ExistingVolunteerInfo] = None


class SheetValidationError(CamelModel):
    """A problem with the spreadsheet content."""
    error_type: ValidationErrorType
    message: str
    column_index: int = 0
    row_index: Optional[int] = None
    department_name: Optional[str] = None


class BatchImportPreviewResponse(CamelModel):
    """Parsed departments, conflicts and validation errors for an upload."""
    departments: List[DepartmentPreview] = Field(default_factory=list)
    conflicts: List[VolunteerConflict] = Field(default_factory=list)
    validation_errors: List[SheetValidationError] = Field(default_factory=list)
    total_volunteers: int = 0
    total_departments: int = 0
    session_id: Optional[str] = None


class ConflictResolution(CamelModel):
    """Caller's decision for one conflicting volunteer name."""
    volunteer_name: str = Field(..., min_length=1)
    decision: ResolutionDecision
    volunteer_id: Optional[str] = None

    @model_validator(mode="after")
    def check_volunteer_id(self) -> "ConflictResolution":
        if self.decision == ResolutionDecision.REUSE_EXISTING and not self.volunteer_id:
            raise ValueError("volunteerId is required for REUSE_EXISTING")
        return self


class BatchImportExecuteRequest(CamelModel):
    """Resolutions to apply to a previewed import session."""
    session_id: str = Field(..., min_length=1)
    resolutions: List[ConflictResolution] = Field(default_factory=list)


class BatchImportExecuteResponse(CamelModel):
    """Outcome of an import execution."""
    success: bool
    departments_created: int = 0
    volunteers_created: int = 0
    volunteers_reused: int = 0
    error_message: Optional[str] = None
    created_department_ids: List[str] = Field(default_factory=list)
    created_volunteer_ids: List[str] = Field(default_factory=list)
