# Schemas package
from cel_schedule.schemas.volunteer import (
    VolunteerCreate,
    VolunteerUpdate,
    VolunteerResponse,
    VolunteerListItem
)
from cel_schedule.schemas.department import (
    MembershipInfo,
    DepartmentCreate,
    DepartmentUpdate,
    DepartmentResponse,
    DepartmentListItem,
    MemberAdd,
    MemberTypeUpdate
)
from cel_schedule.schemas.auth import (
    LoginRequest,
    LoginResponse,
    AuthUserCreate,
    AuthUserUpdate,
    AuthUserResponse,
    AuthUserListItem
)
from cel_schedule.schemas.log import (
    LogResponse,
    LogListResponse,
    ArchiveLogsRequest,
    ArchiveLogsResponse,
    LogCategoriesResponse,
    LogStatsResponse
)
from cel_schedule.schemas.batch_import import (
    ConflictType,
    ValidationErrorType,
    ResolutionDecision,
    DepartmentPreview,
    ConflictOccurrence,
    ExistingVolunteerInfo,
    VolunteerConflict,
    SheetValidationError,
    BatchImportPreviewResponse,
    ConflictResolution,
    BatchImportExecuteRequest,
    BatchImportExecuteResponse
)

__all__ = [
    "VolunteerCreate",
    "VolunteerUpdate",
    "VolunteerResponse",
    "VolunteerListItem",
    "MembershipInfo",
    "DepartmentCreate",
    "DepartmentUpdate",
    "DepartmentResponse",
    "DepartmentListItem",
    "MemberAdd",
    "MemberTypeUpdate",
    "LoginRequest",
    "LoginResponse",
    "AuthUserCreate",
    "AuthUserUpdate",
    "AuthUserResponse",
    "AuthUserListItem",
    "LogResponse",
    "LogListResponse",
    "ArchiveLogsRequest",
    "ArchiveLogsResponse",
    "LogCategoriesResponse",
    "LogStatsResponse",
    "ConflictType",
    "ValidationErrorType",
    "ResolutionDecision",
    "DepartmentPreview",
    "ConflictOccurrence",
    "ExistingVolunteerInfo",
    "VolunteerConflict",
    "SheetValidationError",
    "BatchImportPreviewResponse",
    "ConflictResolution",
    "BatchImportExecuteRequest",
    "BatchImportExecuteResponse",
]
