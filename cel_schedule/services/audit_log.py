"""
Audit Log Service
Records structured audit events. Store failures are logged and never
propagate to the request that triggered the event.
"""
import logging
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple, Union

from cel_schedule.models import AuthUser, LogType, Severity, SystemLog
from cel_schedule.repositories import Database

logger = logging.getLogger(__name__)


class MetaKey(str, Enum):
    """Well-known metadata fields of an audit log entry."""
    # Actor
    USER_ID = "userId"
    USERNAME = "username"

    # Target user (user management)
    TARGET_USER_ID = "targetUserId"
    TARGET_USERNAME = "targetUsername"
    ATTEMPTED_USERNAME = "attemptedUsername"
    ACCESS_LEVEL = "accessLevel"
    OLD_ACCESS_LEVEL = "oldAccessLevel"
    NEW_ACCESS_LEVEL = "newAccessLevel"
    OLD_IS_DISABLED = "oldIsDisabled"
    NEW_IS_DISABLED = "newIsDisabled"
    PASSWORD_CHANGED = "passwordChanged"

    # Generic
    REASON = "reason"
    CHANGES = "changes"

    # Volunteers
    VOLUNTEER_ID = "volunteerId"
    VOLUNTEER_NAME = "volunteerName"
    OLD_VOLUNTEER_NAME = "oldVolunteerName"
    NEW_VOLUNTEER_NAME = "newVolunteerName"

    # Departments
    DEPARTMENT_ID = "departmentId"
    DEPARTMENT_NAME = "departmentName"
    OLD_DEPARTMENT_NAME = "oldDepartmentName"
    NEW_DEPARTMENT_NAME = "newDepartmentName"
    MEMBERSHIP_TYPE = "membershipType"
    OLD_MEMBERSHIP_TYPE = "oldMembershipType"
    NEW_MEMBERSHIP_TYPE = "newMembershipType"

    # Batch import
    SESSION_ID = "sessionId"
    STAGE = "stage"
    FILE_NAME = "fileName"
    FILE_SIZE = "fileSize"
    ROW_COUNT = "rowCount"
    SUCCESS_COUNT = "successCount"
    ERROR_COUNT = "errorCount"
    TOTAL_VOLUNTEERS = "totalVolunteers"
    TOTAL_DEPARTMENTS = "totalDepartments"
    VOLUNTEERS_CREATED = "volunteersCreated"
    VOLUNTEERS_REUSED = "volunteersReused"
    DEPARTMENTS_CREATED = "departmentsCreated"
    ERROR_MESSAGE = "errorMessage"

    # System
    ERROR_TYPE = "errorType"
    RECORD_COUNT = "recordCount"
    BEFORE_DATE = "beforeDate"


MetadataValue = Union[str, int, float, bool, datetime, List[Any], Dict[str, Any], None]

_ALLOWED_TYPES = (str, int, float, bool, datetime, list, dict, type(None))


class LogMetadata:
    """
    Metadata for an audit log entry.

    Keys are MetaKey members and values are JSON-friendly scalars, datetimes,
    lists or dicts. Stored as a plain JSON document keyed by the enum values.
    """

    def __init__(self, values: Optional[Mapping[MetaKey, MetadataValue]] = None):
        self._values: Dict[MetaKey, MetadataValue] = {}
        for key, value in (values or {}).items():
            self[key] = value

    def __setitem__(self, key: MetaKey, value: MetadataValue) -> None:
        if not isinstance(key, MetaKey):
            raise TypeError(f"Metadata key must be a MetaKey, got {key!r}")
        if isinstance(value, Enum):
            value = value.value
        if not isinstance(value, _ALLOWED_TYPES):
            raise TypeError(
                f"Unsupported metadata value for {key.value}: {type(value).__name__}"
            )
        self._values[key] = value

    def __getitem__(self, key: MetaKey) -> MetadataValue:
        return self._values[key]

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)

    def items(self) -> Iterator[Tuple[MetaKey, MetadataValue]]:
        return iter(self._values.items())

    def to_document(self) -> Dict[str, Any]:
        """Serialize to a JSON-safe dict keyed by metadata field names."""
        document = {}
        for key, value in self._values.items():
            if isinstance(value, datetime):
                value = value.isoformat()
            document[key.value] = value
        return document


class AuditLogger:
    """Writes audit events to the log collection."""

    def __init__(self, db: Database):
        self._db = db

    async def record(
        self,
        log_type: LogType,
        metadata: Optional[LogMetadata] = None,
        severity: Severity = Severity.INFO,
        actor: Optional[AuthUser] = None,
    ) -> bool:
        """
        Record an audit event.

        The acting user's id and username are added when known.

        Returns:
            True if the entry was stored, False if the store failed
        """
        metadata = metadata or LogMetadata()
        if actor is not None:
            metadata[MetaKey.USER_ID] = actor.id
            metadata[MetaKey.USERNAME] = actor.username

        now = datetime.now(timezone.utc)
        entry = SystemLog(
            id=str(uuid.uuid4()),
            time_detected=now,
            type=log_type.value,
            category=log_type.category.value,
            severity=severity.value,
            log_metadata=metadata.to_document(),
            last_updated=now,
            is_archived=False,
            archive_date=None,
        )

        try:
            await self._db.logs.create(entry)
        except Exception as e:
            logger.warning("Failed to create audit log (type: %s): %s", log_type.value, e)
            return False
        return True
