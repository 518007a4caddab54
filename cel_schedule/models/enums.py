"""
Model Enums
Enumerations shared by models, schemas and services.
"""
from enum import Enum, IntEnum


class MembershipType(str, Enum):
    """Role of a volunteer inside a department."""
    HEAD = "HEAD"
    MEMBER = "MEMBER"


class AccessLevel(IntEnum):
    """Access level of an authenticated user."""
    ADMIN = 1
    DEPTHEAD = 2


class Severity(str, Enum):
    """Severity of an audit log entry."""
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class LogCategory(str, Enum):
    """Coarse grouping of audit log types."""
    AUTHENTICATION = "authentication"
    USER_MANAGEMENT = "user_management"
    VOLUNTEER_MANAGEMENT = "volunteer_management"
    DEPARTMENT_MANAGEMENT = "department_management"
    BATCH_OPERATIONS = "batch_operations"
    SYSTEM = "system"


class LogType(str, Enum):
    """Kinds of audit events recorded by the service."""
    # Authentication
    USER_LOGIN = "USER_LOGIN"
    USER_LOGIN_FAILED = "USER_LOGIN_FAILED"

    # User management
    USER_CREATED = "USER_CREATED"
    USER_UPDATED = "USER_UPDATED"
    USER_DISABLED = "USER_DISABLED"
    USER_ENABLED = "USER_ENABLED"
    ACCESS_LEVEL_CHANGED = "ACCESS_LEVEL_CHANGED"
    PASSWORD_CHANGED = "PASSWORD_CHANGED"

    # Volunteers
    VOLUNTEER_CREATED = "VOLUNTEER_CREATED"
    VOLUNTEER_UPDATED = "VOLUNTEER_UPDATED"
    VOLUNTEER_DELETED = "VOLUNTEER_DELETED"

    # Departments
    DEPARTMENT_CREATED = "DEPARTMENT_CREATED"
    DEPARTMENT_UPDATED = "DEPARTMENT_UPDATED"
    DEPARTMENT_DELETED = "DEPARTMENT_DELETED"
    DEPARTMENT_MEMBER_ADDED = "DEPARTMENT_MEMBER_ADDED"
    DEPARTMENT_MEMBER_UPDATED = "DEPARTMENT_MEMBER_UPDATED"
    DEPARTMENT_MEMBER_REMOVED = "DEPARTMENT_MEMBER_REMOVED"

    # Batch import
    BATCH_IMPORT_STARTED = "BATCH_IMPORT_STARTED"
    BATCH_IMPORT_COMPLETED = "BATCH_IMPORT_COMPLETED"
    BATCH_IMPORT_FAILED = "BATCH_IMPORT_FAILED"

    # System
    LOGS_ARCHIVED = "LOGS_ARCHIVED"

    @property
    def category(self) -> LogCategory:
        """Category this log type is filed under."""
        return LOG_TYPE_CATEGORIES.get(self, LogCategory.SYSTEM)


LOG_TYPE_CATEGORIES = {
    LogType.USER_LOGIN: LogCategory.AUTHENTICATION,
    LogType.USER_LOGIN_FAILED: LogCategory.AUTHENTICATION,
    LogType.USER_CREATED: LogCategory.USER_MANAGEMENT,
    LogType.USER_UPDATED: LogCategory.USER_MANAGEMENT,
    LogType.USER_DISABLED: LogCategory.USER_MANAGEMENT,
    LogType.USER_ENABLED: LogCategory.USER_MANAGEMENT,
    LogType.ACCESS_LEVEL_CHANGED: LogCategory.USER_MANAGEMENT,
    LogType.PASSWORD_CHANGED: LogCategory.USER_MANAGEMENT,
    LogType.VOLUNTEER_CREATED: LogCategory.VOLUNTEER_MANAGEMENT,
    LogType.VOLUNTEER_UPDATED: LogCategory.VOLUNTEER_MANAGEMENT,
    LogType.VOLUNTEER_DELETED: LogCategory.VOLUNTEER_MANAGEMENT,
    LogType.DEPARTMENT_CREATED: LogCategory.DEPARTMENT_MANAGEMENT,
    LogType.DEPARTMENT_UPDATED: LogCategory.DEPARTMENT_MANAGEMENT,
    LogType.DEPARTMENT_DELETED: LogCategory.DEPARTMENT_MANAGEMENT,
    LogType.DEPARTMENT_MEMBER_ADDED: LogCategory.DEPARTMENT_MANAGEMENT,
    LogType.DEPARTMENT_MEMBER_UPDATED: LogCategory.DEPARTMENT_MANAGEMENT,
    LogType.DEPARTMENT_MEMBER_REMOVED: LogCategory.DEPARTMENT_MANAGEMENT,
    LogType.BATCH_IMPORT_STARTED: LogCategory.BATCH_OPERATIONS,
    LogType.BATCH_IMPORT_COMPLETED: LogCategory.BATCH_OPERATIONS,
    LogType.BATCH_IMPORT_FAILED: LogCategory.BATCH_OPERATIONS,
    LogType.LOGS_ARCHIVED: LogCategory.SYSTEM,
}
