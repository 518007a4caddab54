# Models package
from cel_schedule.models.volunteer import Volunteer
from cel_schedule.models.department import Department
from cel_schedule.models.auth_user import AuthUser
from cel_schedule.models.system_log import SystemLog
from cel_schedule.models.enums import (
    AccessLevel,
    LogCategory,
    LogType,
    MembershipType,
    Severity,
)

__all__ = [
    "Volunteer",
    "Department",
    "AuthUser",
    "SystemLog",
    "AccessLevel",
    "LogCategory",
    "LogType",
    "MembershipType",
    "Severity",
]
