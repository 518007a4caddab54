# Dependencies package
from cel_schedule.dependencies.auth import get_current_user, require_admin, require_department_head
from cel_schedule.dependencies.database import get_audit_logger, get_database

__all__ = [
    "get_current_user",
    "require_admin",
    "require_department_head",
    "get_audit_logger",
    "get_database",
]
