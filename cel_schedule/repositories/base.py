"""
Repository Interfaces
One repository per document collection, grouped by a Database aggregate.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Protocol, Tuple

from cel_schedule.models import AuthUser, Department, SystemLog, Volunteer


class VolunteerRepository(Protocol):
    async def create(self, volunteer: Volunteer) -> None:
        ...

    async def get(self, volunteer_id: str) -> Optional[Volunteer]:
        ...

    async def update(self, volunteer: Volunteer) -> None:
        ...

    async def list(self) -> List[Volunteer]:
        ...


class DepartmentRepository(Protocol):
    async def create(self, department: Department) -> None:
        ...

    async def get(self, department_id: str) -> Optional[Department]:
        ...

    async def update(self, department: Department) -> None:
        ...

    async def list(self) -> List[Department]:
        ...


class AuthUserRepository(Protocol):
    async def create(self, user: AuthUser) -> None:
        ...

    async def get(self, user_id: str) -> Optional[AuthUser]:
        ...

    async def get_by_username(self, username: str) -> Optional[AuthUser]:
        ...

    async def update(self, user: AuthUser) -> None:
        ...

    async def list(self) -> List[AuthUser]:
        ...


@dataclass
class LogFilters:
    """Filters for audit log queries. Empty fields match everything."""
    log_type: Optional[str] = None
    category: Optional[str] = None
    severity: Optional[str] = None
    user_id: Optional[str] = None
    volunteer_id: Optional[str] = None
    department_id: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    include_archived: bool = False

    def metadata_filters(self) -> dict[str, str]:
        """Metadata keys that must equal the given values."""
        values = {
            "userId": self.user_id,
            "volunteerId": self.volunteer_id,
            "departmentId": self.department_id,
        }
        return {key: value for key, value in values.items() if value}

    def matches(self, log: SystemLog) -> bool:
        if not self.include_archived and log.is_archived:
            return False
        if self.log_type and log.type != self.log_type:
            return False
        if self.category and log.category != self.category:
            return False
        if self.severity and log.severity != self.severity:
            return False
        if self.start_date and log.time_detected < self.start_date:
            return False
        if self.end_date and log.time_detected > self.end_date:
            return False
        for key, value in self.metadata_filters().items():
            if log.log_metadata.get(key) != value:
                return False
        return True


class LogRepository(Protocol):
    async def create(self, log: SystemLog) -> None:
        ...

    async def query(
        self, filters: LogFilters, limit: int, offset: int
    ) -> Tuple[List[SystemLog], int]:
        """Return a newest-first page of matching logs and the match count."""
        ...

    async def list_archived(self, limit: int, offset: int) -> Tuple[List[SystemLog], int]:
        ...

    async def archive_before(self, before: datetime) -> int:
        """Archive unarchived logs detected before the given time."""
        ...

    async def list_all(self) -> List[SystemLog]:
        ...


class Database(Protocol):
    """Access to every repository of the document store."""
    volunteers: VolunteerRepository
    departments: DepartmentRepository
    auth_users: AuthUserRepository
    logs: LogRepository
