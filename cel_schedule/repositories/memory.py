"""
In-memory repositories for development and tests.
"""
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

from cel_schedule.models import AuthUser, Department, SystemLog, Volunteer
from cel_schedule.repositories.base import LogFilters


class InMemoryVolunteerRepository:
    def __init__(self):
        self.items: Dict[str, Volunteer] = {}

    async def create(self, volunteer: Volunteer) -> None:
        self.items[volunteer.id] = volunteer

    async def get(self, volunteer_id: str) -> Optional[Volunteer]:
        return self.items.get(volunteer_id)

    async def update(self, volunteer: Volunteer) -> None:
        self.items[volunteer.id] = volunteer

    async def list(self) -> List[Volunteer]:
        return sorted(self.items.values(), key=lambda v: v.created_at)


class InMemoryDepartmentRepository:
    def __init__(self):
        self.items: Dict[str, Department] = {}

    async def create(self, department: Department) -> None:
        self.items[department.id] = department

    async def get(self, department_id: str) -> Optional[Department]:
        return self.items.get(department_id)

    async def update(self, department: Department) -> None:
        self.items[department.id] = department

    async def list(self) -> List[Department]:
        return sorted(self.items.values(), key=lambda d: d.created_at)


class InMemoryAuthUserRepository:
    def __init__(self):
        self.items: Dict[str, AuthUser] = {}

    async def create(self, user: AuthUser) -> None:
        self.items[user.id] = user

    async def get(self, user_id: str) -> Optional[AuthUser]:
        return self.items.get(user_id)

    async def get_by_username(self, username: str) -> Optional[AuthUser]:
        for user in self.items.values():
            if user.username == username:
                return user
        return None

    async def update(self, user: AuthUser) -> None:
        self.items[user.id] = user

    async def list(self) -> List[AuthUser]:
        return sorted(self.items.values(), key=lambda u: u.created_at)


class InMemoryLogRepository:
    def __init__(self):
        self.items: Dict[str, SystemLog] = {}

    def _newest_first(self) -> List[SystemLog]:
        return sorted(self.items.values(), key=lambda log: log.time_detected, reverse=True)

    async def create(self, log: SystemLog) -> None:
        self.items[log.id] = log

    async def query(
        self, filters: LogFilters, limit: int, offset: int
    ) -> Tuple[List[SystemLog], int]:
        matched = [log for log in self._newest_first() if filters.matches(log)]
        return matched[offset:offset + limit], len(matched)

    async def list_archived(self, limit: int, offset: int) -> Tuple[List[SystemLog], int]:
        archived = sorted(
            (log for log in self.items.values() if log.is_archived),
            key=lambda log: log.archive_date,
            reverse=True
        )
        return archived[offset:offset + limit], len(archived)

    async def archive_before(self, before: datetime) -> int:
        now = datetime.now(timezone.utc)
        count = 0
        for log in self.items.values():
            if not log.is_archived and log.time_detected < before:
                log.is_archived = True
                log.archive_date = now
                log.last_updated = now
                count += 1
        return count

    async def list_all(self) -> List[SystemLog]:
        return self._newest_first()


class InMemoryDatabase:
    """Simple in-memory document store."""

    def __init__(self):
        self.volunteers = InMemoryVolunteerRepository()
        self.departments = InMemoryDepartmentRepository()
        self.auth_users = InMemoryAuthUserRepository()
        self.logs = InMemoryLogRepository()

    def reset(self) -> None:
        self.volunteers.items.clear()
        self.departments.items.clear()
        self.auth_users.items.clear()
        self.logs.items.clear()
