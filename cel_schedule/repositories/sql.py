"""
PostgreSQL repositories.
Each call runs in its own session; nothing spans several calls.
"""
from datetime import datetime, timezone
from typing import Any, List, Optional, Tuple

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from cel_schedule.models import AuthUser, Department, SystemLog, Volunteer
from cel_schedule.repositories.base import LogFilters


class _SqlDocumentRepository:
    """Create/get/update/list for a model keyed by a string id."""

    model: Any = None

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]):
        self._session_maker = session_maker

    async def create(self, item) -> None:
        async with self._session_maker() as db:
            db.add(item)
            await db.commit()

    async def get(self, item_id: str):
        async with self._session_maker() as db:
            return await db.get(self.model, item_id)

    async def update(self, item) -> None:
        async with self._session_maker() as db:
            await db.merge(item)
            await db.commit()

    async def list(self):
        async with self._session_maker() as db:
            result = await db.execute(
                select(self.model).order_by(self.model.created_at)
            )
            return list(result.scalars().all())


class SqlVolunteerRepository(_SqlDocumentRepository):
    model = Volunteer


class SqlDepartmentRepository(_SqlDocumentRepository):
    model = Department


class SqlAuthUserRepository(_SqlDocumentRepository):
    model = AuthUser

    async def get_by_username(self, username: str) -> Optional[AuthUser]:
        async with self._session_maker() as db:
            result = await db.execute(
                select(AuthUser).where(AuthUser.username == username)
            )
            return result.scalar_one_or_none()


class SqlLogRepository:
    def __init__(self, session_maker: async_sessionmaker[AsyncSession]):
        self._session_maker = session_maker

    @staticmethod
    def _conditions(filters: LogFilters) -> list:
        conditions = []
        if not filters.include_archived:
            conditions.append(SystemLog.is_archived.is_(False))
        if filters.log_type:
            conditions.append(SystemLog.type == filters.log_type)
        if filters.category:
            conditions.append(SystemLog.category == filters.category)
        if filters.severity:
            conditions.append(SystemLog.severity == filters.severity)
        if filters.start_date:
            conditions.append(SystemLog.time_detected >= filters.start_date)
        if filters.end_date:
            conditions.append(SystemLog.time_detected <= filters.end_date)
        for key, value in filters.metadata_filters().items():
            conditions.append(SystemLog.log_metadata[key].astext == value)
        return conditions

    async def create(self, log: SystemLog) -> None:
        async with self._session_maker() as db:
            db.add(log)
            await db.commit()

    async def query(
        self, filters: LogFilters, limit: int, offset: int
    ) -> Tuple[List[SystemLog], int]:
        conditions = self._conditions(filters)
        async with self._session_maker() as db:
            total = await db.scalar(
                select(func.count()).select_from(SystemLog).where(*conditions)
            )
            result = await db.execute(
                select(SystemLog)
                .where(*conditions)
                .order_by(SystemLog.time_detected.desc())
                .offset(offset)
                .limit(limit)
            )
            return list(result.scalars().all()), total or 0

    async def list_archived(self, limit: int, offset: int) -> Tuple[List[SystemLog], int]:
        async with self._session_maker() as db:
            total = await db.scalar(
                select(func.count())
                .select_from(SystemLog)
                .where(SystemLog.is_archived.is_(True))
            )
            result = await db.execute(
                select(SystemLog)
                .where(SystemLog.is_archived.is_(True))
                .order_by(SystemLog.archive_date.desc())
                .offset(offset)
                .limit(limit)
            )
            return list(result.scalars().all()), total or 0

    async def archive_before(self, before: datetime) -> int:
        now = datetime.now(timezone.utc)
        async with self._session_maker() as db:
            result = await db.execute(
                update(SystemLog)
                .where(
                    SystemLog.time_detected < before,
                    SystemLog.is_archived.is_(False)
                )
                .values(is_archived=True, archive_date=now, last_updated=now)
            )
            await db.commit()
            return result.rowcount

    async def list_all(self) -> List[SystemLog]:
        async with self._session_maker() as db:
            result = await db.execute(
                select(SystemLog).order_by(SystemLog.time_detected.desc())
            )
            return list(result.scalars().all())


class SqlDatabase:
    """Document store backed by PostgreSQL JSONB rows."""

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]):
        self.volunteers = SqlVolunteerRepository(session_maker)
        self.departments = SqlDepartmentRepository(session_maker)
        self.auth_users = SqlAuthUserRepository(session_maker)
        self.logs = SqlLogRepository(session_maker)
