"""
Import Session Store
Holds parsed spreadsheets between the preview and execute steps.
"""
import asyncio
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional, Protocol

from cel_schedule.config import settings
from cel_schedule.schemas.batch_import import DepartmentPreview

logger = logging.getLogger(__name__)


class SessionNotFoundError(Exception):
    """The import session is unknown or has expired."""

    def __init__(self, session_id: str):
        super().__init__(f"Import session '{session_id}' not found or expired")
        self.session_id = session_id


@dataclass
class ImportSession:
    """A previewed import waiting for resolutions."""
    session_id: str
    departments: List[DepartmentPreview]
    created_at: datetime
    expires_at: datetime
    file_name: str = ""

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return (now or datetime.now(timezone.utc)) >= self.expires_at


class ImportSessionStore(Protocol):
    def new_session(
        self, departments: List[DepartmentPreview], file_name: str = ""
    ) -> ImportSession:
        ...

    async def get(self, session_id: str) -> Optional[ImportSession]:
        ...

    async def require(self, session_id: str) -> ImportSession:
        ...

    async def take(self, session_id: str) -> ImportSession:
        ...

    async def put(self, session: ImportSession) -> None:
        ...

    async def delete(self, session_id: str) -> bool:
        ...

    async def sweep(self) -> int:
        ...


class InMemoryImportSessionStore:
    """
    Session map for a single-process deployment.

    Lookups do not wait on the lock: a dict read never yields to the event
    loop. Inserts, takes, deletes and sweeps hold the lock and never await
    I/O while holding it.
    """

    def __init__(self, ttl: timedelta = timedelta(minutes=30)):
        self.ttl = ttl
        self.sessions: Dict[str, ImportSession] = {}
        self._lock = asyncio.Lock()

    def new_session(
        self, departments: List[DepartmentPreview], file_name: str = ""
    ) -> ImportSession:
        """Build a session that expires one TTL from now."""
        now = datetime.now(timezone.utc)
        return ImportSession(
            session_id=str(uuid.uuid4()),
            departments=departments,
            created_at=now,
            expires_at=now + self.ttl,
            file_name=file_name,
        )

    async def get(self, session_id: str) -> Optional[ImportSession]:
        """Return a live session, or None if unknown or expired."""
        session = self.sessions.get(session_id)
        if session is None or session.is_expired():
            return None
        return session

    async def require(self, session_id: str) -> ImportSession:
        """Return a live session or raise SessionNotFoundError."""
        session = await self.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    async def take(self, session_id: str) -> ImportSession:
        """
        Remove and return a live session so only one caller can execute it.

        Put the session back to allow a retry.

        Raises:
            SessionNotFoundError: If the session is unknown, expired or already taken
        """
        async with self._lock:
            session = self.sessions.pop(session_id, None)
        if session is None or session.is_expired():
            raise SessionNotFoundError(session_id)
        return session

    async def put(self, session: ImportSession) -> None:
        async with self._lock:
            self.sessions[session.session_id] = session

    async def delete(self, session_id: str) -> bool:
        async with self._lock:
            return self.sessions.pop(session_id, None) is not None

    async def sweep(self) -> int:
        """Remove expired sessions. Returns the number removed."""
        now = datetime.now(timezone.utc)
        async with self._lock:
            expired = [sid for sid, s in self.sessions.items() if s.is_expired(now)]
            for sid in expired:
                del self.sessions[sid]
        if expired:
            logger.info("Removed %d expired import sessions", len(expired))
        return len(expired)

    async def run_sweeper(self, interval: timedelta) -> None:
        """Sweep expired sessions forever at a fixed interval."""
        seconds = interval.total_seconds()
        while True:
            await asyncio.sleep(seconds)
            try:
                await self.sweep()
            except Exception as e:
                logger.error("Import session sweep failed: %s", e)


# Singleton instance
import_session_store = InMemoryImportSessionStore(
    ttl=timedelta(minutes=settings.import_session_ttl_minutes)
)


def get_session_store() -> ImportSessionStore:
    """Dependency returning the process-wide session store."""
    return import_session_store
