"""
Database Dependencies
Process-wide repository and audit logger instances.
"""
from fastapi import Depends

from cel_schedule.config import settings
from cel_schedule.database import async_session_maker
from cel_schedule.repositories import Database, InMemoryDatabase, SqlDatabase
from cel_schedule.services.audit_log import AuditLogger


_database: Database | None = None


def get_database() -> Database:
    """
    Return a singleton database so in-memory state persists across requests.
    """
    global _database
    if _database is not None:
        return _database

    if settings.use_in_memory_backends:
        _database = InMemoryDatabase()
    else:
        _database = SqlDatabase(async_session_maker)
    return _database


def get_audit_logger(db: Database = Depends(get_database)) -> AuditLogger:
    return AuditLogger(db)
