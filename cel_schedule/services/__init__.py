# Services package
from cel_schedule.services.audit_log import AuditLogger, LogMetadata, MetaKey
from cel_schedule.services.conflict_detector import detect_conflicts
from cel_schedule.services.excel_parser import ExcelParserService, SpreadsheetReadError
from cel_schedule.services.import_executor import ImportExecutionError, ImportExecutor
from cel_schedule.services.import_session_store import (
    InMemoryImportSessionStore,
    SessionNotFoundError,
)

__all__ = [
    "AuditLogger",
    "LogMetadata",
    "MetaKey",
    "detect_conflicts",
    "ExcelParserService",
    "SpreadsheetReadError",
    "ImportExecutionError",
    "ImportExecutor",
    "InMemoryImportSessionStore",
    "SessionNotFoundError",
]
