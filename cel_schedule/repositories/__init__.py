# Repositories package
from cel_schedule.repositories.base import (
    AuthUserRepository,
    Database,
    DepartmentRepository,
    LogFilters,
    LogRepository,
    VolunteerRepository,
)
from cel_schedule.repositories.memory import InMemoryDatabase
from cel_schedule.repositories.sql import SqlDatabase

__all__ = [
    "AuthUserRepository",
    "Database",
    "DepartmentRepository",
    "LogFilters",
    "LogRepository",
    "VolunteerRepository",
    "InMemoryDatabase",
    "SqlDatabase",
]
