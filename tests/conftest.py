# conftest.py

import asyncio
import os
from datetime import timedelta
from io import BytesIO

import pytest
from fastapi.testclient import TestClient
from openpyxl import Workbook

# Use in-memory backends BEFORE importing the app so no database is touched
os.environ["USE_IN_MEMORY_BACKENDS"] = "true"
os.environ["SECRET_KEY"] = "test-secret-key-for-testing-only"

from cel_schedule.dependencies import get_database
from cel_schedule.main import app
from cel_schedule.models import AccessLevel, AuthUser, Department, MembershipType, Volunteer
from cel_schedule.repositories import InMemoryDatabase
from cel_schedule.services.auth_service import create_user_token, get_password_hash
from cel_schedule.services.import_session_store import (
    InMemoryImportSessionStore,
    get_session_store,
)

TEST_PASSWORD = "testpass123"


@pytest.fixture
def db():
    """Fresh in-memory database for each test"""
    return InMemoryDatabase()


@pytest.fixture
def session_store():
    return InMemoryImportSessionStore(ttl=timedelta(minutes=30))


@pytest.fixture
def client(db, session_store):
    """Test client wired to the in-memory database and session store"""
    app.dependency_overrides[get_database] = lambda: db
    app.dependency_overrides[get_session_store] = lambda: session_store
    yield TestClient(app)
    app.dependency_overrides.clear()


def add_volunteer(db, name):
    volunteer = Volunteer.new(name)
    asyncio.run(db.volunteers.create(volunteer))
    return volunteer


def add_department(db, name, head, members=()):
    entries = [Department.membership(head.id, MembershipType.HEAD)]
    entries.extend(Department.membership(m.id, MembershipType.MEMBER) for m in members)
    department = Department.new(name, entries)
    asyncio.run(db.departments.create(department))
    return department


def add_user(db, username, access_level, volunteer=None, password=TEST_PASSWORD):
    volunteer = volunteer or add_volunteer(db, f"{username} volunteer")
    user = AuthUser.new(
        volunteer_id=volunteer.id,
        username=username,
        hashed_password=get_password_hash(password),
        access_level=access_level,
    )
    asyncio.run(db.auth_users.create(user))
    return user


def auth_headers(user):
    token, _ = create_user_token(user)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_user(db):
    return add_user(db, "admin", AccessLevel.ADMIN)


@pytest.fixture
def admin_headers(admin_user):
    return auth_headers(admin_user)


@pytest.fixture
def dept_head_user(db):
    return add_user(db, "depthead", AccessLevel.DEPTHEAD)


@pytest.fixture
def dept_head_headers(dept_head_user):
    return auth_headers(dept_head_user)


def build_workbook(columns):
    """
    Build .xlsx bytes where each list is one column, top to bottom.
    None leaves a cell blank.
    """
    workbook = Workbook()
    sheet = workbook.active
    for col_idx, column in enumerate(columns, start=1):
        for row_idx, value in enumerate(column, start=1):
            if value is not None:
                sheet.cell(row=row_idx, column=col_idx, value=value)
    buffer = BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


XLSX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def upload(columns, filename="volunteers.xlsx"):
    """Multipart files payload for the preview endpoint"""
    return {"file": (filename, build_workbook(columns), XLSX_CONTENT_TYPE)}
