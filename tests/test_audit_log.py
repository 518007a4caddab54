"""
Tests for audit log recording and the log routes
"""

import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from cel_schedule.models import LogType, Severity
from cel_schedule.repositories import InMemoryDatabase
from cel_schedule.services.audit_log import AuditLogger, LogMetadata, MetaKey


def record(db, log_type, metadata=None, **kwargs):
    return asyncio.run(AuditLogger(db).record(log_type, metadata, **kwargs))


class TestLogMetadata:
    def test_rejects_string_keys(self):
        metadata = LogMetadata()

        with pytest.raises(TypeError):
            metadata["volunteerId"] = "abc"

    def test_rejects_unsupported_values(self):
        with pytest.raises(TypeError):
            LogMetadata({MetaKey.VOLUNTEER_ID: object()})

    def test_document_uses_field_names(self):
        when = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
        metadata = LogMetadata({
            MetaKey.SESSION_ID: "s-1",
            MetaKey.STAGE: Severity.ERROR,
            MetaKey.BEFORE_DATE: when,
            MetaKey.CHANGES: ["password"],
        })

        assert metadata.to_document() == {
            "sessionId": "s-1",
            "stage": "ERROR",
            "beforeDate": when.isoformat(),
            "changes": ["password"],
        }


class TestAuditLogger:
    def test_record_sets_category_and_actor(self, admin_user):
        db = InMemoryDatabase()

        stored = record(
            db,
            LogType.BATCH_IMPORT_STARTED,
            LogMetadata({MetaKey.FILE_NAME: "a.xlsx"}),
            actor=admin_user,
        )

        assert stored is True
        log = next(iter(db.logs.items.values()))
        assert log.category == "batch_operations"
        assert log.severity == "INFO"
        assert log.log_metadata == {
            "fileName": "a.xlsx",
            "userId": admin_user.id,
            "username": "admin",
        }

    def test_store_failure_is_logged_not_raised(self, caplog):
        db = InMemoryDatabase()

        class BrokenLogs:
            async def create(self, log):
                raise RuntimeError("disk full")

        db.logs = BrokenLogs()

        assert record(db, LogType.VOLUNTEER_CREATED) is False
        assert "Failed to create audit log" in caplog.text


class TestLogRoutes:
    def seed(self, db):
        record(db, LogType.VOLUNTEER_CREATED, LogMetadata({MetaKey.VOLUNTEER_ID: "v-1"}))
        record(db, LogType.DEPARTMENT_CREATED, LogMetadata({MetaKey.DEPARTMENT_ID: "d-1"}))
        record(db, LogType.BATCH_IMPORT_FAILED, severity=Severity.ERROR)
        # Spread detection times an hour ago, in insertion order
        base = datetime.now(timezone.utc) - timedelta(hours=1)
        for offset, log in enumerate(db.logs.items.values()):
            log.time_detected = base + timedelta(seconds=offset)

    def test_requires_admin(self, client, dept_head_headers):
        assert client.get("/api/logs", headers=dept_head_headers).status_code == 403

    def test_list_newest_first_with_total(self, client, admin_headers, db):
        self.seed(db)

        body = client.get("/api/logs", headers=admin_headers).json()

        assert body["total"] == 3
        assert body["logs"][0]["type"] == "BATCH_IMPORT_FAILED"

    def test_filters(self, client, admin_headers, db):
        self.seed(db)

        by_volunteer = client.get(
            "/api/logs", params={"volunteerId": "v-1"}, headers=admin_headers
        ).json()
        by_category = client.get(
            "/api/logs", params={"category": "department_management"}, headers=admin_headers
        ).json()
        by_severity = client.get(
            "/api/logs", params={"severity": "ERROR"}, headers=admin_headers
        ).json()
        paged = client.get(
            "/api/logs", params={"limit": 1, "offset": 1}, headers=admin_headers
        ).json()

        assert [log["type"] for log in by_volunteer["logs"]] == ["VOLUNTEER_CREATED"]
        assert by_volunteer["logs"][0]["metadata"] == {"volunteerId": "v-1"}
        assert [log["type"] for log in by_category["logs"]] == ["DEPARTMENT_CREATED"]
        assert by_severity["total"] == 1
        assert len(paged["logs"]) == 1
        assert paged["total"] == 3

    def test_archive_hides_old_logs(self, client, admin_headers, db):
        self.seed(db)
        before = (datetime.now(timezone.utc) + timedelta(seconds=1)).isoformat()

        archived = client.post(
            "/api/logs/archive", json={"beforeDate": before}, headers=admin_headers
        ).json()
        active = client.get("/api/logs", headers=admin_headers).json()
        archived_list = client.get("/api/logs/archived", headers=admin_headers).json()

        assert archived["archivedCount"] == 3
        # Only the archive event itself is left
        assert [log["type"] for log in active["logs"]] == ["LOGS_ARCHIVED"]
        assert archived_list["total"] == 3

    def test_categories(self, client, admin_headers):
        body = client.get("/api/logs/categories", headers=admin_headers).json()

        assert "batch_operations" in body["categories"]
        assert "authentication" in body["categories"]

    def test_stats(self, client, admin_headers, db):
        self.seed(db)

        body = client.get("/api/logs/stats", headers=admin_headers).json()

        assert body["totalLogs"] == 3
        assert body["byCategory"]["batch_operations"] == 1
        assert body["bySeverity"] == {"INFO": 2, "ERROR": 1}
        assert body["recentLogs"] == 3
        assert body["archived"] == 0
