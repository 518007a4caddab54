"""
Tests for login, token handling and auth user management
"""

from datetime import timedelta

from cel_schedule.models import AccessLevel, LogType
from cel_schedule.services.auth_service import create_access_token, decode_token
from conftest import TEST_PASSWORD, add_user, add_volunteer, auth_headers


class TestLogin:
    def test_login_returns_token(self, client, admin_user, db):
        response = client.post(
            "/api/auth/login", json={"username": "admin", "password": TEST_PASSWORD}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["userId"] == admin_user.id
        assert body["accessLevel"] == 1
        assert decode_token(body["token"])["sub"] == admin_user.id
        assert LogType.USER_LOGIN.value in [log.type for log in db.logs.items.values()]

    def test_wrong_password_is_401(self, client, admin_user, db):
        response = client.post(
            "/api/auth/login", json={"username": "admin", "password": "wrong-password"}
        )

        assert response.status_code == 401
        failed = [log for log in db.logs.items.values()
                  if log.type == LogType.USER_LOGIN_FAILED.value]
        assert failed[0].log_metadata["attemptedUsername"] == "admin"
        assert failed[0].severity == "WARNING"

    def test_unknown_user_is_401(self, client):
        response = client.post(
            "/api/auth/login", json={"username": "nobody", "password": TEST_PASSWORD}
        )

        assert response.status_code == 401

    def test_disabled_user_is_403(self, client, admin_user):
        admin_user.is_disabled = True

        response = client.post(
            "/api/auth/login", json={"username": "admin", "password": TEST_PASSWORD}
        )

        assert response.status_code == 403


class TestCurrentUser:
    def test_me(self, client, admin_user, admin_headers):
        response = client.get("/api/auth/me", headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["username"] == "admin"
        assert "hashedPassword" not in response.json()

    def test_missing_and_malformed_headers(self, client):
        assert client.get("/api/auth/me").status_code == 401
        assert client.get("/api/auth/me", headers={"Authorization": "Token x"}).status_code == 401
        assert client.get("/api/auth/me", headers={"Authorization": "Bearer x"}).status_code == 401

    def test_expired_token(self, client, admin_user):
        token, _ = create_access_token({"sub": admin_user.id}, expires_delta=timedelta(seconds=-1))

        response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401

    def test_disabled_user_token_rejected(self, client, admin_user, admin_headers):
        admin_user.is_disabled = True

        assert client.get("/api/auth/me", headers=admin_headers).status_code == 401


class TestAuthUsers:
    def test_create_user(self, client, admin_headers, db):
        volunteer = add_volunteer(db, "Ben")

        response = client.post(
            "/api/auth-users",
            json={
                "volunteerId": volunteer.id,
                "username": "ben",
                "password": "longenough",
                "accessLevel": 2,
            },
            headers=admin_headers,
        )

        assert response.status_code == 201
        assert response.json()["accessLevel"] == 2
        assert "password" not in response.json()
        assert "hashedPassword" not in response.json()

        login = client.post("/api/auth/login", json={"username": "ben", "password": "longenough"})
        assert login.status_code == 200

    def test_duplicate_username_is_409(self, client, admin_headers, admin_user):
        response = client.post(
            "/api/auth-users",
            json={
                "volunteerId": admin_user.volunteer_id,
                "username": "admin",
                "password": "longenough",
                "accessLevel": 1,
            },
            headers=admin_headers,
        )

        assert response.status_code == 409

    def test_invalid_access_level_is_422(self, client, admin_headers, admin_user):
        response = client.post(
            "/api/auth-users",
            json={
                "volunteerId": admin_user.volunteer_id,
                "username": "someone",
                "password": "longenough",
                "accessLevel": 3,
            },
            headers=admin_headers,
        )

        assert response.status_code == 422

    def test_update_access_level_is_logged(self, client, admin_headers, db):
        user = add_user(db, "ben", AccessLevel.DEPTHEAD)

        response = client.put(
            f"/api/auth-users/{user.id}", json={"accessLevel": 1}, headers=admin_headers
        )

        assert response.status_code == 200
        assert response.json()["accessLevel"] == 1
        types = [log.type for log in db.logs.items.values()]
        assert LogType.ACCESS_LEVEL_CHANGED.value in types
        assert LogType.USER_UPDATED.value in types

    def test_list_requires_admin(self, client, db, dept_head_user):
        assert client.get("/api/auth-users", headers=auth_headers(dept_head_user)).status_code == 403
