"""
Tests for department management routes
"""

from cel_schedule.models import AccessLevel
from conftest import add_department, add_user, add_volunteer, auth_headers


class TestDepartmentRoutes:
    def test_list_has_member_counts(self, client, db):
        anna, ben = add_volunteer(db, "Anna"), add_volunteer(db, "Ben")
        add_department(db, "Ushers", anna, [ben])

        response = client.get("/api/departments")

        assert response.status_code == 200
        assert response.json() == [{
            "id": response.json()[0]["id"],
            "departmentName": "Ushers",
            "memberCount": 2,
            "isDisabled": False,
        }]

    def test_get_detail(self, client, db):
        anna = add_volunteer(db, "Anna")
        department = add_department(db, "Ushers", anna)

        response = client.get(f"/api/departments/{department.id}")

        assert response.status_code == 200
        members = response.json()["volunteerMembers"]
        assert members[0]["volunteerId"] == anna.id
        assert members[0]["membershipType"] == "HEAD"

    def test_create_puts_head_first(self, client, admin_headers, db):
        anna, ben = add_volunteer(db, "Anna"), add_volunteer(db, "Ben")

        response = client.post(
            "/api/departments",
            json={
                "departmentName": "Ushers",
                "initialHeadId": anna.id,
                "volunteerMembers": [ben.id, anna.id],
            },
            headers=admin_headers,
        )

        assert response.status_code == 201
        members = response.json()["volunteerMembers"]
        assert [(m["volunteerId"], m["membershipType"]) for m in members] == [
            (anna.id, "HEAD"),
            (ben.id, "MEMBER"),
        ]

    def test_create_with_unknown_volunteer_is_400(self, client, admin_headers):
        response = client.post(
            "/api/departments",
            json={"departmentName": "Ushers", "initialHeadId": "missing"},
            headers=admin_headers,
        )

        assert response.status_code == 400

    def test_update_and_soft_delete(self, client, admin_headers, db):
        department = add_department(db, "Ushers", add_volunteer(db, "Anna"))

        renamed = client.put(
            f"/api/departments/{department.id}",
            json={"departmentName": "Greeters"},
            headers=admin_headers,
        )
        deleted = client.delete(f"/api/departments/{department.id}", headers=admin_headers)

        assert renamed.json()["departmentName"] == "Greeters"
        assert deleted.status_code == 200
        assert db.departments.items[department.id].is_disabled is True


class TestMemberRoutes:
    def test_head_can_add_member(self, client, db):
        head_volunteer = add_volunteer(db, "Anna")
        head = add_user(db, "anna", AccessLevel.DEPTHEAD, volunteer=head_volunteer)
        department = add_department(db, "Ushers", head_volunteer)
        ben = add_volunteer(db, "Ben")

        response = client.post(
            f"/api/departments/{department.id}/members",
            json={"volunteerId": ben.id},
            headers=auth_headers(head),
        )

        assert response.status_code == 200
        assert response.json()["volunteerMembers"][-1]["volunteerId"] == ben.id
        assert response.json()["volunteerMembers"][-1]["membershipType"] == "MEMBER"

    def test_other_department_head_is_forbidden(self, client, db, dept_head_headers):
        department = add_department(db, "Ushers", add_volunteer(db, "Anna"))
        ben = add_volunteer(db, "Ben")

        response = client.post(
            f"/api/departments/{department.id}/members",
            json={"volunteerId": ben.id},
            headers=dept_head_headers,
        )

        assert response.status_code == 403

    def test_duplicate_member_is_409(self, client, admin_headers, db):
        anna = add_volunteer(db, "Anna")
        department = add_department(db, "Ushers", anna)

        response = client.post(
            f"/api/departments/{department.id}/members",
            json={"volunteerId": anna.id},
            headers=admin_headers,
        )

        assert response.status_code == 409

    def test_update_member_type(self, client, admin_headers, db):
        anna, ben = add_volunteer(db, "Anna"), add_volunteer(db, "Ben")
        department = add_department(db, "Ushers", anna, [ben])

        response = client.put(
            f"/api/departments/{department.id}/members/{ben.id}",
            json={"membershipType": "HEAD"},
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert db.departments.items[department.id].is_head(ben.id)

    def test_remove_member(self, client, admin_headers, db):
        anna, ben = add_volunteer(db, "Anna"), add_volunteer(db, "Ben")
        department = add_department(db, "Ushers", anna, [ben])

        response = client.delete(
            f"/api/departments/{department.id}/members/{ben.id}", headers=admin_headers
        )
        missing = client.delete(
            f"/api/departments/{department.id}/members/{ben.id}", headers=admin_headers
        )

        assert response.status_code == 200
        assert db.departments.items[department.id].find_member(ben.id) is None
        assert missing.status_code == 404
