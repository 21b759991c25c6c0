from types import SimpleNamespace
from unittest.mock import MagicMock
from uuid import uuid4

from sqlalchemy.exc import OperationalError

from timeclock.fastapi.dependencies.database import get_sync_db
from timeclock.fastapi.main import app
from tests.conftest import SIGNATURE, auth_headers

SIGNATURES = {"employeeSignature": SIGNATURE, "supervisorSignature": SIGNATURE}


def clock_in(client, user):
    response = client.post("/api/time-entries/clock-in", headers=auth_headers(user))
    assert response.status_code == 201
    return response.json()


def test_requests_without_token_are_rejected(client):
    response = client.post("/api/time-entries/clock-in")

    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"


def test_invalid_token_is_rejected(client):
    response = client.get("/api/time-entries/active", headers={"Authorization": "Bearer nope"})

    assert response.status_code == 401


def test_token_for_unknown_user_is_rejected(client):
    ghost = SimpleNamespace(id=uuid4(), is_admin=False)

    response = client.get("/api/time-entries/active", headers=auth_headers(ghost))

    assert response.status_code == 401


def test_deactivated_user_is_forbidden(client, make_user):
    former = make_user(is_active=False)

    response = client.get("/api/time-entries/active", headers=auth_headers(former))

    assert response.status_code == 403


def test_clock_in_returns_camel_case_entry(client, employee):
    body = clock_in(client, employee)

    assert body["status"] == "active"
    assert body["userId"] == str(employee.id)
    assert body["clockInTime"]
    assert body["clockOutTime"] is None
    assert body["totalHours"] is None


def test_double_clock_in_conflicts(client, employee):
    clock_in(client, employee)

    response = client.post("/api/time-entries/clock-in", headers=auth_headers(employee))

    assert response.status_code == 409
    assert response.json()["code"] == "CONFLICT"


def test_active_entry_round_trip(client, employee):
    headers = auth_headers(employee)
    assert client.get("/api/time-entries/active", headers=headers).json() is None

    entry = clock_in(client, employee)
    assert client.get("/api/time-entries/active", headers=headers).json()["id"] == entry["id"]

    response = client.put(f"/api/time-entries/{entry['id']}/clock-out", json=SIGNATURES, headers=headers)

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "completed"
    assert body["totalHours"] == 0
    assert body["clockOutTime"] is not None
    assert body["employeeSignature"] == SIGNATURE
    assert client.get("/api/time-entries/active", headers=headers).json() is None


def test_clock_out_with_bad_signature(client, employee):
    entry = clock_in(client, employee)

    response = client.put(
        f"/api/time-entries/{entry['id']}/clock-out",
        json={"employeeSignature": SIGNATURE, "supervisorSignature": "not-a-data-uri"},
        headers=auth_headers(employee),
    )

    assert response.status_code == 422
    assert response.json()["code"] == "VALIDATION_ERROR"
    assert response.json()["field"] == "supervisorSignature"


def test_clock_out_requires_both_signature_fields(client, employee):
    entry = clock_in(client, employee)

    response = client.put(
        f"/api/time-entries/{entry['id']}/clock-out",
        json={"employeeSignature": SIGNATURE},
        headers=auth_headers(employee),
    )

    assert response.status_code == 422


def test_clock_out_of_someone_elses_entry_is_not_found(client, make_user):
    owner, intruder = make_user(), make_user()
    entry = clock_in(client, owner)

    response = client.put(f"/api/time-entries/{entry['id']}/clock-out",
                          json=SIGNATURES, headers=auth_headers(intruder))

    assert response.status_code == 404
    assert response.json()["code"] == "NOT_FOUND"


def test_second_clock_out_is_invalid_state(client, employee):
    entry = clock_in(client, employee)
    url = f"/api/time-entries/{entry['id']}/clock-out"
    client.put(url, json=SIGNATURES, headers=auth_headers(employee))

    response = client.put(url, json=SIGNATURES, headers=auth_headers(employee))

    assert response.status_code == 409
    assert response.json()["code"] == "INVALID_STATE"


def test_user_history_limit(client, employee):
    headers = auth_headers(employee)
    for _ in range(3):
        entry = clock_in(client, employee)
        client.put(f"/api/time-entries/{entry['id']}/clock-out", json=SIGNATURES, headers=headers)

    assert len(client.get("/api/time-entries/user", headers=headers).json()) == 3
    assert len(client.get("/api/time-entries/user?limit=2", headers=headers).json()) == 2
    assert client.get("/api/time-entries/user?limit=0", headers=headers).status_code == 422


def test_all_entries_is_admin_only(client, employee, admin):
    clock_in(client, employee)
    clock_in(client, admin)

    forbidden = client.get("/api/time-entries", headers=auth_headers(employee))
    assert forbidden.status_code == 403
    assert forbidden.json()["code"] == "FORBIDDEN"

    response = client.get("/api/time-entries", headers=auth_headers(admin))
    assert response.status_code == 200
    assert len(response.json()) == 2


def test_user_stats_shape(client, employee):
    response = client.get("/api/analytics/user-stats", headers=auth_headers(employee))

    assert response.status_code == 200
    assert response.json() == {
        "weeklyHours": 0, "weeklyMinutes": 0, "monthlyHours": 0, "monthlyMinutes": 0
    }


def test_system_stats_is_admin_only(client, employee, admin):
    clock_in(client, employee)

    assert client.get("/api/analytics/system-stats", headers=auth_headers(employee)).status_code == 403

    response = client.get("/api/analytics/system-stats", headers=auth_headers(admin))
    assert response.status_code == 200
    body = response.json()
    assert body["totalEmployees"] == 2
    assert body["activeSessions"] == 1
    assert body["weeklyHours"] == 0
    assert body["avgHours"] == 0


def test_current_user_profile(client, employee):
    response = client.get("/api/auth/user", headers=auth_headers(employee))

    assert response.status_code == 200
    assert response.json()["email"] == employee.email
    assert response.json()["isAdmin"] is False


def test_update_profile(client, employee):
    response = client.put("/api/users/profile", headers=auth_headers(employee), json={
        "firstName": "Jane", "lastName": "Doe", "email": "jane@example.com",
        "phone": "", "address": "1 Main St",
    })

    assert response.status_code == 200
    body = response.json()
    assert (body["firstName"], body["lastName"], body["email"]) == ("Jane", "Doe", "jane@example.com")
    assert body["phone"] is None


def test_update_profile_rejects_taken_email(client, make_user):
    first, second = make_user(), make_user()

    response = client.put("/api/users/profile", headers=auth_headers(first), json={
        "firstName": "A", "lastName": "B", "email": second.email,
    })

    assert response.status_code == 409


def test_update_profile_validates_email(client, employee):
    response = client.put("/api/users/profile", headers=auth_headers(employee), json={
        "firstName": "A", "lastName": "B", "email": "not-an-email",
    })

    assert response.status_code == 422


def test_admin_manages_users(client, employee, admin, make_user):
    make_user(is_active=False)

    assert client.get("/api/users", headers=auth_headers(employee)).status_code == 403
    assert len(client.get("/api/users", headers=auth_headers(admin)).json()) == 2

    payload = {"firstName": "New", "lastName": "Hire", "email": "new@example.com"}
    created = client.post("/api/users", json=payload, headers=auth_headers(admin))
    assert created.status_code == 201
    assert created.json()["isActive"] is True

    duplicate = client.post("/api/users", json=payload, headers=auth_headers(admin))
    assert duplicate.status_code == 409


def test_storage_failure_is_generic_internal_error(client, employee):
    broken = MagicMock()
    broken.query.side_effect = OperationalError("SELECT 1", {}, Exception("connection refused"))

    def broken_db():
        yield broken

    app.dependency_overrides[get_sync_db] = broken_db

    response = client.get("/api/time-entries/active", headers=auth_headers(employee))

    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error", "code": "INTERNAL_ERROR"}
