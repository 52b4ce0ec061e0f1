from __future__ import annotations

from dataclasses import replace
from datetime import date

import pytest
from werkzeug.security import generate_password_hash

from src.hr_portal.hr_portal.core.enums import AttendanceStatus, Role
from src.hr_portal.hr_portal.core.exceptions import StorageError
from src.hr_portal.hr_portal.main import create_app
from src.hr_portal.hr_portal.users.model import SessionUser


@pytest.fixture
def app(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()


def _login_as(client, user):
    with client.session_transaction() as sess:
        sess["employee_id"] = user.employee_id
        sess["name"] = user.full_name
        sess["email"] = user.email
        sess["role"] = user.role.value


def test_login_sets_session(client, employees_repo):
    jane = employees_repo.get_by_id(2)
    employees_repo.rows[2] = replace(jane, password_hash=generate_password_hash("employee123"))

    resp = client.post("/auth/login", json={"email": "jane@example.com", "password": "employee123"})

    assert resp.status_code == 200
    assert resp.get_json()["user"]["role"] == "employee"
    me = client.get("/me").get_json()["employee"]
    assert me["email"] == "jane@example.com"
    assert "password_hash" not in me


def test_bad_login_is_401(client):
    resp = client.post("/auth/login", json={"email": "jane@example.com", "password": "nope-nope"})

    assert resp.status_code == 401


def test_routes_require_login(client):
    assert client.post("/attendance/check-in").status_code == 401
    assert client.get("/leaves").status_code == 401


def test_admin_routes_are_forbidden_for_employees(client, employee):
    _login_as(client, employee)

    assert client.get("/admin/leaves").status_code == 403
    assert client.get("/admin/dashboard").status_code == 403


def test_double_check_in_is_conflict(client, employee):
    _login_as(client, employee)

    first = client.post("/attendance/check-in")
    second = client.post("/attendance/check-in")

    assert first.status_code == 201
    assert first.get_json()["record"]["status"] == "present"
    assert second.status_code == 409
    assert second.get_json()["kind"] == "AlreadyCheckedIn"


def test_check_out_without_check_in_is_conflict(client, employee):
    _login_as(client, employee)

    assert client.post("/attendance/check-out").status_code == 409


def test_leave_submission_and_approval(client, employee, admin, attendance_repo):
    _login_as(client, employee)
    bad = client.post("/leaves", json={"leave_type": "paid", "from_date": "2024-02-05", "to_date": "2024-02-03", "reason": "x"})
    assert bad.status_code == 400

    created = client.post(
        "/leaves",
        json={"leave_type": "paid", "from_date": "2024-01-10", "to_date": "2024-01-12", "reason": "Family trip"},
    )
    assert created.status_code == 201
    request_id = created.get_json()["request"]["request_id"]

    _login_as(client, admin)
    decided = client.post(f"/admin/leaves/{request_id}/approve", json={"admin_comment": "Enjoy"})
    body = decided.get_json()

    assert decided.status_code == 200
    assert body["request"]["status"] == "approved"
    assert body["cascade"]["complete"] is True
    assert attendance_repo.get_for_employee_and_date(employee.employee_id, date(2024, 1, 11)).status == AttendanceStatus.LEAVE

    again = client.post(f"/admin/leaves/{request_id}/reject")
    assert again.status_code == 409


def test_leave_detail_is_own_or_admin(client, employee, admin):
    _login_as(client, employee)
    created = client.post(
        "/leaves",
        json={"leave_type": "sick", "from_date": "2024-03-04", "to_date": "2024-03-04", "reason": "Flu"},
    )
    request_id = created.get_json()["request"]["request_id"]

    own = client.get(f"/leaves/{request_id}")
    assert own.status_code == 200
    assert own.get_json()["request"]["reason"] == "Flu"
    assert client.get("/leaves/9999").status_code == 400

    colleague = SessionUser(employee_id=7, full_name="Other Person", email="other@example.com", role=Role.EMPLOYEE)
    _login_as(client, colleague)
    assert client.get(f"/leaves/{request_id}").status_code == 403

    _login_as(client, admin)
    assert client.get(f"/leaves/{request_id}").get_json()["request"]["employee_id"] == employee.employee_id


def test_payroll_upsert_and_lock(client, admin, employee):
    _login_as(client, admin)
    url = f"/admin/payroll/{employee.employee_id}/2024/1"

    saved = client.put(url, json={"basic_salary": "50000", "deductions": "2000", "bonuses": "1000"})
    assert saved.status_code == 200
    assert client.put(url, json={"basic_salary": "1e15"}).status_code == 400
    assert client.put(url, json={"basic_salary": "0.005"}).status_code == 400

    record = saved.get_json()["record"]
    assert record["net_salary"] == "49000.00"

    assert client.post(f"/admin/payroll/{record['payroll_id']}/mark-paid").status_code == 200
    assert client.put(url, json={"basic_salary": "50000", "bonuses": "3000"}).status_code == 409

    sheet = client.get("/admin/payroll?month=1&year=2024").get_json()
    assert sheet["rows"][0]["status"] == "paid"


def test_csv_export(client, employee):
    _login_as(client, employee)

    resp = client.get("/reports/export/leaves?month=2024-01")

    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    assert "attachment" in resp.headers["Content-Disposition"]
    assert resp.get_data(as_text=True).splitlines()[0] == "Type,From,To,Reason,Status"


def test_storage_failure_is_generic_500(client, employee, attendance_repo, monkeypatch):
    def boom(*args, **kwargs):
        raise StorageError("Storage operation failed, please retry")

    monkeypatch.setattr(attendance_repo, "get_for_employee_and_date", boom)
    _login_as(client, employee)

    resp = client.post("/attendance/check-in")

    assert resp.status_code == 500
    assert resp.get_json()["error"] == "Something went wrong, please retry"
