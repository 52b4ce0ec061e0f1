from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.http import (
    admin_required,
    current_actor,
    employee_json,
    login_required,
    payload,
    start_session,
    to_jsonable,
)
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/auth/signup", methods=["POST"], endpoint="signup")
    def signup():
        data = payload()
        user = container.auth_service.signup(
            full_name=data.get("full_name", ""),
            email=data.get("email", ""),
            password=data.get("password", ""),
            confirm_password=data.get("confirm_password", ""),
        )
        start_session(user)
        return jsonify(user=to_jsonable(user)), 201

    @app.route("/auth/login", methods=["POST"], endpoint="login")
    def login():
        data = payload()
        user = container.auth_service.authenticate(data.get("email", ""), data.get("password", ""))
        start_session(user)
        return jsonify(user=to_jsonable(user))

    @app.route("/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify(ok=True)

    @app.route("/me", methods=["GET"], endpoint="my_profile")
    @login_required
    def my_profile():
        employee = container.employee_service.get_profile(current_actor())
        return jsonify(employee=employee_json(employee))

    @app.route("/me", methods=["PATCH"], endpoint="update_my_profile")
    @login_required
    def update_my_profile():
        actor = current_actor()
        current = container.employee_service.get_profile(actor)
        data = payload()
        employee = container.employee_service.update_own_profile(
            actor,
            full_name=data.get("full_name", current.full_name),
            department=data.get("department", current.department),
            designation=data.get("designation", current.designation),
            phone_number=data.get("phone_number", current.phone_number),
        )
        session["name"] = employee.full_name
        return jsonify(employee=employee_json(employee))

    @app.route("/admin/employees", methods=["GET"], endpoint="admin_employees")
    @admin_required
    def admin_employees():
        active_only = request.args.get("active_only", "0") in {"1", "true", "yes"}
        employees = container.employee_service.list_employees(current_actor(), active_only=active_only)
        return jsonify(employees=[employee_json(e) for e in employees])

    @app.route("/admin/employees/<int:employee_id>", methods=["PATCH"], endpoint="admin_update_employee")
    @admin_required
    def admin_update_employee(employee_id: int):
        actor = current_actor()
        data = payload()
        existing = container.employees_repo.get_by_id(int(employee_id))
        employee = container.employee_service.update_employee(
            actor,
            employee_id=int(employee_id),
            department=data.get("department", existing.department if existing else None),
            designation=data.get("designation", existing.designation if existing else None),
            phone_number=data.get("phone_number", existing.phone_number if existing else None),
            salary=data.get("salary", existing.salary if existing else 0),
        )
        return jsonify(employee=employee_json(employee))

    @app.route("/admin/employees/<int:employee_id>/toggle-active", methods=["POST"], endpoint="admin_toggle_employee")
    @admin_required
    def admin_toggle_employee(employee_id: int):
        employee = container.employee_service.toggle_active(current_actor(), employee_id=int(employee_id))
        return jsonify(employee=employee_json(employee))
