from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local
from ..common.http import admin_required, current_actor, employee_json, login_required, payload, to_jsonable
from ..container import Container
from ..core.exceptions import ValidationError
from .model import PayrollSheetRow


def _sheet_row_json(row: PayrollSheetRow) -> dict:
    return {
        "employee": employee_json(row.employee),
        "month": row.month,
        "year": row.year,
        "basic_salary": str(row.basic_salary),
        "deductions": str(row.deductions),
        "bonuses": str(row.bonuses),
        "net_salary": str(row.net_salary),
        "status": row.status.value if row.status else None,
        "payroll_id": row.record.payroll_id if row.record else None,
    }


def register(app: Flask, container: Container) -> None:
    def _int_arg(name: str, default: int) -> int:
        raw = request.args.get(name)
        if raw in (None, ""):
            return default
        try:
            return int(raw)
        except ValueError:
            raise ValidationError(f"{name} must be a number")

    @app.route("/admin/payroll", methods=["GET"], endpoint="admin_payroll")
    @admin_required
    def admin_payroll():
        today = now_local().date()
        month = _int_arg("month", today.month)
        year = _int_arg("year", today.year)
        rows = container.payroll_service.payroll_sheet(current_actor(), month=month, year=year)
        return jsonify(month=month, year=year, rows=[_sheet_row_json(r) for r in rows])

    @app.route("/admin/payroll/<int:employee_id>/<int:year>/<int:month>", methods=["PUT"], endpoint="upsert_payroll")
    @admin_required
    def upsert_payroll(employee_id: int, year: int, month: int):
        data = payload()
        basic = data.get("basic_salary")
        if basic in (None, ""):
            basic = container.payroll_service.default_basic_salary(employee_id=employee_id, month=month, year=year)
        record = container.payroll_service.upsert(
            current_actor(),
            employee_id=int(employee_id),
            month=int(month),
            year=int(year),
            basic_salary=basic,
            deductions=data.get("deductions", 0),
            bonuses=data.get("bonuses", 0),
        )
        return jsonify(record=to_jsonable(record))

    @app.route("/admin/payroll/<int:payroll_id>/mark-paid", methods=["POST"], endpoint="mark_payroll_paid")
    @admin_required
    def mark_payroll_paid(payroll_id: int):
        record = container.payroll_service.mark_paid(current_actor(), payroll_id=int(payroll_id))
        return jsonify(record=to_jsonable(record))

    @app.route("/payroll", methods=["GET"], endpoint="my_payroll")
    @login_required
    def my_payroll():
        records = container.payroll_service.list_for_employee(current_actor())
        return jsonify(records=to_jsonable(list(records)))
