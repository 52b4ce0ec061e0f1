from __future__ import annotations

from flask import Flask, Response, jsonify, request

from ..common.datetime_utils import now_local, parse_month
from ..common.http import admin_required, current_actor, login_required, to_jsonable
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _month_arg() -> tuple[int, int]:
        raw = request.args.get("month")
        if not raw:
            today = now_local().date()
            return today.year, today.month
        return parse_month(raw)

    @app.route("/reports/summary", methods=["GET"], endpoint="my_report")
    @login_required
    def my_report():
        year, month = _month_arg()
        report = container.report_service.employee_report(current_actor(), year=year, month=month)
        return jsonify(report=to_jsonable(report))

    @app.route("/admin/reports/summary", methods=["GET"], endpoint="admin_report")
    @admin_required
    def admin_report():
        year, month = _month_arg()
        report = container.report_service.organization_report(current_actor(), year=year, month=month)
        return jsonify(report=to_jsonable(report))

    @app.route("/admin/dashboard", methods=["GET"], endpoint="admin_dashboard")
    @admin_required
    def admin_dashboard():
        stats = container.report_service.dashboard(current_actor())
        return jsonify(stats=to_jsonable(stats))

    @app.route("/reports/export/<kind>", methods=["GET"], endpoint="export_report")
    @login_required
    def export_report(kind: str):
        year, month = _month_arg()
        export = container.report_service.export(
            current_actor(),
            kind=kind,
            year=year,
            month=month,
            employee_id=request.args.get("employee_id", type=int),
        )
        return Response(
            export.content,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={export.filename}"},
        )
