from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local, parse_iso_date, parse_month
from ..common.http import admin_required, current_actor, login_required, to_jsonable
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _month_arg() -> tuple[int, int]:
        raw = request.args.get("month")
        if not raw:
            today = now_local().date()
            return today.year, today.month
        return parse_month(raw)

    @app.route("/attendance/check-in", methods=["POST"], endpoint="check_in")
    @login_required
    def check_in():
        record = container.attendance_service.check_in(current_actor())
        return jsonify(record=to_jsonable(record)), 201

    @app.route("/attendance/check-out", methods=["POST"], endpoint="check_out")
    @login_required
    def check_out():
        record = container.attendance_service.check_out(current_actor())
        return jsonify(record=to_jsonable(record))

    @app.route("/attendance/today", methods=["GET"], endpoint="attendance_today")
    @login_required
    def attendance_today():
        actor = current_actor()
        record = container.attendance_service.get_today_record(actor)
        history = container.attendance_service.get_history(actor)
        return jsonify(record=to_jsonable(record), history=to_jsonable(list(history)))

    @app.route("/attendance/calendar", methods=["GET"], endpoint="attendance_calendar")
    @login_required
    def attendance_calendar():
        year, month = _month_arg()
        employee_id = request.args.get("employee_id", type=int)
        days = container.attendance_service.month_calendar(
            current_actor(),
            year=year,
            month=month,
            employee_id=employee_id,
        )
        return jsonify(
            year=year,
            month=month,
            days=[
                {
                    "date": d.work_date.isoformat(),
                    "status": d.status.value if d.status else None,
                    "is_rest_day": d.is_rest_day,
                    "derived": d.is_derived,
                    "record": to_jsonable(d.record),
                }
                for d in days
            ],
        )

    @app.route("/admin/attendance", methods=["GET"], endpoint="admin_attendance")
    @admin_required
    def admin_attendance():
        raw = request.args.get("date")
        work_date = parse_iso_date(raw) if raw else now_local().date()
        rows = container.attendance_service.admin_day_view(current_actor(), work_date=work_date)
        return jsonify(date=work_date.isoformat(), rows=to_jsonable(list(rows)))
