from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import admin_required, current_actor, login_required, payload, to_jsonable
from ..container import Container
from ..core.enums import DecisionOutcome, LeaveStatus
from ..core.exceptions import ValidationError
from .model import CascadeResult, DecisionResult


def _cascade_json(cascade: CascadeResult) -> dict:
    return {
        "applied_dates": [d.isoformat() for d in cascade.applied_dates],
        "failed_dates": [d.isoformat() for d in cascade.failed_dates],
        "complete": cascade.complete,
    }


def _decision_json(result: DecisionResult) -> dict:
    return {
        "request": to_jsonable(result.request),
        "cascade": _cascade_json(result.cascade),
        "notification_queued": result.notification_queued,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/leaves", methods=["POST"], endpoint="submit_leave")
    @login_required
    def submit_leave():
        data = payload()
        req = container.leave_service.submit(
            current_actor(),
            leave_type=data.get("leave_type", ""),
            from_date=parse_iso_date(data.get("from_date", "")),
            to_date=parse_iso_date(data.get("to_date", "")),
            reason=data.get("reason", ""),
        )
        return jsonify(request=to_jsonable(req)), 201

    @app.route("/leaves", methods=["GET"], endpoint="my_leaves")
    @login_required
    def my_leaves():
        leaves = container.leave_service.list_mine(current_actor())
        return jsonify(leaves=to_jsonable(list(leaves)))

    @app.route("/leaves/<int:request_id>", methods=["GET"], endpoint="get_leave")
    @login_required
    def get_leave(request_id: int):
        req = container.leave_service.get(current_actor(), request_id=int(request_id))
        return jsonify(request=to_jsonable(req))

    @app.route("/admin/leaves", methods=["GET"], endpoint="admin_leaves")
    @admin_required
    def admin_leaves():
        raw = request.args.get("status")
        try:
            status = LeaveStatus(raw) if raw else None
        except ValueError:
            raise ValidationError("Status must be pending, approved or rejected")
        leaves = container.leave_service.list_all(current_actor(), status=status)
        return jsonify(leaves=to_jsonable(list(leaves)))

    @app.route("/admin/leaves/<int:request_id>/approve", methods=["POST"], endpoint="approve_leave")
    @admin_required
    def approve_leave(request_id: int):
        result = container.leave_service.decide(
            current_actor(),
            request_id=int(request_id),
            outcome=DecisionOutcome.APPROVED,
            comment=payload().get("admin_comment"),
        )
        return jsonify(_decision_json(result))

    @app.route("/admin/leaves/<int:request_id>/reject", methods=["POST"], endpoint="reject_leave")
    @admin_required
    def reject_leave(request_id: int):
        result = container.leave_service.decide(
            current_actor(),
            request_id=int(request_id),
            outcome=DecisionOutcome.REJECTED,
            comment=payload().get("admin_comment"),
        )
        return jsonify(_decision_json(result))

    @app.route("/admin/leaves/<int:request_id>/resume-cascade", methods=["POST"], endpoint="resume_leave_cascade")
    @admin_required
    def resume_leave_cascade(request_id: int):
        cascade = container.leave_service.resume_cascade(current_actor(), request_id=int(request_id))
        return jsonify(cascade=_cascade_json(cascade))
