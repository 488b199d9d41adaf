from __future__ import annotations

from flask import Flask, request

from ..common.http import admin_required, json_body, login_required, ok
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_roster")
    @login_required
    def roster():
        rows = container.attendance_service.roster_for_date(
            request.args.get("course_id"),
            request.args.get("date"),
        )
        return ok([r.to_dict() for r in rows])

    @app.route("/api/attendance/course/<int:course_id>/grid", methods=["GET"], endpoint="attendance_grid")
    @login_required
    def grid(course_id: int):
        return ok(container.attendance_service.build_grid(course_id).to_dict())

    @app.route("/api/attendance/bulk", methods=["POST"], endpoint="attendance_bulk")
    @admin_required
    def bulk_save():
        data = json_body()
        records = data.get("records")
        if not isinstance(records, list):
            raise ValidationError("records must be a list")
        saved = container.attendance_service.bulk_save(
            data.get("course_id"),
            data.get("class_date") or data.get("date"),
            records,
        )
        return ok({"count": saved})
