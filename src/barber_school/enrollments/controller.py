from __future__ import annotations

from flask import Flask, request

from ..common.http import admin_required, json_body, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/enrollments", methods=["GET"], endpoint="enrollments_search")
    @login_required
    def search_enrollments():
        page = container.enrollment_service.search(
            student_id=request.args.get("student_id"),
            course_id=request.args.get("course_id"),
            status=request.args.get("status"),
            q=request.args.get("q"),
            limit=request.args.get("limit"),
            offset=request.args.get("offset"),
        )
        return ok(
            [d.to_dict() for d in page.items],
            total=page.total,
            limit=page.limit,
            offset=page.offset,
        )

    @app.route("/api/enrollments/<int:enrollment_id>", methods=["GET"], endpoint="enrollments_get")
    @login_required
    def get_enrollment(enrollment_id: int):
        return ok(container.enrollment_service.get(enrollment_id).to_dict())

    @app.route("/api/enrollments/by-course/<int:course_id>", methods=["GET"], endpoint="enrollments_by_course")
    @login_required
    def enrollments_by_course(course_id: int):
        active_only = request.args.get("all") not in ("1", "true", "yes")
        details = container.enrollment_service.list_for_course(course_id, active_only=active_only)
        return ok([d.to_dict() for d in details])

    @app.route("/api/enrollments", methods=["POST"], endpoint="enrollments_create")
    @admin_required
    def create_enrollment():
        data = json_body()
        enrollment_id = container.enrollment_service.enroll(
            student_id=data.get("student_id"),
            course_id=data.get("course_id"),
            enrolled_on=data.get("enrolled_on"),
        )
        return ok({"enrollment_id": enrollment_id}, 201)

    @app.route("/api/enrollments/<int:enrollment_id>/reactivate", methods=["POST"], endpoint="enrollments_reactivate")
    @admin_required
    def reactivate_enrollment(enrollment_id: int):
        container.enrollment_service.reactivate(enrollment_id)
        return ok({"enrollment_id": enrollment_id})

    @app.route("/api/enrollments/<int:enrollment_id>", methods=["DELETE"], endpoint="enrollments_deactivate")
    @admin_required
    def deactivate_enrollment(enrollment_id: int):
        # Soft removal; attendance history stays.
        container.enrollment_service.deactivate(enrollment_id)
        return ok({"enrollment_id": enrollment_id})
