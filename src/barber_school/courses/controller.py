from __future__ import annotations

from flask import Flask, request

from ..common.http import admin_required, json_body, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/courses", methods=["GET"], endpoint="courses_list")
    @login_required
    def list_courses():
        views = container.course_service.list_views(
            q=request.args.get("q"),
            state=request.args.get("state"),
            instructor_id=request.args.get("instructor_id"),
            available_only=request.args.get("available") in ("1", "true", "yes"),
        )
        return ok([v.to_dict() for v in views])

    @app.route("/api/courses/<int:course_id>", methods=["GET"], endpoint="courses_get")
    @login_required
    def get_course(course_id: int):
        return ok(container.course_service.get_view(course_id).to_dict())

    @app.route("/api/courses", methods=["POST"], endpoint="courses_create")
    @admin_required
    def create_course():
        course_id = container.course_service.create(json_body())
        return ok({"course_id": course_id}, 201)

    @app.route("/api/courses/<int:course_id>", methods=["PUT"], endpoint="courses_update")
    @admin_required
    def update_course(course_id: int):
        container.course_service.update(course_id, json_body())
        return ok({"course_id": course_id})

    @app.route("/api/courses/<int:course_id>", methods=["DELETE"], endpoint="courses_delete")
    @admin_required
    def delete_course(course_id: int):
        container.course_service.delete(course_id)
        return ok({"course_id": course_id})
