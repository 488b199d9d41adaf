from __future__ import annotations

from flask import Flask, request

from ..common.http import admin_required, json_body, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/instructors", methods=["GET"], endpoint="instructors_list")
    @login_required
    def list_instructors():
        instructors = container.instructor_service.list_all(
            q=request.args.get("q"),
            status=request.args.get("status"),
        )
        return ok([i.to_dict() for i in instructors])

    @app.route("/api/instructors", methods=["POST"], endpoint="instructors_create")
    @admin_required
    def create_instructor():
        data = json_body()
        instructor_id = container.instructor_service.create(
            name=data.get("name"),
            document=data.get("document"),
            phone=data.get("phone"),
            email=data.get("email"),
            status=data.get("status"),
        )
        return ok({"instructor_id": instructor_id}, 201)

    @app.route("/api/instructors/<int:instructor_id>", methods=["PUT"], endpoint="instructors_update")
    @admin_required
    def update_instructor(instructor_id: int):
        data = json_body()
        container.instructor_service.update(
            instructor_id=instructor_id,
            name=data.get("name"),
            document=data.get("document"),
            phone=data.get("phone"),
            email=data.get("email"),
            status=data.get("status"),
        )
        return ok({"instructor_id": instructor_id})
