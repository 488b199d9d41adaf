from __future__ import annotations

from flask import Flask, request

from ..common.http import admin_required, json_body, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/students", methods=["GET"], endpoint="students_list")
    @login_required
    def list_students():
        students = container.student_service.search(request.args.get("q"))
        return ok([s.to_dict() for s in students])

    @app.route("/api/students/<int:student_id>", methods=["GET"], endpoint="students_get")
    @login_required
    def get_student(student_id: int):
        student = container.student_service.get(student_id)
        enrollments = container.enrollment_service.list_for_student(student_id)
        data = student.to_dict()
        data["enrollments"] = [e.to_dict() for e in enrollments]
        return ok(data)

    @app.route("/api/students/by-document/<document>", methods=["GET"], endpoint="students_by_document")
    @login_required
    def get_student_by_document(document: str):
        return ok(container.student_service.get_by_document(document).to_dict())

    @app.route("/api/students", methods=["POST"], endpoint="students_create")
    @admin_required
    def create_student():
        student_id = container.student_service.create(json_body())
        return ok({"student_id": student_id}, 201)

    @app.route("/api/students/<int:student_id>", methods=["PUT"], endpoint="students_update")
    @admin_required
    def update_student(student_id: int):
        container.student_service.update(student_id, json_body())
        return ok({"student_id": student_id})
