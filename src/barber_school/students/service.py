from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Sequence

from ..common.datetime_utils import to_iso, today_local
from ..common.validators import (
    optional_text,
    parse_record_status,
    require_iso_date,
    require_non_empty,
    require_positive_int,
)
from ..core.exceptions import NotFound
from .model import Student
from .repository import StudentRepository

logger = logging.getLogger(__name__)


class StudentService:
    def __init__(self, students: StudentRepository, *, clock: Optional[Callable] = None):
        self._students = students
        self._clock = clock or today_local

    def get(self, student_id: int) -> Student:
        student = self._students.get_by_id(require_positive_int(student_id, "student_id"))
        if not student:
            raise NotFound("Student not found")
        return student

    def get_by_document(self, document: str) -> Student:
        student = self._students.get_by_document(require_non_empty(document, "Document"))
        if not student:
            raise NotFound("Student not found")
        return student

    def search(self, q: Optional[str] = None) -> Sequence[Student]:
        return self._students.search(q=optional_text(q))

    def create(self, data: dict[str, Any]) -> int:
        joined_raw = data.get("joined_on")
        if joined_raw in (None, ""):
            joined_on = self._clock()
        else:
            joined_on = require_iso_date(joined_raw, "joined_on")

        student_id = self._students.create(
            name=require_non_empty(data.get("name"), "Name"),
            document=require_non_empty(data.get("document"), "Document"),
            phone=optional_text(data.get("phone")),
            email=optional_text(data.get("email")),
            joined_on=to_iso(joined_on),
            status=parse_record_status(data.get("status")),
        )
        logger.info("Student created: id=%s", student_id)
        return student_id

    def update(self, student_id: int, data: dict[str, Any]) -> None:
        ok = self._students.update(
            student_id=require_positive_int(student_id, "student_id"),
            name=require_non_empty(data.get("name"), "Name"),
            document=require_non_empty(data.get("document"), "Document"),
            phone=optional_text(data.get("phone")),
            email=optional_text(data.get("email")),
            status=parse_record_status(data.get("status")),
        )
        if not ok:
            raise NotFound("Student not found")
