from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from ..common.datetime_utils import to_iso
from ..common.validators import optional_text, require_iso_date, require_positive_int, to_int
from ..core.constants import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from ..core.enums import EnrollmentStatus
from ..core.exceptions import NotFound, ValidationError
from ..courses.repository import CourseRepository
from ..courses.state import CourseStateClassifier
from ..students.repository import StudentRepository
from .model import EnrollmentDetail, EnrollmentPage
from .repository import EnrollmentRepository

logger = logging.getLogger(__name__)


class EnrollmentService:
    """Enroll students into courses, soft-remove and reactivate enrollments.

    The caller's role is checked by the HTTP layer; this service only enforces
    business rules (course open, one active seat per student, capacity).
    """

    def __init__(
        self,
        enrollments: EnrollmentRepository,
        students: StudentRepository,
        courses: CourseRepository,
        *,
        classifier: Optional[CourseStateClassifier] = None,
    ):
        self._enrollments = enrollments
        self._students = students
        self._courses = courses
        self._classifier = classifier or CourseStateClassifier()

    def _require_open_course(self, course_id: int) -> None:
        row = self._courses.get_row(course_id)
        if not row:
            raise NotFound("Course not found")
        state = self._classifier.state_of(row.course, row.active_enrollments)
        if not state.accepts_enrollments:
            raise ValidationError(f"Course is not open for enrollment (state: {state.value})")

    def enroll(self, *, student_id: Any, course_id: Any, enrolled_on: Any = None) -> int:
        student_id = require_positive_int(student_id, "student_id")
        course_id = require_positive_int(course_id, "course_id")

        if enrolled_on in (None, ""):
            enrolled_day = self._classifier.today()
        else:
            enrolled_day = require_iso_date(enrolled_on, "enrolled_on")

        if not self._students.get_by_id(student_id):
            raise NotFound("Student not found")
        self._require_open_course(course_id)

        enrollment_id = self._enrollments.create_active(
            student_id=student_id,
            course_id=course_id,
            enrolled_on=to_iso(enrolled_day),
        )
        logger.info("Enrollment created: id=%s student=%s course=%s", enrollment_id, student_id, course_id)
        return enrollment_id

    def deactivate(self, enrollment_id: Any) -> None:
        """Soft-remove: the row and its attendance history stay in the store."""

        enrollment_id = require_positive_int(enrollment_id, "enrollment_id")
        enrollment = self._enrollments.get_by_id(enrollment_id)
        if not enrollment:
            raise NotFound("Enrollment not found")
        if not enrollment.is_active:
            return
        if not self._enrollments.deactivate(enrollment_id):
            raise NotFound("Enrollment not found")
        logger.info("Enrollment deactivated: id=%s course=%s", enrollment_id, enrollment.course_id)

    def reactivate(self, enrollment_id: Any) -> None:
        enrollment_id = require_positive_int(enrollment_id, "enrollment_id")
        enrollment = self._enrollments.get_by_id(enrollment_id)
        if not enrollment:
            raise NotFound("Enrollment not found")
        if enrollment.is_active:
            return
        self._require_open_course(enrollment.course_id)
        if not self._enrollments.activate(enrollment_id):
            raise NotFound("Enrollment not found")
        logger.info("Enrollment reactivated: id=%s course=%s", enrollment_id, enrollment.course_id)

    def get(self, enrollment_id: Any) -> EnrollmentDetail:
        detail = self._enrollments.get_detail(require_positive_int(enrollment_id, "enrollment_id"))
        if not detail:
            raise NotFound("Enrollment not found")
        return detail

    def list_for_course(self, course_id: Any, *, active_only: bool = True) -> Sequence[EnrollmentDetail]:
        course_id = require_positive_int(course_id, "course_id")
        if not self._courses.get_by_id(course_id):
            raise NotFound("Course not found")
        return self._enrollments.list_for_course(course_id, active_only=active_only)

    def list_for_student(self, student_id: Any) -> Sequence[EnrollmentDetail]:
        student_id = require_positive_int(student_id, "student_id")
        if not self._students.get_by_id(student_id):
            raise NotFound("Student not found")
        return self._enrollments.list_for_student(student_id)

    def search(
        self,
        *,
        student_id: Any = None,
        course_id: Any = None,
        status: Optional[str] = None,
        q: Optional[str] = None,
        limit: Any = None,
        offset: Any = None,
    ) -> EnrollmentPage:
        limit_n = to_int(limit, DEFAULT_PAGE_LIMIT) or DEFAULT_PAGE_LIMIT
        offset_n = to_int(offset, 0) or 0
        return self._enrollments.search(
            student_id=to_int(student_id),
            course_id=to_int(course_id),
            status=EnrollmentStatus.parse(status) if optional_text(status) else None,
            q=optional_text(q),
            limit=min(max(1, limit_n), MAX_PAGE_LIMIT),
            offset=max(0, offset_n),
        )
