from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import EnrollmentStatus


@dataclass(frozen=True)
class Enrollment:
    """Domain entity: one student in one course occurrence."""

    enrollment_id: int
    student_id: int
    course_id: int
    status: EnrollmentStatus
    enrolled_on: str
    created_at: Optional[str] = None

    @property
    def is_active(self) -> bool:
        return self.status == EnrollmentStatus.ACTIVE


@dataclass(frozen=True)
class EnrollmentDetail:
    """Read-model: enrollment joined with its student and course (lists, rosters)."""

    enrollment: Enrollment
    student_name: str
    student_document: str
    student_phone: Optional[str]
    course_name: str
    course_capacity: int
    course_price: float
    instructor_name: Optional[str] = None

    def to_dict(self) -> dict:
        e = self.enrollment
        return {
            "enrollment_id": e.enrollment_id,
            "status": e.status.value,
            "enrolled_on": e.enrolled_on,
            "created_at": e.created_at,
            "student_id": e.student_id,
            "student_name": self.student_name,
            "student_document": self.student_document,
            "student_phone": self.student_phone,
            "course_id": e.course_id,
            "course_name": self.course_name,
            "course_capacity": self.course_capacity,
            "course_price": self.course_price,
            "instructor_name": self.instructor_name or "",
        }


@dataclass(frozen=True)
class EnrollmentPage:
    items: list[EnrollmentDetail]
    total: int
    limit: int
    offset: int
