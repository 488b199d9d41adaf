from __future__ import annotations

from enum import Enum
from typing import Optional


class Role(str, Enum):
    """Account role used for route guards."""

    ADMIN = "admin"
    STAFF = "staff"


class CourseState(str, Enum):
    """Derived lifecycle state of a course. Never stored."""

    SCHEDULED = "Scheduled"
    IN_PROGRESS = "InProgress"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"

    @property
    def accepts_enrollments(self) -> bool:
        # Cancelled only means nobody is enrolled yet; the first enrollment reopens it.
        return self != CourseState.COMPLETED

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["CourseState"]:
        key = (value or "").strip().lower().replace(" ", "").replace("_", "")
        if not key:
            return None
        return _COURSE_STATE_ALIASES.get(key)


class EnrollmentStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"

    @classmethod
    def parse(cls, value: Optional[str]) -> "EnrollmentStatus":
        """Lenient parse; anything that is not an inactive spelling is Active."""

        v = (value or "").strip().lower()
        if v in {"inactive", "inactiva", "inactivo", "cancelled", "canceled"}:
            return cls.INACTIVE
        return cls.ACTIVE


class RecordStatus(str, Enum):
    """Status of a student or instructor profile."""

    ACTIVE = "Active"
    INACTIVE = "Inactive"


class AttendanceState(str, Enum):
    ATTENDED = "Attended"
    ABSENT = "Absent"
    EXCUSED = "Excused"
    UNMARKED = "Unmarked"

    @property
    def persisted(self) -> bool:
        return self != AttendanceState.UNMARKED

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["AttendanceState"]:
        """Map a wire value (or a legacy alias) to a state; None if unknown."""

        key = (value or "").strip().lower()
        if not key:
            return None
        return _ATTENDANCE_ALIASES.get(key)


_COURSE_STATE_ALIASES = {
    "scheduled": CourseState.SCHEDULED,
    "programado": CourseState.SCHEDULED,
    "inprogress": CourseState.IN_PROGRESS,
    "encurso": CourseState.IN_PROGRESS,
    "completed": CourseState.COMPLETED,
    "finalizado": CourseState.COMPLETED,
    "cancelled": CourseState.CANCELLED,
    "canceled": CourseState.CANCELLED,
    "cancelado": CourseState.CANCELLED,
}

_ATTENDANCE_ALIASES = {
    "attended": AttendanceState.ATTENDED,
    "present": AttendanceState.ATTENDED,
    "asistio": AttendanceState.ATTENDED,
    "asistió": AttendanceState.ATTENDED,
    "absent": AttendanceState.ABSENT,
    "falto": AttendanceState.ABSENT,
    "faltó": AttendanceState.ABSENT,
    "excused": AttendanceState.EXCUSED,
    "justificado": AttendanceState.EXCUSED,
    "licencia": AttendanceState.EXCUSED,
    "unmarked": AttendanceState.UNMARKED,
}
