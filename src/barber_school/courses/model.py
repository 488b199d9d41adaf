from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import CourseState
from .weekdays import describe_pattern, parse_weekday_pattern


@dataclass(frozen=True)
class Course:
    """Domain entity: a course occurrence.

    ``start_date`` is kept as the stored ISO text so legacy rows with a bad
    date still load; the classifier treats those as Scheduled.
    """

    course_id: int
    name: str
    level: Optional[str]
    start_date: str
    weekday_pattern: str
    class_count: int
    capacity: int
    price: float
    instructor_id: Optional[int]
    start_time: Optional[str] = None
    duration_minutes: Optional[int] = None


@dataclass(frozen=True)
class CourseListRow:
    """Read-model for course lists: the course plus joined/aggregated columns."""

    course: Course
    instructor_name: Optional[str]
    active_enrollments: int


@dataclass(frozen=True)
class CourseView:
    """Course as served to the front end, with its derived state attached."""

    course: Course
    instructor_name: Optional[str]
    active_enrollments: int
    state: CourseState
    class_dates: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        c = self.course
        return {
            "course_id": c.course_id,
            "name": c.name,
            "level": c.level,
            "start_date": c.start_date,
            "weekday_pattern": c.weekday_pattern,
            "weekdays": describe_pattern(parse_weekday_pattern(c.weekday_pattern)),
            "class_count": c.class_count,
            "capacity": c.capacity,
            "price": c.price,
            "instructor_id": c.instructor_id,
            "instructor_name": self.instructor_name or "",
            "start_time": c.start_time,
            "duration_minutes": c.duration_minutes,
            "active_enrollments": self.active_enrollments,
            "enrollment_text": f"{self.active_enrollments}/{c.capacity}",
            "state": self.state.value,
            "class_dates": list(self.class_dates),
        }


@dataclass(frozen=True)
class CourseDraft:
    """Validated input for create/update."""

    name: str
    level: Optional[str]
    start_date: str
    weekday_pattern: str
    class_count: int
    capacity: int
    price: float
    instructor_id: int
    start_time: Optional[str] = None
    duration_minutes: Optional[int] = None
