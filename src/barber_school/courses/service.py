from __future__ import annotations

import logging
import re
from typing import Any, Optional, Sequence

from ..common.datetime_utils import to_iso
from ..common.validators import optional_text, require_iso_date, require_non_empty, require_positive_int, to_int
from ..core.enums import CourseState
from ..core.exceptions import NotFound, ValidationError
from ..instructors.repository import InstructorRepository
from .calendar import class_dates
from .model import CourseDraft, CourseListRow, CourseView
from .repository import CourseRepository
from .state import CourseStateClassifier
from .weekdays import parse_weekday_pattern

logger = logging.getLogger(__name__)

_HH_MM = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


class CourseService:
    """Course CRUD plus the derived views (state, enrollment text, class dates)."""

    def __init__(
        self,
        courses: CourseRepository,
        instructors: InstructorRepository,
        *,
        classifier: Optional[CourseStateClassifier] = None,
    ):
        self._courses = courses
        self._instructors = instructors
        self._classifier = classifier or CourseStateClassifier()

    def _to_view(self, row: CourseListRow, *, with_dates: bool = False) -> CourseView:
        c = row.course
        dates = class_dates(c.start_date, c.weekday_pattern, c.class_count) if with_dates else ()
        return CourseView(
            course=c,
            instructor_name=row.instructor_name,
            active_enrollments=row.active_enrollments,
            state=self._classifier.state_of(c, row.active_enrollments),
            class_dates=tuple(to_iso(d) for d in dates),
        )

    def get_view(self, course_id: int) -> CourseView:
        row = self._courses.get_row(int(course_id))
        if not row:
            raise NotFound("Course not found")
        return self._to_view(row, with_dates=True)

    def list_views(
        self,
        *,
        q: Optional[str] = None,
        state: Optional[str] = None,
        instructor_id: Optional[int] = None,
        available_only: bool = False,
    ) -> Sequence[CourseView]:
        wanted: Optional[CourseState] = None
        if state:
            wanted = CourseState.parse(state)
            if wanted is None:
                raise ValidationError("Unknown course state")

        views = [
            self._to_view(row)
            for row in self._courses.list_rows(q=optional_text(q), instructor_id=to_int(instructor_id))
        ]
        # State is derived, so filtering happens per row after classification.
        if wanted is not None:
            views = [v for v in views if v.state == wanted]
        if available_only:
            views = [v for v in views if v.state.accepts_enrollments]
        return views

    def _build_draft(self, data: dict[str, Any]) -> CourseDraft:
        name = require_non_empty(data.get("name"), "Name")

        instructor_id = require_positive_int(data.get("instructor_id"), "instructor_id")
        if not self._instructors.get_by_id(instructor_id):
            raise NotFound("Instructor not found")

        class_count = require_positive_int(data.get("class_count"), "class_count")
        capacity = require_positive_int(data.get("capacity"), "capacity")

        weekday_pattern = require_non_empty(data.get("weekday_pattern"), "weekday_pattern")
        if not parse_weekday_pattern(weekday_pattern):
            raise ValidationError("weekday_pattern has no recognizable weekday")

        start_raw = data.get("start_date")
        if start_raw is None or (isinstance(start_raw, str) and not start_raw.strip()):
            start_date = self._classifier.today()
        else:
            start_date = require_iso_date(start_raw, "start_date")

        price_raw = data.get("price")
        if price_raw is None or price_raw == "":
            price = 0.0
        else:
            try:
                price = float(price_raw)
            except (TypeError, ValueError):
                raise ValidationError("price must be a number")
            if price != price or price < 0 or price == float("inf"):
                raise ValidationError("price must be zero or positive")

        start_time = optional_text(data.get("start_time"))
        if start_time and not _HH_MM.match(start_time):
            raise ValidationError("start_time must be HH:MM")

        duration_minutes = None
        if data.get("duration_minutes") not in (None, ""):
            duration_minutes = require_positive_int(data.get("duration_minutes"), "duration_minutes")

        return CourseDraft(
            name=name,
            level=optional_text(data.get("level")),
            start_date=to_iso(start_date),
            weekday_pattern=weekday_pattern,
            class_count=class_count,
            capacity=capacity,
            price=price,
            instructor_id=instructor_id,
            start_time=start_time,
            duration_minutes=duration_minutes,
        )

    def create(self, data: dict[str, Any]) -> int:
        draft = self._build_draft(data)
        course_id = self._courses.create(draft)
        logger.info("Course created: id=%s name=%s start=%s", course_id, draft.name, draft.start_date)
        return course_id

    def update(self, course_id: int, data: dict[str, Any]) -> None:
        course_id = require_positive_int(course_id, "course_id")
        row = self._courses.get_row(course_id)
        if not row:
            raise NotFound("Course not found")

        draft = self._build_draft(data)
        if draft.capacity < row.active_enrollments:
            raise ValidationError("capacity cannot be lower than the number of active enrollments")

        if not self._courses.update(course_id, draft):
            raise NotFound("Course not found")
        logger.info("Course updated: id=%s", course_id)

    def delete(self, course_id: int) -> None:
        course_id = require_positive_int(course_id, "course_id")
        if not self._courses.get_by_id(course_id):
            raise NotFound("Course not found")
        if self._courses.count_enrollments(course_id) > 0:
            raise ValidationError("Course has enrollments; deactivate them instead of deleting the course")
        if not self._courses.delete(course_id):
            raise NotFound("Course not found")
        logger.info("Course deleted: id=%s", course_id)
