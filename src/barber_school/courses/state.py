from __future__ import annotations

from datetime import date
from typing import Any, Callable, Optional, Sequence

from ..common.datetime_utils import today_local, try_parse_iso_date
from ..core.enums import CourseState
from .calendar import class_dates
from .model import Course


def classify_course_state(
    *,
    today: date,
    start_date: Any,
    active_count: int,
    dates: Sequence[date],
) -> CourseState:
    """Derive a course's lifecycle state. First matching rule wins.

    1. unparseable start date            -> Scheduled
    2. started and nobody enrolled       -> Cancelled
    3. not started yet                   -> Scheduled
    4. no class dates (pattern unknown)  -> InProgress
    5. past the last class date          -> Completed
    6. otherwise                         -> InProgress
    """

    start = try_parse_iso_date(start_date)
    if start is None:
        return CourseState.SCHEDULED
    if today >= start and int(active_count or 0) <= 0:
        return CourseState.CANCELLED
    if today < start:
        return CourseState.SCHEDULED
    if not dates:
        return CourseState.IN_PROGRESS
    if today > dates[-1]:
        return CourseState.COMPLETED
    return CourseState.IN_PROGRESS


class CourseStateClassifier:
    """Applies classify_course_state to Course rows with an injectable clock."""

    def __init__(self, *, clock: Optional[Callable[[], date]] = None):
        self._clock = clock or today_local

    def today(self) -> date:
        return self._clock()

    def state_of(self, course: Course, active_count: int, *, today: Optional[date] = None) -> CourseState:
        return classify_course_state(
            today=today or self._clock(),
            start_date=course.start_date,
            active_count=active_count,
            dates=class_dates(course.start_date, course.weekday_pattern, course.class_count),
        )
