from datetime import date

import pytest

from barber_school.core.enums import CourseState
from barber_school.courses.calendar import class_dates
from barber_school.courses.model import Course
from barber_school.courses.state import CourseStateClassifier, classify_course_state


def _course(start_date="2025-01-06", pattern="Lunes y Miércoles", class_count=4) -> Course:
    return Course(
        course_id=1,
        name="Fade Basics",
        level="Beginner",
        start_date=start_date,
        weekday_pattern=pattern,
        class_count=class_count,
        capacity=10,
        price=100.0,
        instructor_id=1,
    )


@pytest.mark.parametrize(
    "today, active, expected",
    [
        (date(2025, 1, 1), 0, CourseState.SCHEDULED),
        (date(2025, 1, 1), 3, CourseState.SCHEDULED),
        (date(2025, 1, 6), 0, CourseState.CANCELLED),
        (date(2025, 1, 10), 0, CourseState.CANCELLED),
        (date(2025, 1, 6), 2, CourseState.IN_PROGRESS),
        (date(2025, 1, 10), 2, CourseState.IN_PROGRESS),
        (date(2025, 1, 15), 2, CourseState.IN_PROGRESS),
        (date(2025, 1, 16), 2, CourseState.COMPLETED),
        (date(2025, 1, 20), 2, CourseState.COMPLETED),
        (date(2025, 1, 20), 0, CourseState.CANCELLED),
    ],
)
def test_state_rules(today, active, expected):
    classifier = CourseStateClassifier(clock=lambda: today)
    assert classifier.state_of(_course(), active) == expected


def test_unparseable_start_date_is_scheduled():
    classifier = CourseStateClassifier(clock=lambda: date(2025, 6, 1))
    assert classifier.state_of(_course(start_date="06/01/2025"), 0) == CourseState.SCHEDULED


def test_started_course_without_class_dates_is_in_progress():
    classifier = CourseStateClassifier(clock=lambda: date(2025, 6, 1))
    assert classifier.state_of(_course(pattern="???"), 5) == CourseState.IN_PROGRESS


def test_explicit_today_overrides_clock():
    classifier = CourseStateClassifier(clock=lambda: date(2030, 1, 1))
    assert classifier.state_of(_course(), 1, today=date(2025, 1, 8)) == CourseState.IN_PROGRESS


def test_classification_is_deterministic():
    dates = class_dates("2025-01-06", "Lunes y Miércoles", 4)
    results = {
        classify_course_state(today=date(2025, 1, 20), start_date="2025-01-06", active_count=2, dates=dates)
        for _ in range(5)
    }
    assert results == {CourseState.COMPLETED}


def test_state_parse_and_enrollment_flag():
    assert CourseState.parse("in progress") == CourseState.IN_PROGRESS
    assert CourseState.parse("Finalizado") == CourseState.COMPLETED
    assert CourseState.parse("bogus") is None
    assert CourseState.SCHEDULED.accepts_enrollments
    assert CourseState.IN_PROGRESS.accepts_enrollments
    assert not CourseState.COMPLETED.accepts_enrollments
    assert CourseState.CANCELLED.accepts_enrollments
