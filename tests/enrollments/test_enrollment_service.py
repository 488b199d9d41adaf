from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from typing import Optional

import pytest

from barber_school.core.enums import EnrollmentStatus, RecordStatus
from barber_school.core.exceptions import CapacityExceeded, DuplicateEnrollment, NotFound, ValidationError
from barber_school.courses.model import Course, CourseListRow
from barber_school.courses.state import CourseStateClassifier
from barber_school.enrollments.model import Enrollment
from barber_school.enrollments.service import EnrollmentService
from barber_school.students.model import Student


@dataclass
class InMemoryStudents:
    items: dict[int, Student]

    def get_by_id(self, student_id: int) -> Optional[Student]:
        return self.items.get(student_id)


@dataclass
class InMemoryEnrollments:
    courses: dict[int, Course]
    items: dict[int, Enrollment] = field(default_factory=dict)

    def count_active(self, course_id: int) -> int:
        return sum(1 for e in self.items.values() if e.course_id == course_id and e.is_active)

    def _check_seat(self, student_id: int, course_id: int) -> None:
        if any(e.student_id == student_id and e.course_id == course_id and e.is_active for e in self.items.values()):
            raise DuplicateEnrollment("duplicate")
        if self.count_active(course_id) >= self.courses[course_id].capacity:
            raise CapacityExceeded("full")

    def get_by_id(self, enrollment_id: int) -> Optional[Enrollment]:
        return self.items.get(enrollment_id)

    def create_active(self, *, student_id: int, course_id: int, enrolled_on: str) -> int:
        self._check_seat(student_id, course_id)
        enrollment_id = len(self.items) + 1
        self.items[enrollment_id] = Enrollment(enrollment_id, student_id, course_id, EnrollmentStatus.ACTIVE, enrolled_on)
        return enrollment_id

    def activate(self, enrollment_id: int) -> bool:
        e = self.items[enrollment_id]
        self._check_seat(e.student_id, e.course_id)
        self.items[enrollment_id] = replace(e, status=EnrollmentStatus.ACTIVE)
        return True

    def deactivate(self, enrollment_id: int) -> bool:
        self.items[enrollment_id] = replace(self.items[enrollment_id], status=EnrollmentStatus.INACTIVE)
        return True


@dataclass
class InMemoryCourses:
    courses: dict[int, Course]
    enrollments: Optional[InMemoryEnrollments] = None

    def get_by_id(self, course_id: int) -> Optional[Course]:
        return self.courses.get(course_id)

    def get_row(self, course_id: int) -> Optional[CourseListRow]:
        c = self.courses.get(course_id)
        if not c:
            return None
        return CourseListRow(course=c, instructor_name=None, active_enrollments=self.enrollments.count_active(course_id))


def _course(course_id: int, start_date: str, capacity: int = 2) -> Course:
    return Course(
        course_id=course_id,
        name=f"Course {course_id}",
        level=None,
        start_date=start_date,
        weekday_pattern="Lunes y Miércoles",
        class_count=4,
        capacity=capacity,
        price=0.0,
        instructor_id=None,
    )


@pytest.fixture
def enrollments():
    courses = {
        1: _course(1, "2025-01-06", capacity=2),  # upcoming
        2: _course(2, "2024-12-02"),  # started with nobody: Cancelled
        3: _course(3, "2024-12-02"),  # past its last class with a student: Completed
        4: _course(4, "2025-01-01"),  # starts today, nobody yet
        5: _course(5, "2024-12-30"),  # running: 12-30, 01-01, 01-06, 01-08
    }
    store = InMemoryEnrollments(courses=courses)
    store.items[100] = Enrollment(100, 3, 3, EnrollmentStatus.ACTIVE, "2024-11-20")
    return store


@pytest.fixture
def service(enrollments):
    students = InMemoryStudents(
        {i: Student(i, f"Student {i}", f"D{i}", None, None, "2024-12-01", RecordStatus.ACTIVE) for i in (1, 2, 3)}
    )
    courses = InMemoryCourses(enrollments.courses, enrollments)
    classifier = CourseStateClassifier(clock=lambda: date(2025, 1, 1))
    return EnrollmentService(enrollments, students, courses, classifier=classifier)


def test_enroll_defaults_date_to_today(service, enrollments):
    enrollment_id = service.enroll(student_id=1, course_id=1)

    e = enrollments.items[enrollment_id]
    assert e.is_active
    assert e.enrolled_on == "2025-01-01"


def test_third_enrollment_exceeds_capacity(service, enrollments):
    service.enroll(student_id=1, course_id=1)
    service.enroll(student_id=2, course_id=1)

    with pytest.raises(CapacityExceeded):
        service.enroll(student_id=3, course_id=1)
    assert enrollments.count_active(1) == 2


def test_duplicate_active_enrollment(service):
    service.enroll(student_id=1, course_id=1)
    with pytest.raises(DuplicateEnrollment):
        service.enroll(student_id=1, course_id=1)


def test_completed_course_rejects_enrollment(service):
    with pytest.raises(ValidationError):
        service.enroll(student_id=1, course_id=3)


def test_course_starting_today_takes_its_first_student(service, enrollments):
    enrollment_id = service.enroll(student_id=1, course_id=4)

    assert enrollments.items[enrollment_id].is_active
    assert enrollments.count_active(4) == 1


def test_started_course_without_students_can_still_be_joined(service, enrollments):
    service.enroll(student_id=2, course_id=2)

    assert enrollments.count_active(2) == 1


def test_last_student_of_running_course_can_be_reactivated(service, enrollments):
    enrollment_id = service.enroll(student_id=1, course_id=5)
    service.deactivate(enrollment_id)
    assert enrollments.count_active(5) == 0

    service.reactivate(enrollment_id)

    assert enrollments.items[enrollment_id].is_active


def test_unknown_references(service):
    with pytest.raises(NotFound):
        service.enroll(student_id=99, course_id=1)
    with pytest.raises(NotFound):
        service.enroll(student_id=1, course_id=99)
    with pytest.raises(ValidationError):
        service.enroll(student_id="abc", course_id=1)


def test_deactivate_is_soft_and_idempotent(service, enrollments):
    enrollment_id = service.enroll(student_id=1, course_id=1)

    service.deactivate(enrollment_id)
    service.deactivate(enrollment_id)

    assert enrollments.items[enrollment_id].status == EnrollmentStatus.INACTIVE
    assert enrollments.count_active(1) == 0

    with pytest.raises(NotFound):
        service.deactivate(404)


def test_reactivate_frees_and_retakes_a_seat(service, enrollments):
    first = service.enroll(student_id=1, course_id=1)
    service.enroll(student_id=2, course_id=1)
    service.deactivate(first)
    service.enroll(student_id=3, course_id=1)

    with pytest.raises(CapacityExceeded):
        service.reactivate(first)
    assert not enrollments.items[first].is_active
