from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from barber_school.attendance.model import AttendanceRecord
from barber_school.attendance.service import AttendanceService
from barber_school.core.enums import AttendanceState, EnrollmentStatus
from barber_school.core.exceptions import EmptyBatchError, NotFound, ValidationError
from barber_school.courses.model import Course
from barber_school.enrollments.model import Enrollment, EnrollmentDetail


@dataclass
class InMemoryAttendance:
    rows: dict[tuple[int, str], AttendanceRecord] = field(default_factory=dict)
    calls: int = 0
    # Enrollments deactivated after the service read the roster.
    deactivated: set[int] = field(default_factory=set)

    def list_for_enrollments(self, enrollment_ids, *, class_date=None):
        return [r for (eid, day), r in self.rows.items() if eid in set(enrollment_ids)]

    def bulk_upsert(self, *, class_date, entries):
        self.calls += 1
        written = [e for e in entries if e.enrollment_id not in self.deactivated]
        for e in written:
            self.rows[(e.enrollment_id, class_date)] = AttendanceRecord(0, e.enrollment_id, class_date, e.state, e.note)
        return len(written)


@dataclass
class InMemoryEnrollments:
    details: list[EnrollmentDetail]

    def list_for_course(self, course_id, *, active_only=True):
        return [
            d for d in self.details
            if d.enrollment.course_id == course_id and (d.enrollment.is_active or not active_only)
        ]


@dataclass
class InMemoryCourses:
    courses: dict[int, Course]

    def get_by_id(self, course_id):
        return self.courses.get(course_id)


def _detail(enrollment_id: int, course_id: int, status=EnrollmentStatus.ACTIVE) -> EnrollmentDetail:
    return EnrollmentDetail(
        enrollment=Enrollment(enrollment_id, enrollment_id, course_id, status, "2025-01-01"),
        student_name=f"Student {enrollment_id}",
        student_document=str(enrollment_id),
        student_phone=None,
        course_name=f"Course {course_id}",
        course_capacity=10,
        course_price=0.0,
    )


@pytest.fixture
def attendance():
    return InMemoryAttendance()


@pytest.fixture
def service(attendance):
    course = Course(1, "Classic Cuts", None, "2025-01-06", "Lunes y Miércoles", 4, 10, 0.0, None)
    other = Course(2, "Beard Styling", None, "2025-01-06", "Martes", 4, 10, 0.0, None)
    enrollments = InMemoryEnrollments(
        [
            _detail(10, 1),
            _detail(11, 1),
            _detail(12, 1, status=EnrollmentStatus.INACTIVE),
            _detail(20, 2),
        ]
    )
    return AttendanceService(attendance, enrollments, InMemoryCourses({1: course, 2: other}))


def test_saving_twice_leaves_same_state(service, attendance):
    batch = [
        {"enrollment_id": 10, "state": "Attended"},
        {"enrollment_id": 11, "state": "Absent", "note": "late bus"},
    ]

    assert service.bulk_save(1, "2025-01-06", batch) == 2
    first = dict(attendance.rows)
    assert service.bulk_save(1, "2025-01-06", batch) == 2

    assert attendance.rows == first
    assert len(attendance.rows) == 2


def test_second_save_overwrites_state(service, attendance):
    service.bulk_save(1, "2025-01-06", [{"enrollment_id": 10, "state": "Absent"}])
    service.bulk_save(1, "2025-01-06", [{"enrollment_id": 10, "state": "Excused"}])

    assert attendance.rows[(10, "2025-01-06")].state == AttendanceState.EXCUSED


def test_invalid_records_are_dropped(service, attendance):
    saved = service.bulk_save(
        1,
        "2025-01-06",
        [
            {"enrollment_id": 11, "state": "Attended"},
            {"enrollment_id": 999, "state": "Attended"},  # unknown
            {"enrollment_id": 10, "state": "Bogus"},  # bad state
            {"enrollment_id": 12, "state": "Absent"},  # inactive
            {"enrollment_id": 20, "state": "Absent"},  # other course
            {"enrollment_id": 10, "state": "Unmarked"},
            {"state": "Attended"},
            "garbage",
        ],
    )

    assert saved == 1
    assert list(attendance.rows) == [(11, "2025-01-06")]


def test_all_invalid_batch_writes_nothing(service, attendance):
    with pytest.raises(EmptyBatchError):
        service.bulk_save(1, "2025-01-06", [{"enrollment_id": 999, "state": "Attended"}])
    with pytest.raises(EmptyBatchError):
        service.bulk_save(1, "2025-01-06", [])

    assert attendance.rows == {}
    assert attendance.calls == 0


def test_enrollment_deactivated_mid_save_is_not_counted(service, attendance):
    attendance.deactivated.add(11)

    saved = service.bulk_save(
        1, "2025-01-06", [{"enrollment_id": 10, "state": "Attended"}, {"enrollment_id": 11, "state": "Absent"}]
    )

    assert saved == 1
    assert list(attendance.rows) == [(10, "2025-01-06")]

    with pytest.raises(EmptyBatchError):
        service.bulk_save(1, "2025-01-08", [{"enrollment_id": 11, "state": "Absent"}])
    assert (11, "2025-01-08") not in attendance.rows


def test_blank_or_bad_date_is_rejected_first(service, attendance):
    with pytest.raises(ValidationError):
        service.bulk_save(1, "", [{"enrollment_id": 10, "state": "Attended"}])
    with pytest.raises(ValidationError):
        service.bulk_save(99, "  ", [{"enrollment_id": 10, "state": "Attended"}])
    with pytest.raises(ValidationError):
        service.bulk_save(1, "2025-02-30", [{"enrollment_id": 10, "state": "Attended"}])
    assert attendance.calls == 0


def test_unknown_course(service):
    with pytest.raises(NotFound):
        service.bulk_save(99, "2025-01-06", [{"enrollment_id": 10, "state": "Attended"}])


def test_repeated_enrollment_keeps_last_record(service, attendance):
    saved = service.bulk_save(
        1,
        "2025-01-06",
        [
            {"enrollment_id": 10, "state": "Attended"},
            {"enrollment_id": 10, "state": "Absent"},
        ],
    )

    assert saved == 1
    assert attendance.rows[(10, "2025-01-06")].state == AttendanceState.ABSENT


def test_legacy_state_labels_accepted(service, attendance):
    saved = service.bulk_save(
        1,
        "2025-01-08",
        [
            {"enrollment_id": 10, "state": "Asistió"},
            {"enrollment_id": 11, "state": "Justificado"},
        ],
    )

    assert saved == 2
    assert attendance.rows[(10, "2025-01-08")].state == AttendanceState.ATTENDED
    assert attendance.rows[(11, "2025-01-08")].state == AttendanceState.EXCUSED
