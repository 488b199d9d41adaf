from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import pytest

from barber_school.attendance.model import AttendanceEntry, AttendanceRecord
from barber_school.attendance.service import AttendanceService
from barber_school.core.enums import AttendanceState, EnrollmentStatus
from barber_school.core.exceptions import NotFound
from barber_school.courses.model import Course
from barber_school.enrollments.model import Enrollment, EnrollmentDetail


@dataclass
class InMemoryAttendance:
    rows: dict[tuple[int, str], AttendanceRecord] = field(default_factory=dict)

    def list_for_enrollments(self, enrollment_ids, *, class_date=None):
        wanted = set(enrollment_ids)
        return [
            r for (eid, day), r in self.rows.items()
            if eid in wanted and (class_date is None or day == class_date)
        ]

    def bulk_upsert(self, *, class_date, entries):
        for e in entries:
            self.rows[(e.enrollment_id, class_date)] = AttendanceRecord(
                attendance_id=len(self.rows) + 1,
                enrollment_id=e.enrollment_id,
                class_date=class_date,
                state=e.state,
                note=e.note,
            )
        return len(entries)

    def mark(self, enrollment_id: int, day: str, state: AttendanceState, note: Optional[str] = None) -> None:
        self.bulk_upsert(class_date=day, entries=[AttendanceEntry(enrollment_id, state, note)])


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


def _detail(enrollment_id: int, name: str, status=EnrollmentStatus.ACTIVE, course_id: int = 1) -> EnrollmentDetail:
    return EnrollmentDetail(
        enrollment=Enrollment(enrollment_id, enrollment_id * 10, course_id, status, "2025-01-01"),
        student_name=name,
        student_document=f"DOC-{enrollment_id}",
        student_phone=None,
        course_name="Classic Cuts",
        course_capacity=5,
        course_price=0.0,
    )


def _course(course_id: int = 1, pattern: str = "Lunes y Miércoles") -> Course:
    return Course(
        course_id=course_id,
        name="Classic Cuts",
        level=None,
        start_date="2025-01-06",
        weekday_pattern=pattern,
        class_count=4,
        capacity=5,
        price=0.0,
        instructor_id=None,
    )


@pytest.fixture
def attendance():
    return InMemoryAttendance()


@pytest.fixture
def service(attendance):
    enrollments = InMemoryEnrollments(
        [
            _detail(1, "Andrea"),
            _detail(2, "Bruno"),
            _detail(3, "Carla"),
            _detail(4, "Diego", status=EnrollmentStatus.INACTIVE),
        ]
    )
    courses = InMemoryCourses({1: _course(), 2: _course(2, pattern="cuando se pueda")})
    return AttendanceService(attendance, enrollments, courses)


def test_grid_has_a_cell_for_every_enrollment_and_date(service):
    grid = service.build_grid(1)

    assert grid.class_dates == ("2025-01-06", "2025-01-08", "2025-01-13", "2025-01-15")
    assert [r.student_name for r in grid.rows] == ["Andrea", "Bruno", "Carla"]
    assert grid.cell_count == 12
    assert all(state == AttendanceState.UNMARKED for r in grid.rows for state in r.cells.values())


def test_grid_shows_persisted_marks_and_notes(service, attendance):
    attendance.mark(2, "2025-01-08", AttendanceState.ABSENT, note="sick")
    attendance.mark(3, "2025-01-06", AttendanceState.ATTENDED)

    rows = {r.enrollment_id: r for r in service.build_grid(1).rows}

    assert rows[2].cells["2025-01-08"] == AttendanceState.ABSENT
    assert rows[2].notes == {"2025-01-08": "sick"}
    assert rows[3].cells["2025-01-06"] == AttendanceState.ATTENDED
    assert rows[1].cells["2025-01-06"] == AttendanceState.UNMARKED


def test_grid_hides_inactive_enrollments_and_off_calendar_rows(service, attendance):
    attendance.mark(4, "2025-01-06", AttendanceState.ATTENDED)
    attendance.mark(1, "2025-01-07", AttendanceState.ATTENDED)  # not a class date

    grid = service.build_grid(1)

    assert 4 not in {r.enrollment_id for r in grid.rows}
    assert "2025-01-07" not in grid.rows[0].cells
    assert grid.cell_count == 12


def test_grid_for_unresolvable_pattern_carries_warning(service):
    grid = service.build_grid(2)

    assert grid.class_dates == ()
    assert grid.cell_count == 0
    assert "warning" in grid.to_dict()


def test_grid_unknown_course(service):
    with pytest.raises(NotFound):
        service.build_grid(99)


def test_roster_for_date(service, attendance):
    attendance.mark(1, "2025-01-06", AttendanceState.EXCUSED, note="doctor")

    roster = service.roster_for_date(1, "2025-01-06")

    assert [r.student_name for r in roster] == ["Andrea", "Bruno", "Carla"]
    assert roster[0].to_dict()["state"] == "Excused"
    assert roster[0].note == "doctor"
    assert roster[1].state == AttendanceState.UNMARKED
