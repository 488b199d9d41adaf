from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional, Sequence

from ..common.datetime_utils import to_iso
from ..common.validators import optional_text, require_iso_date, require_positive_int, to_int
from ..core.enums import AttendanceState
from ..core.exceptions import EmptyBatchError, NotFound
from ..courses.calendar import class_dates
from ..courses.repository import CourseRepository
from ..enrollments.repository import EnrollmentRepository
from .model import AttendanceEntry, AttendanceGrid, GridRow, RosterRow
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Reconciles attendance rows against a course's active enrollments and class dates."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        enrollments: EnrollmentRepository,
        courses: CourseRepository,
    ):
        self._attendance = attendance
        self._enrollments = enrollments
        self._courses = courses

    def _require_course(self, course_id: Any):
        course_id = require_positive_int(course_id, "course_id")
        course = self._courses.get_by_id(course_id)
        if not course:
            raise NotFound("Course not found")
        return course

    def build_grid(self, course_id: Any) -> AttendanceGrid:
        """Full enrollment x class-date grid.

        Every cell is present: a persisted state when a row exists, Unmarked otherwise.
        Rows of inactive enrollments are never shown, even if attendance exists for them.
        """

        course = self._require_course(course_id)
        dates = tuple(to_iso(d) for d in class_dates(course.start_date, course.weekday_pattern, course.class_count))
        warning = None if dates else "Course has no resolvable start date or weekday pattern"

        enrollments = self._enrollments.list_for_course(course.course_id, active_only=True)
        if not enrollments:
            return AttendanceGrid(
                course_id=course.course_id,
                course_name=course.name,
                class_dates=dates,
                rows=(),
                warning=warning,
            )

        date_set = set(dates)
        marks: dict[int, dict[str, tuple[AttendanceState, Optional[str]]]] = {}
        records = self._attendance.list_for_enrollments([e.enrollment.enrollment_id for e in enrollments])
        for rec in records:
            if rec.class_date in date_set:
                marks.setdefault(rec.enrollment_id, {})[rec.class_date] = (rec.state, rec.note)

        rows = []
        for detail in enrollments:
            e = detail.enrollment
            found = marks.get(e.enrollment_id, {})
            cells = {d: found[d][0] if d in found else AttendanceState.UNMARKED for d in dates}
            notes = {d: found[d][1] for d in dates if d in found and found[d][1]}
            rows.append(
                GridRow(
                    enrollment_id=e.enrollment_id,
                    student_id=e.student_id,
                    student_name=detail.student_name,
                    student_doc=detail.student_document,
                    cells=cells,
                    notes=notes,
                )
            )

        return AttendanceGrid(
            course_id=course.course_id,
            course_name=course.name,
            class_dates=dates,
            rows=tuple(rows),
            warning=warning,
        )

    def roster_for_date(self, course_id: Any, class_date: Any) -> Sequence[RosterRow]:
        course = self._require_course(course_id)
        day = to_iso(require_iso_date(class_date, "class_date"))

        enrollments = self._enrollments.list_for_course(course.course_id, active_only=True)
        by_enrollment = {
            r.enrollment_id: r
            for r in self._attendance.list_for_enrollments(
                [e.enrollment.enrollment_id for e in enrollments],
                class_date=day,
            )
        }

        out = []
        for detail in enrollments:
            e = detail.enrollment
            rec = by_enrollment.get(e.enrollment_id)
            out.append(
                RosterRow(
                    enrollment_id=e.enrollment_id,
                    student_id=e.student_id,
                    student_name=detail.student_name,
                    student_doc=detail.student_document,
                    student_phone=detail.student_phone,
                    state=rec.state if rec else AttendanceState.UNMARKED,
                    note=rec.note if rec else None,
                )
            )
        return out

    def _clean(self, records: Iterable[Any], active_ids: set[int]) -> list[AttendanceEntry]:
        cleaned: dict[int, AttendanceEntry] = {}
        dropped = 0
        for raw in records or ():
            if not isinstance(raw, Mapping):
                dropped += 1
                continue
            enrollment_id = to_int(raw.get("enrollment_id"), 0) or 0
            state = AttendanceState.parse(raw.get("state"))
            if enrollment_id <= 0 or state is None or not state.persisted or enrollment_id not in active_ids:
                dropped += 1
                continue
            # Last record wins for a repeated enrollment id.
            cleaned.pop(enrollment_id, None)
            cleaned[enrollment_id] = AttendanceEntry(
                enrollment_id=enrollment_id,
                state=state,
                note=optional_text(raw.get("note")),
            )
        if dropped:
            logger.debug("Bulk attendance: dropped %s invalid record(s)", dropped)
        return list(cleaned.values())

    def bulk_save(self, course_id: Any, class_date: Any, records: Iterable[Any]) -> int:
        """Upsert one class date's marks for a course; returns the number saved.

        Invalid records are dropped from the batch; if nothing is left the call
        fails with EmptyBatchError and nothing is written. The remaining records
        are written in a single transaction, skipping any enrollment that was
        deactivated in the meantime.
        """

        day = to_iso(require_iso_date(class_date, "class_date"))
        course = self._require_course(course_id)

        active_ids = {
            d.enrollment.enrollment_id
            for d in self._enrollments.list_for_course(course.course_id, active_only=True)
        }
        entries = self._clean(records, active_ids)
        if not entries:
            raise EmptyBatchError("No valid attendance records in the batch")

        saved = self._attendance.bulk_upsert(class_date=day, entries=entries)
        if not saved:
            raise EmptyBatchError("No valid attendance records in the batch")
        logger.info("Attendance saved: course=%s date=%s records=%s", course.course_id, day, saved)
        return saved
