from __future__ import annotations

import sqlite3
from typing import Optional, Sequence

from ..core.enums import EnrollmentStatus
from ..core.exceptions import CapacityExceeded, DuplicateEnrollment, NotFound
from ..database.connection import DatabaseConnection
from ..database.sqlite_base import db_cursor, fetchall, fetchone
from .model import Enrollment, EnrollmentDetail, EnrollmentPage
from .repository import EnrollmentRepository

_DETAIL_SELECT = """
    SELECT
        e.enrollment_id, e.student_id, e.course_id, e.status, e.enrolled_on, e.created_at,
        s.name AS student_name,
        s.document AS student_document,
        s.phone AS student_phone,
        c.name AS course_name,
        c.capacity AS course_capacity,
        c.price AS course_price,
        i.name AS instructor_name
    FROM enrollments e
    JOIN students s ON s.student_id = e.student_id
    JOIN courses  c ON c.course_id = e.course_id
    LEFT JOIN instructors i ON i.instructor_id = c.instructor_id
"""

_DETAIL_FROM = """
    FROM enrollments e
    JOIN students s ON s.student_id = e.student_id
    JOIN courses  c ON c.course_id = e.course_id
"""


def _to_enrollment(r: dict) -> Enrollment:
    return Enrollment(
        enrollment_id=int(r["enrollment_id"]),
        student_id=int(r["student_id"]),
        course_id=int(r["course_id"]),
        status=EnrollmentStatus(r["status"]),
        enrolled_on=str(r.get("enrolled_on") or ""),
        created_at=r.get("created_at"),
    )


def _to_detail(r: dict) -> EnrollmentDetail:
    return EnrollmentDetail(
        enrollment=_to_enrollment(r),
        student_name=r["student_name"],
        student_document=r["student_document"],
        student_phone=r.get("student_phone"),
        course_name=r["course_name"],
        course_capacity=int(r.get("course_capacity") or 0),
        course_price=float(r.get("course_price") or 0),
        instructor_name=r.get("instructor_name"),
    )


def _check_seat(cur, *, student_id: int, course_id: int) -> None:
    """Duplicate + capacity check; caller must hold the write lock."""

    cur.execute(
        """
        SELECT enrollment_id FROM enrollments
        WHERE student_id=? AND course_id=? AND status='Active'
        """,
        (student_id, course_id),
    )
    if fetchone(cur):
        raise DuplicateEnrollment("Student already has an active enrollment in this course")

    cur.execute(
        """
        SELECT
            c.capacity,
            (SELECT COUNT(1) FROM enrollments e WHERE e.course_id = c.course_id AND e.status = 'Active') AS active
        FROM courses c
        WHERE c.course_id=?
        """,
        (course_id,),
    )
    r = fetchone(cur)
    if not r:
        raise NotFound("Course not found")
    if int(r["active"] or 0) >= int(r["capacity"] or 0):
        raise CapacityExceeded("Course is full")


class SQLiteEnrollmentRepository(EnrollmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, enrollment_id: int) -> Optional[Enrollment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT enrollment_id, student_id, course_id, status, enrolled_on, created_at
                FROM enrollments
                WHERE enrollment_id=?
                """,
                (int(enrollment_id),),
            )
            r = fetchone(cur)
            return _to_enrollment(r) if r else None

    def get_detail(self, enrollment_id: int) -> Optional[EnrollmentDetail]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_DETAIL_SELECT} WHERE e.enrollment_id=?", (int(enrollment_id),))
            r = fetchone(cur)
            return _to_detail(r) if r else None

    def list_for_course(self, course_id: int, *, active_only: bool = True) -> Sequence[EnrollmentDetail]:
        clauses = ["e.course_id=?"]
        if active_only:
            clauses.append("e.status='Active'")

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_DETAIL_SELECT} WHERE {' AND '.join(clauses)} ORDER BY s.name ASC, e.enrollment_id ASC",
                (int(course_id),),
            )
            return [_to_detail(r) for r in fetchall(cur)]

    def list_for_student(self, student_id: int) -> Sequence[EnrollmentDetail]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_DETAIL_SELECT} WHERE e.student_id=? ORDER BY e.enrollment_id DESC",
                (int(student_id),),
            )
            return [_to_detail(r) for r in fetchall(cur)]

    def search(
        self,
        *,
        student_id: Optional[int] = None,
        course_id: Optional[int] = None,
        status: Optional[EnrollmentStatus] = None,
        q: Optional[str] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> EnrollmentPage:
        clauses: list[str] = []
        params: list[object] = []

        if student_id:
            clauses.append("e.student_id=?")
            params.append(int(student_id))
        if course_id:
            clauses.append("e.course_id=?")
            params.append(int(course_id))
        if status is not None:
            clauses.append("e.status=?")
            params.append(status.value)
        if q:
            like = f"%{q.strip()}%"
            clauses.append("(s.name LIKE ? OR s.document LIKE ? OR c.name LIKE ?)")
            params.extend([like, like, like])

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS total {_DETAIL_FROM} {where}", tuple(params))
            total_row = fetchone(cur)
            cur.execute(
                f"{_DETAIL_SELECT} {where} ORDER BY e.enrollment_id DESC LIMIT ? OFFSET ?",
                tuple(params) + (int(limit), int(offset)),
            )
            items = [_to_detail(r) for r in fetchall(cur)]

        return EnrollmentPage(
            items=items,
            total=int(total_row["total"]) if total_row else 0,
            limit=int(limit),
            offset=int(offset),
        )

    def count_active(self, course_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT COUNT(1) AS n FROM enrollments WHERE course_id=? AND status='Active'",
                (int(course_id),),
            )
            r = fetchone(cur)
            return int(r["n"]) if r else 0

    def create_active(self, *, student_id: int, course_id: int, enrolled_on: str) -> int:
        with db_cursor(self._conn_factory, immediate=True) as (_, cur):
            _check_seat(cur, student_id=int(student_id), course_id=int(course_id))
            try:
                cur.execute(
                    """
                    INSERT INTO enrollments(student_id, course_id, status, enrolled_on)
                    VALUES(?,?,'Active',?)
                    """,
                    (int(student_id), int(course_id), enrolled_on),
                )
            except sqlite3.IntegrityError:
                # Partial unique index on active (student, course) pairs.
                raise DuplicateEnrollment("Student already has an active enrollment in this course")
            return int(cur.lastrowid)

    def activate(self, enrollment_id: int) -> bool:
        with db_cursor(self._conn_factory, immediate=True) as (_, cur):
            cur.execute(
                "SELECT student_id, course_id, status FROM enrollments WHERE enrollment_id=?",
                (int(enrollment_id),),
            )
            r = fetchone(cur)
            if not r:
                return False
            if r["status"] == EnrollmentStatus.ACTIVE.value:
                return True

            _check_seat(cur, student_id=int(r["student_id"]), course_id=int(r["course_id"]))
            try:
                cur.execute(
                    "UPDATE enrollments SET status='Active' WHERE enrollment_id=?",
                    (int(enrollment_id),),
                )
            except sqlite3.IntegrityError:
                raise DuplicateEnrollment("Student already has an active enrollment in this course")
            return cur.rowcount > 0

    def deactivate(self, enrollment_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE enrollments SET status='Inactive' WHERE enrollment_id=?",
                (int(enrollment_id),),
            )
            return cur.rowcount > 0
