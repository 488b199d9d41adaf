from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.sqlite_base import db_cursor, fetchall, fetchone
from .model import Course, CourseDraft, CourseListRow
from .repository import CourseRepository

_COURSE_COLUMNS = """
    c.course_id, c.name, c.level, c.start_date, c.weekday_pattern, c.class_count,
    c.capacity, c.price, c.instructor_id, c.start_time, c.duration_minutes
"""

_LIST_SELECT = f"""
    SELECT
        {_COURSE_COLUMNS},
        i.name AS instructor_name,
        (
            SELECT COUNT(1)
            FROM enrollments e
            WHERE e.course_id = c.course_id AND e.status = 'Active'
        ) AS active_enrollments
    FROM courses c
    LEFT JOIN instructors i ON i.instructor_id = c.instructor_id
"""


def _to_course(r: dict) -> Course:
    return Course(
        course_id=int(r["course_id"]),
        name=r["name"],
        level=r.get("level"),
        start_date=str(r.get("start_date") or ""),
        weekday_pattern=r.get("weekday_pattern") or "",
        class_count=int(r.get("class_count") or 0),
        capacity=int(r.get("capacity") or 0),
        price=float(r.get("price") or 0),
        instructor_id=int(r["instructor_id"]) if r.get("instructor_id") is not None else None,
        start_time=r.get("start_time"),
        duration_minutes=int(r["duration_minutes"]) if r.get("duration_minutes") is not None else None,
    )


def _to_row(r: dict) -> CourseListRow:
    return CourseListRow(
        course=_to_course(r),
        instructor_name=r.get("instructor_name"),
        active_enrollments=int(r.get("active_enrollments") or 0),
    )


def _draft_params(draft: CourseDraft) -> tuple:
    return (
        draft.name,
        draft.level,
        draft.start_date,
        draft.weekday_pattern,
        int(draft.class_count),
        int(draft.capacity),
        float(draft.price),
        int(draft.instructor_id),
        draft.start_time,
        draft.duration_minutes,
    )


class SQLiteCourseRepository(CourseRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, course_id: int) -> Optional[Course]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COURSE_COLUMNS} FROM courses c WHERE c.course_id=?", (int(course_id),))
            r = fetchone(cur)
            return _to_course(r) if r else None

    def get_row(self, course_id: int) -> Optional[CourseListRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_LIST_SELECT} WHERE c.course_id=? LIMIT 1", (int(course_id),))
            r = fetchone(cur)
            return _to_row(r) if r else None

    def list_rows(self, *, q: Optional[str] = None, instructor_id: Optional[int] = None) -> Sequence[CourseListRow]:
        clauses: list[str] = []
        params: list[object] = []

        if q:
            clauses.append("c.name LIKE ?")
            params.append(f"%{q.strip()}%")
        if instructor_id:
            clauses.append("c.instructor_id=?")
            params.append(int(instructor_id))

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_LIST_SELECT} {where} ORDER BY c.course_id DESC", tuple(params))
            return [_to_row(r) for r in fetchall(cur)]

    def create(self, draft: CourseDraft) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO courses(
                    name, level, start_date, weekday_pattern, class_count, capacity,
                    price, instructor_id, start_time, duration_minutes
                )
                VALUES(?,?,?,?,?,?,?,?,?,?)
                """,
                _draft_params(draft),
            )
            return int(cur.lastrowid)

    def update(self, course_id: int, draft: CourseDraft) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE courses
                SET name=?, level=?, start_date=?, weekday_pattern=?, class_count=?, capacity=?,
                    price=?, instructor_id=?, start_time=?, duration_minutes=?,
                    updated_at=datetime('now')
                WHERE course_id=?
                """,
                _draft_params(draft) + (int(course_id),),
            )
            return cur.rowcount > 0

    def delete(self, course_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM courses WHERE course_id=?", (int(course_id),))
            return cur.rowcount > 0

    def count_enrollments(self, course_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(1) AS n FROM enrollments WHERE course_id=?", (int(course_id),))
            r = fetchone(cur)
            return int(r["n"]) if r else 0
