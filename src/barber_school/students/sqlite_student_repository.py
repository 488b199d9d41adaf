from __future__ import annotations

import sqlite3
from typing import Optional, Sequence

from ..core.enums import RecordStatus
from ..core.exceptions import DuplicateDocument
from ..database.connection import DatabaseConnection
from ..database.sqlite_base import db_cursor, fetchall, fetchone
from .model import Student
from .repository import StudentRepository

_COLUMNS = "student_id, name, document, phone, email, joined_on, status"


def _to_student(r: dict) -> Student:
    return Student(
        student_id=int(r["student_id"]),
        name=r["name"],
        document=r["document"],
        phone=r.get("phone"),
        email=r.get("email"),
        joined_on=str(r.get("joined_on") or ""),
        status=RecordStatus(r.get("status") or RecordStatus.ACTIVE.value),
    )


class SQLiteStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, student_id: int) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE student_id=?", (int(student_id),))
            r = fetchone(cur)
            return _to_student(r) if r else None

    def get_by_document(self, document: str) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE document=?", (document,))
            r = fetchone(cur)
            return _to_student(r) if r else None

    def search(self, *, q: Optional[str] = None) -> Sequence[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            if q:
                like = f"%{q.strip()}%"
                cur.execute(
                    f"""
                    SELECT {_COLUMNS}
                    FROM students
                    WHERE name LIKE ? OR document LIKE ?
                    ORDER BY name ASC
                    """,
                    (like, like),
                )
            else:
                cur.execute(f"SELECT {_COLUMNS} FROM students ORDER BY name ASC")
            return [_to_student(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        name: str,
        document: str,
        phone: Optional[str],
        email: Optional[str],
        joined_on: str,
        status: RecordStatus,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                cur.execute(
                    """
                    INSERT INTO students(name, document, phone, email, joined_on, status)
                    VALUES(?,?,?,?,?,?)
                    """,
                    (name, document, phone, email, joined_on, status.value),
                )
            except sqlite3.IntegrityError:
                raise DuplicateDocument("A student with that document already exists")
            return int(cur.lastrowid)

    def update(
        self,
        *,
        student_id: int,
        name: str,
        document: str,
        phone: Optional[str],
        email: Optional[str],
        status: RecordStatus,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                cur.execute(
                    """
                    UPDATE students
                    SET name=?, document=?, phone=?, email=?, status=?
                    WHERE student_id=?
                    """,
                    (name, document, phone, email, status.value, int(student_id)),
                )
            except sqlite3.IntegrityError:
                raise DuplicateDocument("A student with that document already exists")
            return cur.rowcount > 0
