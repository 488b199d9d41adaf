from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import RecordStatus
from ..database.connection import DatabaseConnection
from ..database.sqlite_base import db_cursor, fetchall, fetchone
from .model import Instructor
from .repository import InstructorRepository


def _to_instructor(r: dict) -> Instructor:
    return Instructor(
        instructor_id=int(r["instructor_id"]),
        name=r["name"],
        document=r.get("document"),
        phone=r.get("phone"),
        email=r.get("email"),
        status=RecordStatus(r.get("status") or RecordStatus.ACTIVE.value),
    )


class SQLiteInstructorRepository(InstructorRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, instructor_id: int) -> Optional[Instructor]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT instructor_id, name, document, phone, email, status
                FROM instructors
                WHERE instructor_id=?
                """,
                (int(instructor_id),),
            )
            r = fetchone(cur)
            return _to_instructor(r) if r else None

    def list_all(self, *, q: Optional[str] = None, status: Optional[RecordStatus] = None) -> Sequence[Instructor]:
        clauses = ["1=1"]
        params: list[object] = []
        if q:
            like = f"%{q.strip()}%"
            clauses.append("(name LIKE ? OR document LIKE ?)")
            params.extend([like, like])
        if status is not None:
            clauses.append("status=?")
            params.append(status.value)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT instructor_id, name, document, phone, email, status
                FROM instructors
                WHERE {' AND '.join(clauses)}
                ORDER BY name ASC
                """,
                tuple(params),
            )
            return [_to_instructor(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        name: str,
        document: Optional[str],
        phone: Optional[str],
        email: Optional[str],
        status: RecordStatus,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO instructors(name, document, phone, email, status)
                VALUES(?,?,?,?,?)
                """,
                (name, document, phone, email, status.value),
            )
            return int(cur.lastrowid)

    def update(
        self,
        *,
        instructor_id: int,
        name: str,
        document: Optional[str],
        phone: Optional[str],
        email: Optional[str],
        status: RecordStatus,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE instructors
                SET name=?, document=?, phone=?, email=?, status=?
                WHERE instructor_id=?
                """,
                (name, document, phone, email, status.value, int(instructor_id)),
            )
            return cur.rowcount > 0
