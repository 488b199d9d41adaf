from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import AttendanceState
from ..database.connection import DatabaseConnection
from ..database.sqlite_base import db_cursor, fetchall, placeholders
from .model import AttendanceEntry, AttendanceRecord
from .repository import AttendanceRepository

# Stay well below SQLite's host-parameter limit.
_CHUNK = 500


class SQLiteAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_enrollments(
        self,
        enrollment_ids: Sequence[int],
        *,
        class_date: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        ids = [int(i) for i in enrollment_ids]
        if not ids:
            return []

        out: list[AttendanceRecord] = []
        with db_cursor(self._conn_factory) as (_, cur):
            for start in range(0, len(ids), _CHUNK):
                chunk = ids[start:start + _CHUNK]
                sql = f"""
                    SELECT attendance_id, enrollment_id, class_date, state, note
                    FROM attendance
                    WHERE enrollment_id IN ({placeholders(chunk)})
                """
                params: list[object] = list(chunk)
                if class_date is not None:
                    sql += " AND class_date=?"
                    params.append(class_date)
                cur.execute(sql, tuple(params))
                out.extend(
                    AttendanceRecord(
                        attendance_id=int(r["attendance_id"]),
                        enrollment_id=int(r["enrollment_id"]),
                        class_date=r["class_date"],
                        state=AttendanceState(r["state"]),
                        note=r.get("note"),
                    )
                    for r in fetchall(cur)
                )
        return out

    def bulk_upsert(self, *, class_date: str, entries: Sequence[AttendanceEntry]) -> int:
        written = 0
        with db_cursor(self._conn_factory, immediate=True) as (_, cur):
            for e in entries:
                # Enrollment must still be active at write time; the SELECT yields no row otherwise.
                cur.execute(
                    """
                    INSERT INTO attendance(enrollment_id, class_date, state, note)
                    SELECT ?, ?, ?, ?
                    WHERE EXISTS (SELECT 1 FROM enrollments WHERE enrollment_id=? AND status='Active')
                    ON CONFLICT(enrollment_id, class_date)
                    DO UPDATE SET state=excluded.state, note=excluded.note, updated_at=datetime('now')
                    """,
                    (int(e.enrollment_id), class_date, e.state.value, e.note, int(e.enrollment_id)),
                )
                written += max(cur.rowcount, 0)
        return written
