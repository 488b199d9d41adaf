from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AttendanceEntry, AttendanceRecord


class AttendanceRepository(Protocol):
    def list_for_enrollments(
        self,
        enrollment_ids: Sequence[int],
        *,
        class_date: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def bulk_upsert(self, *, class_date: str, entries: Sequence[AttendanceEntry]) -> int:
        """Insert or overwrite (enrollment_id, class_date) rows.

        All entries are applied in one transaction or none are. Entries whose
        enrollment is not active when the transaction runs are skipped.
        Returns the number of rows written.
        """

        raise NotImplementedError
