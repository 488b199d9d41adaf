from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..core.enums import AttendanceState


@dataclass(frozen=True)
class AttendanceRecord:
    """Persisted attendance for one enrollment on one class date."""

    attendance_id: int
    enrollment_id: int
    class_date: str
    state: AttendanceState
    note: Optional[str] = None


@dataclass(frozen=True)
class AttendanceEntry:
    """One cleaned record of a bulk save batch."""

    enrollment_id: int
    state: AttendanceState
    note: Optional[str] = None


@dataclass(frozen=True)
class GridRow:
    enrollment_id: int
    student_id: int
    student_name: str
    student_doc: str
    cells: dict[str, AttendanceState]
    notes: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "enrollment_id": self.enrollment_id,
            "student_id": self.student_id,
            "student_name": self.student_name,
            "student_doc": self.student_doc,
            "cells": {d: s.value for d, s in self.cells.items()},
            "notes": dict(self.notes),
        }


@dataclass(frozen=True)
class AttendanceGrid:
    """Every (active enrollment x class date) cell of a course."""

    course_id: int
    course_name: str
    class_dates: tuple[str, ...]
    rows: tuple[GridRow, ...]
    warning: Optional[str] = None

    @property
    def cell_count(self) -> int:
        return sum(len(r.cells) for r in self.rows)

    def to_dict(self) -> dict:
        out = {
            "course_id": self.course_id,
            "course_name": self.course_name,
            "class_dates": list(self.class_dates),
            "rows": [r.to_dict() for r in self.rows],
        }
        if self.warning:
            out["warning"] = self.warning
        return out


@dataclass(frozen=True)
class RosterRow:
    """Daily attendance sheet line: an active enrollment and that day's mark."""

    enrollment_id: int
    student_id: int
    student_name: str
    student_doc: str
    student_phone: Optional[str]
    state: AttendanceState
    note: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "enrollment_id": self.enrollment_id,
            "student_id": self.student_id,
            "student_name": self.student_name,
            "student_doc": self.student_doc,
            "student_phone": self.student_phone,
            "state": self.state.value,
            "note": self.note or "",
        }
