from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Optional

from ..core.enums import RecordStatus


@dataclass(frozen=True)
class Student:
    """Domain entity: a student profile. ``document`` is the national id, unique."""

    student_id: int
    name: str
    document: str
    phone: Optional[str]
    email: Optional[str]
    joined_on: str
    status: RecordStatus = RecordStatus.ACTIVE

    def to_dict(self) -> dict:
        out = asdict(self)
        out["status"] = self.status.value
        return out
