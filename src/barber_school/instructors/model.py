from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Optional

from ..core.enums import RecordStatus


@dataclass(frozen=True)
class Instructor:
    instructor_id: int
    name: str
    document: Optional[str]
    phone: Optional[str]
    email: Optional[str]
    status: RecordStatus = RecordStatus.ACTIVE

    def to_dict(self) -> dict:
        out = asdict(self)
        out["status"] = self.status.value
        return out
