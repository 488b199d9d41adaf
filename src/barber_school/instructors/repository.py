from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import RecordStatus
from .model import Instructor


class InstructorRepository(Protocol):
    def get_by_id(self, instructor_id: int) -> Optional[Instructor]:
        raise NotImplementedError

    def list_all(self, *, q: Optional[str] = None, status: Optional[RecordStatus] = None) -> Sequence[Instructor]:
        raise NotImplementedError

    def create(
        self,
        *,
        name: str,
        document: Optional[str],
        phone: Optional[str],
        email: Optional[str],
        status: RecordStatus,
    ) -> int:
        raise NotImplementedError

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
        raise NotImplementedError
