from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import RecordStatus
from .model import Student


class StudentRepository(Protocol):
    def get_by_id(self, student_id: int) -> Optional[Student]:
        raise NotImplementedError

    def get_by_document(self, document: str) -> Optional[Student]:
        raise NotImplementedError

    def search(self, *, q: Optional[str] = None) -> Sequence[Student]:
        """Match name or document; everything when q is empty."""

        raise NotImplementedError

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
        """Raises DuplicateDocument when the document is already registered."""

        raise NotImplementedError

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
        raise NotImplementedError
