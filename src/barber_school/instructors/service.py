from __future__ import annotations

from typing import Optional, Sequence

from ..common.validators import optional_text, parse_record_status, require_non_empty
from ..core.exceptions import NotFound
from .model import Instructor
from .repository import InstructorRepository


class InstructorService:
    def __init__(self, instructors: InstructorRepository):
        self._instructors = instructors

    def list_all(self, *, q: Optional[str] = None, status: Optional[str] = None) -> Sequence[Instructor]:
        return self._instructors.list_all(q=optional_text(q), status=parse_record_status(status) if status else None)

    def create(
        self,
        *,
        name: str,
        document: Optional[str] = None,
        phone: Optional[str] = None,
        email: Optional[str] = None,
        status: Optional[str] = None,
    ) -> int:
        return self._instructors.create(
            name=require_non_empty(name, "Name"),
            document=optional_text(document),
            phone=optional_text(phone),
            email=optional_text(email),
            status=parse_record_status(status),
        )

    def update(
        self,
        *,
        instructor_id: int,
        name: str,
        document: Optional[str] = None,
        phone: Optional[str] = None,
        email: Optional[str] = None,
        status: Optional[str] = None,
    ) -> None:
        ok = self._instructors.update(
            instructor_id=int(instructor_id),
            name=require_non_empty(name, "Name"),
            document=optional_text(document),
            phone=optional_text(phone),
            email=optional_text(email),
            status=parse_record_status(status),
        )
        if not ok:
            raise NotFound("Instructor not found")
