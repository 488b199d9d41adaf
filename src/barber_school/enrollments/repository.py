from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import EnrollmentStatus
from .model import Enrollment, EnrollmentDetail, EnrollmentPage


class EnrollmentRepository(Protocol):
    """Enrollment persistence.

    ``create_active`` and ``activate`` must run the capacity check and the write
    as one serialized unit: two concurrent calls for the last free seat cannot
    both succeed.
    """

    def get_by_id(self, enrollment_id: int) -> Optional[Enrollment]:
        raise NotImplementedError

    def get_detail(self, enrollment_id: int) -> Optional[EnrollmentDetail]:
        raise NotImplementedError

    def list_for_course(self, course_id: int, *, active_only: bool = True) -> Sequence[EnrollmentDetail]:
        """Ordered by student name."""

        raise NotImplementedError

    def list_for_student(self, student_id: int) -> Sequence[EnrollmentDetail]:
        raise NotImplementedError

    def search(
        self,
        *,
        student_id: Optional[int] = None,
        course_id: Optional[int] = None,
        status: Optional[EnrollmentStatus] = None,
        q: Optional[str] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> EnrollmentPage:
        raise NotImplementedError

    def count_active(self, course_id: int) -> int:
        raise NotImplementedError

    def create_active(self, *, student_id: int, course_id: int, enrolled_on: str) -> int:
        """Insert an Active enrollment.

        Raises DuplicateEnrollment or CapacityExceeded; returns the new id.
        """

        raise NotImplementedError

    def activate(self, enrollment_id: int) -> bool:
        """Inactive -> Active with the same checks as create_active."""

        raise NotImplementedError

    def deactivate(self, enrollment_id: int) -> bool:
        raise NotImplementedError
