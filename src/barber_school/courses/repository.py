from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Course, CourseDraft, CourseListRow


class CourseRepository(Protocol):
    def get_by_id(self, course_id: int) -> Optional[Course]:
        raise NotImplementedError

    def get_row(self, course_id: int) -> Optional[CourseListRow]:
        """Course with instructor name and active-enrollment count."""

        raise NotImplementedError

    def list_rows(self, *, q: Optional[str] = None, instructor_id: Optional[int] = None) -> Sequence[CourseListRow]:
        raise NotImplementedError

    def create(self, draft: CourseDraft) -> int:
        raise NotImplementedError

    def update(self, course_id: int, draft: CourseDraft) -> bool:
        raise NotImplementedError

    def delete(self, course_id: int) -> bool:
        raise NotImplementedError

    def count_enrollments(self, course_id: int) -> int:
        """All enrollments (any status) referencing the course."""

        raise NotImplementedError
