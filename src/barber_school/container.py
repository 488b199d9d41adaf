from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional

from .attendance.service import AttendanceService
from .attendance.sqlite_attendance_repository import SQLiteAttendanceRepository
from .core.constants import DEFAULT_BUSY_TIMEOUT_MS
from .courses.service import CourseService
from .courses.sqlite_course_repository import SQLiteCourseRepository
from .courses.state import CourseStateClassifier
from .database.connection import DBConfig, DatabaseConnection
from .enrollments.service import EnrollmentService
from .enrollments.sqlite_enrollment_repository import SQLiteEnrollmentRepository
from .instructors.service import InstructorService
from .instructors.sqlite_instructor_repository import SQLiteInstructorRepository
from .students.service import StudentService
from .students.sqlite_student_repository import SQLiteStudentRepository
from .users.service import AuthService
from .users.sqlite_user_repository import SQLiteUserRepository


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    users_repo: SQLiteUserRepository
    instructors_repo: SQLiteInstructorRepository
    students_repo: SQLiteStudentRepository
    courses_repo: SQLiteCourseRepository
    enrollments_repo: SQLiteEnrollmentRepository
    attendance_repo: SQLiteAttendanceRepository

    classifier: CourseStateClassifier
    auth_service: AuthService
    instructor_service: InstructorService
    student_service: StudentService
    course_service: CourseService
    enrollment_service: EnrollmentService
    attendance_service: AttendanceService


def build_container(*, db_config: dict, clock: Optional[Callable[[], date]] = None) -> Container:
    config = DBConfig(
        path=str(db_config["path"]),
        busy_timeout_ms=int(db_config.get("busy_timeout_ms", DEFAULT_BUSY_TIMEOUT_MS)),
    )
    conn = DatabaseConnection.get_instance(config)

    users_repo = SQLiteUserRepository(conn)
    instructors_repo = SQLiteInstructorRepository(conn)
    students_repo = SQLiteStudentRepository(conn)
    courses_repo = SQLiteCourseRepository(conn)
    enrollments_repo = SQLiteEnrollmentRepository(conn)
    attendance_repo = SQLiteAttendanceRepository(conn)

    classifier = CourseStateClassifier(clock=clock)
    auth_service = AuthService(users_repo)
    instructor_service = InstructorService(instructors_repo)
    student_service = StudentService(students_repo, clock=clock)
    course_service = CourseService(courses_repo, instructors_repo, classifier=classifier)
    enrollment_service = EnrollmentService(enrollments_repo, students_repo, courses_repo, classifier=classifier)
    attendance_service = AttendanceService(attendance_repo, enrollments_repo, courses_repo)

    return Container(
        conn=conn,
        users_repo=users_repo,
        instructors_repo=instructors_repo,
        students_repo=students_repo,
        courses_repo=courses_repo,
        enrollments_repo=enrollments_repo,
        attendance_repo=attendance_repo,
        classifier=classifier,
        auth_service=auth_service,
        instructor_service=instructor_service,
        student_service=student_service,
        course_service=course_service,
        enrollment_service=enrollment_service,
        attendance_service=attendance_service,
    )
